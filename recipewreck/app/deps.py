# recipewreck/app/deps.py

from __future__ import annotations

from typing import Optional

from pydantic import SecretStr

from recipewreck.app.config import settings
from recipewreck.app.infra.db.base import AiRoleRepository
from recipewreck.app.infra.db.supabase_roles_repo import SupabaseAiRoleRepository
from recipewreck.services.genai_client import GenAIClient

_role_repository: AiRoleRepository | None = None


def get_role_repository() -> AiRoleRepository:
    global _role_repository
    if _role_repository is None:
        _role_repository = SupabaseAiRoleRepository()
    return _role_repository


def _secret(value: Optional[SecretStr]) -> str:
    return value.get_secret_value().strip() if value is not None else ""


def get_recipe_client() -> Optional[GenAIClient]:
    """GenAI client for /api/generate, or None when no key is configured."""
    api_key = _secret(settings.GOOGLE_GENAI_API_KEY)
    if not api_key:
        return None
    return GenAIClient(
        api_key=api_key,
        text_model=settings.GENAI_TEXT_MODEL,
        image_model=settings.GENAI_IMAGE_MODEL,
    )


def get_onboarding_client() -> Optional[GenAIClient]:
    """GenAI client for the onboarding chat, or None when no key is configured."""
    api_key = _secret(settings.GOOGLE_AI_API_KEY)
    if not api_key:
        return None
    return GenAIClient(api_key=api_key, text_model=settings.GOOGLE_AI_MODEL)
