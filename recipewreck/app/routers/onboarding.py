from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from recipewreck.app.config import settings
from recipewreck.app.deps import get_onboarding_client, get_role_repository
from recipewreck.app.infra.db.base import AiRoleRepository
from recipewreck.app.schemas.onboarding import (
    AiRoleJson,
    OnboardingChatRequest,
    OnboardingChatResponse,
)
from recipewreck.services.errors import GenerationFailedError
from recipewreck.services.genai_client import GenAIClient
from recipewreck.services.onboarding_chat import (
    finalize_candidate,
    run_onboarding_chat,
    sanitize_input,
)
from recipewreck.services.role_splitter import fallback_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


def _fallback_json(reason: str, user_input: str, repository: AiRoleRepository) -> dict:
    candidate = fallback_role(reason, user_input)
    finalize_candidate(candidate, repository)
    return AiRoleJson.from_candidate(candidate).model_dump()


@router.post("/chat", response_model=OnboardingChatResponse)
async def onboarding_chat(
    payload: OnboardingChatRequest,
    client: Optional[GenAIClient] = Depends(get_onboarding_client),
    repository: AiRoleRepository = Depends(get_role_repository),
):
    if client is None:
        logger.error("GOOGLE_AI_API_KEY is not set.")
        return JSONResponse(
            status_code=500,
            content={
                "message": "Configuration Error: The AI service is not available due to a missing API key. Please contact support.",
                "aiResponseText": "I'm unable to process your request at this moment. The AI capabilities are not properly configured.",
                "aiRoleJson": _fallback_json(
                    "Configuration Error", "AI system not configured - API key missing.", repository
                ),
            },
        )

    try:
        result = await run_in_threadpool(
            run_onboarding_chat,
            client,
            repository,
            payload.message,
            payload.history_payload(),
        )
    except GenerationFailedError as exc:
        logger.exception("Error calling the generative model for onboarding chat")
        return JSONResponse(
            status_code=500,
            content={
                "aiResponseText": f"Error communicating with AI model: {exc}",
                "aiRoleJson": _fallback_json(
                    f"LLM call failed: {exc}", sanitize_input(payload.message), repository
                ),
            },
        )
    except Exception as exc:
        logger.exception("Error in onboarding chat API")
        detail = str(exc) if settings.is_development else "An unexpected error occurred. Please try again later."
        return JSONResponse(status_code=500, content={"error": detail})

    return OnboardingChatResponse(
        aiResponseText=result.conversational_text,
        aiRoleJson=AiRoleJson.from_candidate(result.candidate),
    )
