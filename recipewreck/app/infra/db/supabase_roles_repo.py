from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from pydantic import SecretStr, ValidationError
from supabase import Client, SupabaseException, create_client

from recipewreck.app.config import settings
from recipewreck.app.domain.errors import (
    AiRoleNotFoundError,
    AiRoleRepositoryError,
    InvalidAiRoleIdError,
    StoreConfigurationError,
)
from recipewreck.app.domain.models import AiRole, AiRoleCandidate
from recipewreck.app.infra.db.base import AiRoleRepository
from recipewreck.services.persist_models import AiRoleRecord

logger = logging.getLogger(__name__)

_STORE_ERRORS = (APIError, httpx.HTTPError, ConnectionError, TimeoutError)


def _secret_value(value: SecretStr | None) -> str:
    return value.get_secret_value().strip() if value is not None else ""


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _row_to_role(row: dict[str, object]) -> AiRole:
    tags = row.get("tags") or []
    return AiRole(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        system_prompt_text=str(row.get("system_prompt_text") or ""),
        category=str(row.get("category") or "Custom"),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        version=int(row.get("version") or 1),
        created_by=str(row.get("created_by") or ""),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _checked_id(role_id: str) -> str:
    try:
        return str(UUID(role_id))
    except (TypeError, ValueError) as error:
        raise InvalidAiRoleIdError(role_id) from error


def _create_supabase_client() -> Client:
    missing = []
    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    service_key = _secret_value(settings.SUPABASE_SERVICE_ROLE_KEY)
    if not service_key:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")
    if missing:
        raise StoreConfigurationError(missing)
    try:
        return create_client(str(settings.SUPABASE_URL), service_key)
    except SupabaseException as error:
        raise AiRoleRepositoryError("connect", str(error)) from error


class SupabaseAiRoleRepository(AiRoleRepository):
    """AI roles stored as rows of a Supabase (Postgres) table."""

    def __init__(self, client: Client | None = None, table_name: str | None = None):
        self._client = client
        self.table_name = table_name or settings.AI_ROLES_TABLE

    @property
    def client(self) -> Client:
        # Connect on first use so a missing store never blocks generation
        if self._client is None:
            self._client = _create_supabase_client()
            logger.info("Supabase client created for table %s", self.table_name)
        return self._client

    def save(self, candidate: AiRoleCandidate) -> tuple[str, datetime]:
        try:
            record = AiRoleRecord(
                title=candidate.title,
                description=candidate.description,
                system_prompt_text=candidate.system_prompt_text,
                category=candidate.category,
                tags=candidate.tags,
                version=candidate.version,
                created_by=candidate.created_by,
            )
        except ValidationError as error:
            raise AiRoleRepositoryError("insert", f"record rejected: {error}") from error

        try:
            result = self.client.table(self.table_name).insert(record.model_dump()).execute()
        except _STORE_ERRORS as error:
            logger.error("Store error inserting AI role: %s", error)
            raise AiRoleRepositoryError("insert", str(error)) from error

        if not result.data:
            raise AiRoleRepositoryError("insert", "no row returned")

        row = result.data[0]
        created_at = _parse_datetime(row.get("created_at")) or _now_utc()
        logger.info("AI role saved: id=%s, title=%s", row["id"], record.title)
        return str(row["id"]), created_at

    def list_roles(self) -> list[AiRole]:
        try:
            result = (
                self.client.table(self.table_name)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except _STORE_ERRORS as error:
            raise AiRoleRepositoryError("list", str(error)) from error
        return [_row_to_role(row) for row in result.data or []]

    def update(self, role_id: str, changes: dict[str, object]) -> AiRole:
        checked = _checked_id(role_id)
        payload = {**changes, "updated_at": _now_utc().isoformat()}
        try:
            result = (
                self.client.table(self.table_name)
                .update(payload)
                .eq("id", checked)
                .execute()
            )
        except _STORE_ERRORS as error:
            raise AiRoleRepositoryError("update", str(error)) from error

        if not result.data:
            raise AiRoleNotFoundError(role_id)
        logger.info("AI role updated: id=%s, fields=%s", checked, sorted(changes))
        return _row_to_role(result.data[0])

    def delete(self, role_id: str) -> None:
        checked = _checked_id(role_id)
        try:
            result = self.client.table(self.table_name).delete().eq("id", checked).execute()
        except _STORE_ERRORS as error:
            raise AiRoleRepositoryError("delete", str(error)) from error

        if not result.data:
            raise AiRoleNotFoundError(role_id)
        logger.info("AI role deleted: id=%s", checked)

    def ping(self) -> None:
        try:
            self.client.table(self.table_name).select("id").limit(1).execute()
        except _STORE_ERRORS as error:
            raise AiRoleRepositoryError("ping", str(error)) from error
