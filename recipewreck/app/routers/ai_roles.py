from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from recipewreck.app.config import settings
from recipewreck.app.deps import get_role_repository
from recipewreck.app.domain.errors import (
    AiRoleNotFoundError,
    AiRoleRepositoryError,
    InvalidAiRoleIdError,
)
from recipewreck.app.infra.db.base import AiRoleRepository
from recipewreck.app.schemas.ai_roles import AiRoleResponse, DeleteRoleResponse
from recipewreck.services.persist_models import AiRoleChanges

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai-roles", tags=["ai-roles"])


def _internal_detail(error: Exception) -> str:
    return str(error) if settings.is_development else "An internal server error occurred"


def _message(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


@router.get("", response_model=list[AiRoleResponse])
async def list_ai_roles(repository: AiRoleRepository = Depends(get_role_repository)):
    try:
        roles = await run_in_threadpool(repository.list_roles)
    except AiRoleRepositoryError as exc:
        logger.error("Failed to fetch AI roles: %s", exc)
        return _message(500, "Failed to fetch AI roles", error=str(exc))
    return [AiRoleResponse.from_role(role) for role in roles]


@router.put("/{role_id}", response_model=AiRoleResponse)
async def update_ai_role(
    role_id: str,
    body: dict[str, Any] = Body(...),
    repository: AiRoleRepository = Depends(get_role_repository),
):
    if not body:
        return _message(400, "Request body cannot be empty")

    title = body.get("title")
    if "title" in body and (not isinstance(title, str) or not title.strip()):
        return _message(400, "Title must be a non-empty string")

    try:
        changes = AiRoleChanges.model_validate(body)
    except ValidationError as exc:
        errors = [
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
            for error in exc.errors()
        ]
        return _message(400, "Validation failed", errors=errors)

    try:
        role = await run_in_threadpool(repository.update, role_id, changes.to_columns())
    except InvalidAiRoleIdError:
        return _message(400, "Invalid Role ID format")
    except AiRoleNotFoundError:
        return _message(404, "AI Role not found")
    except AiRoleRepositoryError as exc:
        logger.error("Failed to update AI role %s: %s", role_id, exc)
        return _message(500, "Failed to update AI role", error=_internal_detail(exc))

    return AiRoleResponse.from_role(role)


@router.delete("/{role_id}", response_model=DeleteRoleResponse)
async def delete_ai_role(
    role_id: str,
    repository: AiRoleRepository = Depends(get_role_repository),
):
    try:
        await run_in_threadpool(repository.delete, role_id)
    except InvalidAiRoleIdError:
        return _message(400, "Invalid Role ID format")
    except AiRoleNotFoundError:
        return _message(404, "AI Role not found")
    except AiRoleRepositoryError as exc:
        logger.error("Failed to delete AI role %s: %s", role_id, exc)
        return _message(500, "Failed to delete AI role", error=_internal_detail(exc))

    return DeleteRoleResponse(message="AI Role deleted successfully", deletedRoleId=role_id)
