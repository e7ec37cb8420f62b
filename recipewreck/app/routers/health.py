from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from recipewreck.app.deps import get_role_repository
from recipewreck.app.domain.errors import AiRoleRepositoryError
from recipewreck.app.infra.db.base import AiRoleRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/api/test-db")
async def test_db(repository: AiRoleRepository = Depends(get_role_repository)):
    try:
        await run_in_threadpool(repository.ping)
    except AiRoleRepositoryError as exc:
        logger.error("Database connection error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "Failed to connect to the document store",
                "error": str(exc),
            },
        )
    return {"status": "success", "message": "Successfully connected to the document store!"}
