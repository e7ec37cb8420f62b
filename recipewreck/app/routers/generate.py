from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from recipewreck.app.deps import get_recipe_client
from recipewreck.app.schemas.generate import ErrorResponse, GenerateRequest, RecipeResponse
from recipewreck.services.genai_client import GenAIClient
from recipewreck.services.recipe_generator import generate_recipe

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])

GENERATION_FAILED = "Generation failed"


@router.post(
    "/generate",
    response_model=RecipeResponse,
    responses={500: {"model": ErrorResponse}},
)
async def generate(
    payload: GenerateRequest,
    client: Optional[GenAIClient] = Depends(get_recipe_client),
):
    if client is None:
        logger.error("GOOGLE_GENAI_API_KEY is not set.")
        return JSONResponse(status_code=500, content={"error": "Missing API key"})

    try:
        result = await run_in_threadpool(generate_recipe, client, payload.prompt)
    except Exception:
        logger.exception("/api/generate error")
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED})

    return RecipeResponse.from_result(result)
