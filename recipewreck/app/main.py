# recipewreck/app/main.py
from __future__ import annotations

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipewreck.app.config import settings
from recipewreck.app.routers.ai_roles import router as ai_roles_router
from recipewreck.app.routers.generate import GENERATION_FAILED
from recipewreck.app.routers.generate import router as generate_router
from recipewreck.app.routers.health import router as health_router
from recipewreck.app.routers.onboarding import router as onboarding_router

# Plain stdout logging, fine for dev and containers
logging.basicConfig(
    level=logging.DEBUG if settings.is_development else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title="RecipeWreck API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generate_router, prefix="/api")
app.include_router(onboarding_router, prefix="/api")
app.include_router(ai_roles_router, prefix="/api")
app.include_router(health_router)

GENERATE_PATH = "/api/generate"


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg', 'invalid value')}" if location else str(first.get("msg"))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = _describe_validation_error(exc)
    logging.getLogger(__name__).info("Rejected %s %s: %s", request.method, request.url.path, detail)
    # Recipe generation reports every failure, bad input included, as one opaque 500
    if request.url.path == GENERATE_PATH:
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED})
    return JSONResponse(
        status_code=400,
        content={"error": detail, "message": f"Validation Error: {detail}"},
    )
