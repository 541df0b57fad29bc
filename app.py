"""Pantry Chef API - Recipe suggestion service.

Single entry point for the HTTP service consumed by the UI shell:
- POST /api/generate       Generate a recipe from pantry/search preferences
- POST /api/share          Build a shareable pantry link
- POST /api/share/import   Decode a share token or link (never fails)
- GET  /health             Liveness plus the active generation strategy

The generation strategy (Gemini or deterministic fallback) is chosen from
configuration when each request is constructed and injected as a dependency.

Run with: python app.py
"""

import uuid
from urllib.parse import urlsplit

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.generators.errors import error_message
from src.generators.generator import RecipeGenerator, initialize_recipe_generator
from src.generators.pipeline import run_generation
from src.kitchen.pantry_store import strip_share_params
from src.kitchen.share import build_share_url, decode_token_or_url, encode_selection
from src.models.models import (
    ErrorResponse,
    Recipe,
    RecipePreferences,
    ShareImportRequest,
    ShareImportResponse,
    ShareLinkRequest,
    ShareLinkResponse,
)
from src.utils.config import config
from src.utils.logger import logger


app = FastAPI(
    title="Pantry Chef API",
    description="Recipe suggestions from your pantry, with an AI generator and a deterministic fallback",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_recipe_generator() -> RecipeGenerator:
    """Dependency: generation strategy for this request."""
    return initialize_recipe_generator(config)


@app.post(
    "/api/generate",
    response_model=Recipe,
    responses={500: {"model": ErrorResponse, "description": "Generation failed"}},
)
async def generate_recipe(
    preferences: RecipePreferences,
    generator: RecipeGenerator = Depends(get_recipe_generator),
):
    """Generate one recipe; failures become a single {error} message."""
    request_id = uuid.uuid4().hex[:8]
    try:
        return await run_generation(preferences, generator, request_id=request_id)
    except Exception as e:
        message = error_message(e)
        logger.error(f"Generation failed: {message}", extra={"request_id": request_id})
        return JSONResponse(status_code=500, content=ErrorResponse(error=message).model_dump())


@app.post("/api/share", response_model=ShareLinkResponse)
async def create_share_link(request: ShareLinkRequest) -> ShareLinkResponse:
    return ShareLinkResponse(
        url=build_share_url(request.selection, request.origin),
        token=encode_selection(request.selection),
    )


@app.post("/api/share/import", response_model=ShareImportResponse)
async def import_share_link(request: ShareImportRequest) -> ShareImportResponse:
    """Decode any share input; links come back with the share parameters stripped."""
    cleaned = strip_share_params(request.input) if urlsplit(request.input.strip()).netloc else None
    return ShareImportResponse(selection=decode_token_or_url(request.input), url=cleaned)


@app.get("/health")
async def health(generator: RecipeGenerator = Depends(get_recipe_generator)) -> dict:
    return {"status": "ok", "generator": generator.name}


if __name__ == "__main__":
    logger.info(f"Starting Pantry Chef API on port {config.PORT}")
    logger.info(f"Generator: {'gemini (' + config.GEMINI_MODEL + ')' if config.has_ai_credentials else 'fallback'}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
