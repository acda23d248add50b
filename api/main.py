"""
FastAPI application for the Kitz Chef API.

This module defines the REST API endpoints for the recipe backend:
- POST /api/recipe: Generate a recipe from a list of ingredients
- GET /health: Health check

The API is stateless: every request is validated, forwarded to the
text-generation provider and answered independently. Provider errors are logged
here and answered with a generic message.

Run the API with:
    uvicorn api.main:app --reload --port 3001

or, honouring PORT from the environment:
    python -m api.main

Access API documentation at:
    http://localhost:3001/docs (Swagger UI)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import OpenAIConfig, ServerConfig, validate_required_config
from api.schemas import ErrorResponse, HealthResponse, RecipeRequest, RecipeResponse
from chef.errors import GenerationFailedError, InvalidIngredientsError
from chef.providers.base import BaseRecipeProvider
from chef.providers.openai_provider import OpenAIRecipeProvider
from chef.recipes import generate_recipe

logger = logging.getLogger(__name__)

INVALID_INGREDIENTS_MESSAGE = "Invalid ingredients"
GENERATION_FAILED_MESSAGE = "Failed to generate recipe"

CORS_METHODS = ["GET", "POST", "OPTIONS"]
CORS_HEADERS = ["Content-Type"]

# Track app start time for uptime calculation
_APP_START_TIME = time.time()


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@lru_cache(maxsize=1)
def get_provider() -> BaseRecipeProvider:
    """
    Get the text-generation provider used by POST /api/recipe.

    Tests replace it through app.dependency_overrides[get_provider].
    """
    return OpenAIRecipeProvider(
        api_key=OpenAIConfig.get_api_key(),
        model=OpenAIConfig.get_model(),
    )


async def invalid_ingredients_handler(request: Request, exc: InvalidIngredientsError) -> JSONResponse:
    logger.info("Rejected recipe request: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=INVALID_INGREDIENTS_MESSAGE).model_dump(),
    )


async def generation_failed_handler(request: Request, exc: GenerationFailedError) -> JSONResponse:
    # The cause was already logged with its traceback in chef.recipes.
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=GENERATION_FAILED_MESSAGE).model_dump(),
    )


async def log_requests(request: Request, call_next: Any):
    """Development request logger: `METHOD path status duration`."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000.0
    logger.info(
        "%s %s %d %.1f ms",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


def create_app(production: bool | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        production: Override the mode from the environment (APP_ENV / NODE_ENV).
            Production mode disables per-request logging.
    """
    if production is None:
        production = ServerConfig.is_production()

    app = FastAPI(
        title="Kitz Chef API",
        description="Turns a list of ingredients into a recipe using a large language model.",
        version="1.0.0",
        openapi_tags=[
            {"name": "recipes", "description": "Recipe generation."},
            {"name": "health", "description": "Health check and monitoring endpoints."},
        ],
    )
    app.state.production = production

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ServerConfig.get_frontend_origins(),
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    if production:
        logger.info("Running in production mode")
    else:
        app.middleware("http")(log_requests)
        logger.info("Running in development mode")

    app.add_exception_handler(InvalidIngredientsError, invalid_ingredients_handler)
    app.add_exception_handler(GenerationFailedError, generation_failed_handler)

    @app.post(
        "/api/recipe",
        response_model=RecipeResponse,
        tags=["recipes"],
        summary="Generate a recipe from ingredients",
        responses={
            400: {"model": ErrorResponse, "description": "Missing, empty or malformed ingredient list"},
            500: {"model": ErrorResponse, "description": "The text-generation provider failed"},
        },
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {"application/json": {"schema": RecipeRequest.model_json_schema()}},
            }
        },
    )
    async def create_recipe(
        request: Request,
        provider: BaseRecipeProvider = Depends(get_provider),
    ) -> RecipeResponse:
        """
        Generate a recipe for the given ingredients.

        Example:
            ```bash
            POST /api/recipe
            Body: {"ingredients": ["eggs", "tomatoes", "basil"]}
            ```
        """
        try:
            body = await request.json()
        except ValueError as e:
            raise InvalidIngredientsError("request body is not valid JSON") from e

        if not isinstance(body, dict):
            raise InvalidIngredientsError("request body must be a JSON object")

        recipe = await generate_recipe(body.get("ingredients"), provider)
        return RecipeResponse(recipe=recipe)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            mode="production" if app.state.production else "development",
            uptime_seconds=round(time.time() - _APP_START_TIME, 3),
        )

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    try:
        validate_required_config()
    except RuntimeError as e:
        # Recipe requests will answer 500 until the key is configured.
        logger.warning("%s", e)

    uvicorn.run(app, host="0.0.0.0", port=ServerConfig.get_port())
