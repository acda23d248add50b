"""
Pydantic schemas for FastAPI responses.

The request body of POST /api/recipe is validated by chef.recipes rather than a
Pydantic model so that every malformed body maps to the same
400 {"error": "Invalid ingredients"} response instead of FastAPI's 422.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RecipeRequest(BaseModel):
    """Documented shape of the POST /api/recipe body."""
    ingredients: List[str] = Field(..., description="Ingredients to cook with")

    model_config = ConfigDict(
        json_schema_extra={"example": {"ingredients": ["eggs", "tomatoes", "basil"]}}
    )


class RecipeResponse(BaseModel):
    recipe: str = Field(..., description="Generated recipe as markdown")

    model_config = ConfigDict(
        json_schema_extra={"example": {"recipe": "# Tomato Basil Omelette\n\n## Ingredients\n- 3 eggs\n..."}}
    )


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Generic error message")


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always 'ok' when the API is up")
    mode: str = Field(..., description="'development' or 'production'")
    uptime_seconds: float = Field(..., ge=0, description="Seconds since the API started")
