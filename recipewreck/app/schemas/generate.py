from __future__ import annotations

from pydantic import BaseModel, Field

from recipewreck.app.domain.models import RecipeResult


class GenerateRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=500)


class RecipeResponse(BaseModel):
    title: str
    ingredients: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    imageBase64: str = ""

    @classmethod
    def from_result(cls, result: RecipeResult) -> "RecipeResponse":
        return cls(
            title=result.title,
            ingredients=result.ingredients,
            steps=result.steps,
            imageBase64=result.image_base64,
        )


class ErrorResponse(BaseModel):
    error: str
