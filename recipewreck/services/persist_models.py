# recipewreck/services/persist_models.py
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

RoleCategory = Literal[
    "Productivity",
    "Creative",
    "Education",
    "Development",
    "Entertainment",
    "Health & Wellness",
    "Custom",
]


def _strip_text(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


def _normalize_tags(value: Optional[list[str]]) -> list[str]:
    if value is None:
        return []
    return [tag.strip().lower() for tag in value]


class AiRoleDraft(BaseModel):
    """Strict shape of the role payload the model is asked to produce."""

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    systemPromptText: str = Field(..., min_length=1, max_length=10000)
    category: RoleCategory = "Custom"
    tags: Optional[list[str]] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: Optional[list[str]]) -> list[str]:
        return _normalize_tags(value)


class AiRoleRecord(BaseModel):
    """Row written to the ai_roles table."""

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    system_prompt_text: str = Field(..., min_length=1, max_length=10000)
    category: RoleCategory = "Custom"
    tags: list[str] = Field(default_factory=list)
    version: int = Field(default=1, ge=1)
    created_by: str = Field(..., min_length=1)

    @field_validator("title", "description", "system_prompt_text", "created_by", mode="before")
    @classmethod
    def _trim(cls, value: object) -> object:
        return _strip_text(value)

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: list[str]) -> list[str]:
        return _normalize_tags(value)


class AiRoleChanges(BaseModel):
    """Partial update accepted by PUT /api/ai-roles/{role_id}."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    systemPromptText: Optional[str] = Field(default=None, min_length=1, max_length=10000)
    category: Optional[RoleCategory] = None
    tags: Optional[list[str]] = None

    @field_validator("title", "description", "systemPromptText", mode="before")
    @classmethod
    def _trim(cls, value: object) -> object:
        return _strip_text(value)

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        return None if value is None else _normalize_tags(value)

    def to_columns(self) -> dict[str, object]:
        changes = self.model_dump(exclude_unset=True, exclude_none=True)
        if "systemPromptText" in changes:
            changes["system_prompt_text"] = changes.pop("systemPromptText")
        return changes
