from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from recipewreck.app.domain.models import AiRole


class AiRoleResponse(BaseModel):
    id: str
    title: str
    description: str
    systemPromptText: str
    category: str
    tags: list[str] = Field(default_factory=list)
    version: int = 1
    createdBy: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    @classmethod
    def from_role(cls, role: AiRole) -> "AiRoleResponse":
        return cls(
            id=role.id,
            title=role.title,
            description=role.description,
            systemPromptText=role.system_prompt_text,
            category=role.category,
            tags=role.tags,
            version=role.version,
            createdBy=role.created_by,
            createdAt=role.created_at.isoformat() if role.created_at else None,
            updatedAt=role.updated_at.isoformat() if role.updated_at else None,
        )


class DeleteRoleResponse(BaseModel):
    message: str
    deletedRoleId: str
