from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from recipewreck.app.domain.models import AiRoleCandidate


class ChatPart(BaseModel):
    text: str = Field(..., max_length=2000)


class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    parts: list[ChatPart] = Field(..., min_length=1)


class OnboardingChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)
    conversationHistory: list[ChatTurn] = Field(default_factory=list)

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message is required and must be a string.")
        return value

    def history_payload(self) -> list[dict[str, str]]:
        # Only the first part of each turn is meaningful to the role designer
        return [{"role": turn.role, "text": turn.parts[0].text} for turn in self.conversationHistory]


class AiRoleJson(BaseModel):
    id: Optional[str] = None
    title: str
    description: str
    systemPromptText: str
    category: str
    tags: list[str] = Field(default_factory=list)
    version: int = 1
    createdAt: Optional[str] = None
    createdBy: str

    @classmethod
    def from_candidate(cls, candidate: AiRoleCandidate) -> "AiRoleJson":
        return cls(
            id=candidate.id,
            title=candidate.title,
            description=candidate.description,
            systemPromptText=candidate.system_prompt_text,
            category=candidate.category,
            tags=candidate.tags,
            version=candidate.version,
            createdAt=candidate.created_at.isoformat() if candidate.created_at else None,
            createdBy=candidate.created_by,
        )


class OnboardingChatResponse(BaseModel):
    aiResponseText: str
    aiRoleJson: AiRoleJson
