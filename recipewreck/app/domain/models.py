# recipewreck/app/domain/models.py
"""
Domain models for recipe generation and AI role onboarding.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

UNTITLED_RECIPE = "Untitled Wreck"

ONBOARDING_SESSION_TAG = "llm_onboarding_session"
ERROR_HANDLER_TAG = "api_error_handler"

ERROR_CATEGORY = "Error"
DEFAULT_CATEGORY = "Custom"


class ParseMode(str, Enum):
    """Section the recipe parser is currently collecting lines for."""
    NONE = "none"
    INGREDIENTS = "ingredients"
    STEPS = "steps"


class SplitStatus(str, Enum):
    """Where a model reply ended up in the splitter pipeline."""
    NO_MARKERS = "NO_MARKERS"
    JSON_PARSE_FAIL = "JSON_PARSE_FAIL"
    MISSING_FIELDS = "MISSING_FIELDS"
    SCHEMA_WARN = "SCHEMA_WARN"
    SCHEMA_OK = "SCHEMA_OK"


class PersistStatus(str, Enum):
    PERSISTED = "PERSISTED"
    PERSIST_FAILED = "PERSIST_FAILED"
    SKIPPED = "SKIPPED"


@dataclass
class ParsedRecipe:
    """Structured fields extracted from free model text."""
    title: str = UNTITLED_RECIPE
    ingredients: list[str] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)


@dataclass
class RecipeResult:
    """A parsed recipe plus the independently generated picture."""
    title: str
    ingredients: list[str]
    steps: list[str]
    image_base64: str = ""


@dataclass
class AiRoleCandidate:
    """
    Provisional AI role built from model output.
    Becomes durable only once the repository assigns an id.
    """
    title: str
    description: str
    system_prompt_text: str
    category: str = DEFAULT_CATEGORY
    tags: list[str] = field(default_factory=list)
    version: int = 1
    created_by: str = ONBOARDING_SESSION_TAG

    # Assigned per request, then overwritten by the store on insert
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_error(self) -> bool:
        return self.category == ERROR_CATEGORY

    def llm_fields(self) -> dict[str, Any]:
        """The five fields that come from the model, keyed as the model emits them."""
        return {
            "title": self.title,
            "description": self.description,
            "systemPromptText": self.system_prompt_text,
            "category": self.category,
            "tags": list(self.tags),
        }


@dataclass
class AiRole:
    """A stored AI role as read back from the document store."""
    id: str
    title: str
    description: str
    system_prompt_text: str
    category: str
    tags: list[str]
    version: int
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ValidationResult:
    """Outcome of one validation step over the model's role payload."""
    ok: bool
    reason: Optional[str] = None
    data: Optional[dict[str, Any]] = None


@dataclass
class SplitResult:
    """Conversational reply and role candidate separated from one model response."""
    conversational_text: str
    candidate: AiRoleCandidate
    status: SplitStatus


@dataclass
class OnboardingResult:
    conversational_text: str
    candidate: AiRoleCandidate
    split_status: SplitStatus
    persist_status: PersistStatus
