"""
Separate the onboarding model reply into the conversational part and the
AI role JSON block, then validate that block.

Expected reply shape:

    <conversational text>
    ---JSON_START---
    { "title": ..., "description": ..., "systemPromptText": ..., "category": ..., "tags": [...] }
    ---JSON_END---

Nothing here raises on bad model output; every failure becomes a fallback
candidate with category "Error".
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from recipewreck.app.domain.models import (
    DEFAULT_CATEGORY,
    ERROR_CATEGORY,
    ERROR_HANDLER_TAG,
    ONBOARDING_SESSION_TAG,
    AiRoleCandidate,
    SplitResult,
    SplitStatus,
    ValidationResult,
)
from recipewreck.services.persist_models import AiRoleDraft

logger = logging.getLogger(__name__)

JSON_START_MARKER = "---JSON_START---"
JSON_END_MARKER = "---JSON_END---"

ERROR_TITLE_PREFIX = "Error:"
WARNING_TITLE_PREFIX = "Warning: Invalid LLM Data - "
RAW_ECHO_CHARS = 500

MARKERS_NOT_FOUND = "JSON markers not found in LLM response."
MISSING_REQUIRED_FIELDS = "Generated JSON missing required fields."
UNSEPARATED_REPLY = "Received a response from the AI, but had trouble separating the conversational part."

_REQUIRED_TEXT_FIELDS = ("title", "description", "systemPromptText")


def fallback_role(error_message: str, user_input: Optional[str] = None) -> AiRoleCandidate:
    """Placeholder role returned whenever a usable role could not be built."""
    if user_input:
        title = f'{ERROR_TITLE_PREFIX} AI Role for "{user_input[:50]}"'
    else:
        title = f"{ERROR_TITLE_PREFIX} AI Role Generation Failed"
    return AiRoleCandidate(
        title=title,
        description=f"Failed to generate AI Role. {error_message}",
        system_prompt_text="Error: Could not generate system prompt.",
        category=ERROR_CATEGORY,
        tags=["error", "fallback"],
        version=1,
        created_by=ERROR_HANDLER_TAG,
    )


def _raw_echo(kind: str, raw: str) -> str:
    return (
        f"AI response received, but AI Role JSON was {kind}. "
        f"Raw LLM output (first {RAW_ECHO_CHARS} chars): {raw[:RAW_ECHO_CHARS]}..."
    )


def find_json_block(raw: str) -> Optional[tuple[str, str]]:
    """Return (conversational_text, json_text) or None when the markers are absent."""
    start = raw.find(JSON_START_MARKER)
    if start == -1:
        return None
    end = raw.find(JSON_END_MARKER, start + len(JSON_START_MARKER))
    if end == -1:
        return None
    conversational = raw[:start].strip()
    json_text = raw[start + len(JSON_START_MARKER):end].strip()
    return conversational, json_text


def check_required_fields(payload: Any) -> ValidationResult:
    """Presence and primitive type of the five fields the model must emit."""
    if not isinstance(payload, dict):
        return ValidationResult(ok=False, reason="payload is not a JSON object")

    missing = [
        name for name in _REQUIRED_TEXT_FIELDS
        if not isinstance(payload.get(name), str) or not payload.get(name)
    ]
    if not isinstance(payload.get("category"), str):
        missing.append("category")
    if not isinstance(payload.get("tags"), list):
        missing.append("tags")
    if missing:
        return ValidationResult(ok=False, reason=f"missing or invalid: {', '.join(missing)}")

    return ValidationResult(
        ok=True,
        data={
            "title": payload["title"],
            "description": payload["description"],
            "systemPromptText": payload["systemPromptText"],
            "category": payload["category"] or DEFAULT_CATEGORY,
            "tags": [str(tag).lower() for tag in payload["tags"]],
        },
    )


def validate_role_schema(fields: dict[str, Any]) -> ValidationResult:
    """Length limits, category enumeration and tag shape."""
    try:
        draft = AiRoleDraft.model_validate(fields)
    except ValidationError as exc:
        reasons = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return ValidationResult(ok=False, reason="; ".join(reasons))
    return ValidationResult(ok=True, data=draft.model_dump())


def split_role_response(raw: str, user_message: Optional[str] = None) -> SplitResult:
    raw = raw or ""

    block = find_json_block(raw)
    if block is None:
        logger.warning(
            "JSON markers not found in LLM response; treating it as conversational. First %d chars: %s",
            RAW_ECHO_CHARS,
            raw[:RAW_ECHO_CHARS],
        )
        return SplitResult(
            conversational_text=raw.strip(),
            candidate=fallback_role(MARKERS_NOT_FOUND, user_message),
            status=SplitStatus.NO_MARKERS,
        )

    conversational, json_text = block

    try:
        payload = json.loads(json_text)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError is a ValueError; oversized ints and deep nesting raise plain ones
        logger.error("Error parsing JSON from LLM: %s", exc)
        return SplitResult(
            conversational_text=conversational or _raw_echo("malformed", raw),
            candidate=fallback_role(f"Failed to parse JSON: {exc}", user_message),
            status=SplitStatus.JSON_PARSE_FAIL,
        )

    structure = check_required_fields(payload)
    if not structure.ok:
        logger.warning("LLM generated JSON is missing required fields (%s): %s", structure.reason, payload)
        return SplitResult(
            conversational_text=conversational or _raw_echo("incomplete", raw),
            candidate=fallback_role(MISSING_REQUIRED_FIELDS, user_message),
            status=SplitStatus.MISSING_FIELDS,
        )

    fields = structure.data or {}
    candidate = AiRoleCandidate(
        title=fields["title"],
        description=fields["description"],
        system_prompt_text=fields["systemPromptText"],
        category=fields["category"],
        tags=fields["tags"],
        version=1,
        created_by=ONBOARDING_SESSION_TAG,
    )

    if not conversational and raw:
        conversational = UNSEPARATED_REPLY

    schema = validate_role_schema(candidate.llm_fields())
    if not schema.ok:
        logger.warning("Strict validation failed for AI Role data from LLM: %s", schema.reason)
        candidate.title = f"{WARNING_TITLE_PREFIX}{candidate.title}"
        status = SplitStatus.SCHEMA_WARN
    else:
        status = SplitStatus.SCHEMA_OK

    return SplitResult(conversational_text=conversational, candidate=candidate, status=status)
