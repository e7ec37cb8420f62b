from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional
from uuid import uuid4

from recipewreck.app.domain.errors import AiRoleRepositoryError
from recipewreck.app.domain.models import (
    AiRoleCandidate,
    OnboardingResult,
    PersistStatus,
)
from recipewreck.app.infra.db.base import AiRoleRepository
from recipewreck.services.genai_client import GenAIClient
from recipewreck.services.prompts import ROLE_DESIGNER_PROMPT
from recipewreck.services.role_splitter import (
    JSON_END_MARKER,
    JSON_START_MARKER,
    split_role_response,
)

logger = logging.getLogger(__name__)

MAX_MESSAGE_CHARS = 2000
MAX_HISTORY_TURNS = 20

_ANGLE_BRACKETS_RE = re.compile(r"[<>]")


def sanitize_input(text: str, max_length: int = MAX_MESSAGE_CHARS) -> str:
    """Drop angle brackets and cap the length."""
    if not isinstance(text, str):
        return ""
    return _ANGLE_BRACKETS_RE.sub("", text)[:max_length]


def cap_history(history: list[Mapping[str, str]], max_turns: int = MAX_HISTORY_TURNS) -> list[Mapping[str, str]]:
    if len(history) > max_turns:
        return history[-max_turns:]
    return history


def format_history(history: Iterable[Mapping[str, str]]) -> str:
    lines: list[str] = []
    for turn in history:
        speaker = "User" if turn.get("role") == "user" else "AI"
        lines.append(f"{speaker}: {turn.get('text', '')}")
    return "\n".join(lines)


def build_onboarding_prompt(message: str, history: Iterable[Mapping[str, str]]) -> str:
    return ROLE_DESIGNER_PROMPT.format(
        start_marker=JSON_START_MARKER,
        end_marker=JSON_END_MARKER,
        history=format_history(history),
        message=message,
    )


def finalize_candidate(
    candidate: AiRoleCandidate,
    repository: AiRoleRepository,
    now: Optional[datetime] = None,
) -> PersistStatus:
    """
    Stamp request metadata onto the candidate and try to store it.
    Error candidates are never stored. A store failure leaves the candidate
    with its temporary id.
    """
    candidate.id = f"temp-{uuid4().hex}"
    candidate.created_at = now or datetime.now(timezone.utc)

    if candidate.is_error:
        return PersistStatus.SKIPPED

    try:
        assigned_id, assigned_at = repository.save(candidate)
    except AiRoleRepositoryError as error:
        logger.error("Error saving AI Role: %s", error)
        return PersistStatus.PERSIST_FAILED

    candidate.id = assigned_id
    candidate.created_at = assigned_at
    return PersistStatus.PERSISTED


def run_onboarding_chat(
    client: GenAIClient,
    repository: AiRoleRepository,
    message: str,
    history: list[Mapping[str, str]],
) -> OnboardingResult:
    """
    One onboarding turn: prompt the model, split its reply, persist the role.
    Only failures of the model call itself propagate.
    """
    clean_message = sanitize_input(message)
    clean_history = [
        {"role": turn["role"], "text": sanitize_input(turn["text"])}
        for turn in cap_history(history)
    ]
    logger.debug("Onboarding message: %s (history turns: %d)", clean_message, len(clean_history))

    prompt = build_onboarding_prompt(clean_message, clean_history)
    raw_reply = client.stream_text(prompt)

    split = split_role_response(raw_reply, clean_message)
    persist_status = finalize_candidate(split.candidate, repository)

    logger.info(
        "Onboarding turn finished: split=%s, persist=%s, role=%s",
        split.status.value,
        persist_status.value,
        split.candidate.id,
    )
    return OnboardingResult(
        conversational_text=split.conversational_text,
        candidate=split.candidate,
        split_status=split.status,
        persist_status=persist_status,
    )
