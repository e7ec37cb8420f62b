from __future__ import annotations

import json

import pytest

from recipewreck.app.domain.models import (
    ERROR_CATEGORY,
    ERROR_HANDLER_TAG,
    ONBOARDING_SESSION_TAG,
    SplitStatus,
)
from recipewreck.services.role_splitter import (
    ERROR_TITLE_PREFIX,
    JSON_END_MARKER,
    JSON_START_MARKER,
    MARKERS_NOT_FOUND,
    MISSING_REQUIRED_FIELDS,
    UNSEPARATED_REPLY,
    WARNING_TITLE_PREFIX,
    check_required_fields,
    fallback_role,
    find_json_block,
    split_role_response,
    validate_role_schema,
)


def _role_payload(**overrides: object) -> dict:
    payload = {
        "title": "Joke Bot",
        "description": "Tells jokes.",
        "systemPromptText": "You are an AI that tells jokes.",
        "category": "Creative",
        "tags": ["Fun", "Jokes"],
    }
    payload.update(overrides)
    return payload


def _reply(preamble: str, payload: object) -> str:
    body = payload if isinstance(payload, str) else json.dumps(payload)
    return f"{preamble}\n{JSON_START_MARKER}\n{body}\n{JSON_END_MARKER}"


class TestFindJsonBlock:
    def test_splits_on_markers(self) -> None:
        block = find_json_block(f"  hello  \n{JSON_START_MARKER}\n {{}} \n{JSON_END_MARKER}\ntrailing")

        assert block == ("hello", "{}")

    def test_missing_end_marker(self) -> None:
        assert find_json_block(f"hello {JSON_START_MARKER} {{}}") is None

    def test_end_marker_before_start(self) -> None:
        assert find_json_block(f"{JSON_END_MARKER} {{}} {JSON_START_MARKER}") is None


class TestCheckRequiredFields:
    def test_valid_payload_lowercases_tags(self) -> None:
        result = check_required_fields(_role_payload())

        assert result.ok is True
        assert result.data is not None
        assert result.data["tags"] == ["fun", "jokes"]

    def test_empty_category_defaults_to_custom(self) -> None:
        result = check_required_fields(_role_payload(category=""))

        assert result.ok is True
        assert result.data is not None
        assert result.data["category"] == "Custom"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": ""},
            {"description": None},
            {"systemPromptText": 42},
            {"category": None},
            {"tags": "fun"},
        ],
    )
    def test_missing_or_mistyped(self, overrides: dict) -> None:
        result = check_required_fields(_role_payload(**overrides))

        assert result.ok is False
        assert result.reason

    def test_non_object(self) -> None:
        assert check_required_fields(["title"]).ok is False


class TestValidateRoleSchema:
    def test_valid(self) -> None:
        result = validate_role_schema(_role_payload(tags=[" Fun "]))

        assert result.ok is True
        assert result.data is not None
        assert result.data["tags"] == ["fun"]

    def test_unknown_category(self) -> None:
        result = validate_role_schema(_role_payload(category="Cooking"))

        assert result.ok is False
        assert "category" in (result.reason or "")

    def test_title_too_long(self) -> None:
        result = validate_role_schema(_role_payload(title="x" * 101))

        assert result.ok is False
        assert "title" in (result.reason or "")

    def test_tags_are_optional(self) -> None:
        payload = _role_payload()
        del payload["tags"]

        result = validate_role_schema(payload)

        assert result.ok is True
        assert result.data is not None
        assert result.data["tags"] == []


class TestFallbackRole:
    def test_with_user_input(self) -> None:
        role = fallback_role("Boom.", "a" * 80)

        assert role.title == f'Error: AI Role for "{"a" * 50}"'
        assert role.description == "Failed to generate AI Role. Boom."
        assert role.category == ERROR_CATEGORY
        assert role.tags == ["error", "fallback"]
        assert role.created_by == ERROR_HANDLER_TAG
        assert role.is_error is True

    def test_without_user_input(self) -> None:
        assert fallback_role("Boom.").title == "Error: AI Role Generation Failed"


class TestSplitRoleResponse:
    def test_example_reply(self) -> None:
        raw = (
            "Sounds fun!\n---JSON_START---\n"
            '{"title":"Joke Bot","description":"d","systemPromptText":"p","category":"Creative","tags":["Fun"]}'
            "\n---JSON_END---"
        )

        result = split_role_response(raw, "make me a joke bot")

        assert result.status is SplitStatus.SCHEMA_OK
        assert result.conversational_text == "Sounds fun!"
        candidate = result.candidate
        assert candidate.title == "Joke Bot"
        assert candidate.description == "d"
        assert candidate.system_prompt_text == "p"
        assert candidate.category == "Creative"
        assert candidate.tags == ["fun"]
        assert candidate.version == 1
        assert candidate.created_by == ONBOARDING_SESSION_TAG

    def test_no_markers(self) -> None:
        result = split_role_response("  Just chatting, no JSON here.  ", "hi")

        assert result.status is SplitStatus.NO_MARKERS
        assert result.conversational_text == "Just chatting, no JSON here."
        assert result.candidate.category == ERROR_CATEGORY
        assert result.candidate.description.endswith(MARKERS_NOT_FOUND)

    def test_invalid_json_keeps_preamble(self) -> None:
        result = split_role_response(_reply("Here you go", "{not json"), "hi")

        assert result.status is SplitStatus.JSON_PARSE_FAIL
        assert result.conversational_text == "Here you go"
        assert result.candidate.category == ERROR_CATEGORY
        assert result.candidate.title.startswith(ERROR_TITLE_PREFIX)
        assert "Failed to parse JSON" in result.candidate.description

    @pytest.mark.parametrize(
        "body",
        [
            '{"title": ' + "9" * 5000 + "}",
            "[" * 100_000 + "]" * 100_000,
        ],
        ids=["oversized-int", "deep-nesting"],
    )
    def test_json_the_decoder_refuses_falls_back(self, body: str) -> None:
        result = split_role_response(_reply("Here you go", body), "hi")

        assert result.status is SplitStatus.JSON_PARSE_FAIL
        assert result.conversational_text == "Here you go"
        assert result.candidate.category == ERROR_CATEGORY

    def test_invalid_json_without_preamble_echoes_raw(self) -> None:
        raw = _reply("", "{not json")

        result = split_role_response(raw, "hi")

        assert result.conversational_text.startswith("AI response received, but AI Role JSON was malformed.")
        assert raw[:100] in result.conversational_text

    def test_incomplete_json(self) -> None:
        raw = _reply("", {"title": "Only a title"})

        result = split_role_response(raw, "hi")

        assert result.status is SplitStatus.MISSING_FIELDS
        assert result.candidate.category == ERROR_CATEGORY
        assert result.candidate.title.startswith(ERROR_TITLE_PREFIX)
        assert result.candidate.description.endswith(MISSING_REQUIRED_FIELDS)
        assert result.conversational_text.startswith("AI response received, but AI Role JSON was incomplete.")

    def test_raw_echo_is_truncated(self) -> None:
        raw = _reply("", "{" + "x" * 2000)

        result = split_role_response(raw, "hi")

        assert raw[:500] in result.conversational_text
        assert raw[:501] not in result.conversational_text

    def test_strict_schema_failure_warns_instead_of_rejecting(self) -> None:
        result = split_role_response(_reply("Ok!", _role_payload(category="Cooking")), "hi")

        assert result.status is SplitStatus.SCHEMA_WARN
        assert result.candidate.title == f"{WARNING_TITLE_PREFIX}Joke Bot"
        assert result.candidate.category == "Cooking"
        assert result.candidate.is_error is False

    def test_missing_preamble_uses_placeholder(self) -> None:
        result = split_role_response(_reply("", _role_payload()), "hi")

        assert result.status is SplitStatus.SCHEMA_OK
        assert result.conversational_text == UNSEPARATED_REPLY

    def test_same_input_same_output(self) -> None:
        raw = _reply("Again", _role_payload())

        assert split_role_response(raw, "hi") == split_role_response(raw, "hi")
