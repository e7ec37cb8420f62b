from __future__ import annotations

import re

from recipewreck.app.domain.models import UNTITLED_RECIPE, ParseMode, ParsedRecipe

_PAIRED_DECORATION_RE = re.compile(r"(\*\*|__|`)(.+?)\1")
_STAR_EMPHASIS_RE = re.compile(r"(?<![\w*])\*(?=\S)(.+?)(?<=\S)\*(?![\w*])")
_UNDERSCORE_EMPHASIS_RE = re.compile(r"(?<![\w_])_(?=\S)(.+?)(?<=\S)_(?![\w_])")
_EDGE_DECORATION_RE = re.compile(r"^[*_`]+|[*_`]+$")
_BULLET_RE = re.compile(r"^[-*]\s*")
_NUMBER_RE = re.compile(r"^\d+\.\s*")

_TITLE_PREFIX = "title:"
_INGREDIENTS_PREFIX = "ingredients"
_STEPS_PREFIX = "steps"


def _strip_decoration(line: str) -> str:
    """Remove Markdown emphasis and code marks; inner "*", "_" and backticks survive."""
    line = _PAIRED_DECORATION_RE.sub(r"\2", line)
    line = _STAR_EMPHASIS_RE.sub(r"\1", line)
    line = _UNDERSCORE_EMPHASIS_RE.sub(r"\1", line)
    return _EDGE_DECORATION_RE.sub("", line.strip()).strip()


def _content_line(line: str, mode: ParseMode) -> str:
    if mode is ParseMode.INGREDIENTS:
        # Bullet first: "* Butter" uses the same character as emphasis
        return _strip_decoration(_BULLET_RE.sub("", line, count=1))
    return _NUMBER_RE.sub("", _strip_decoration(line), count=1)


def parse_recipe(raw: str) -> ParsedRecipe:
    """
    Turn model output shaped like

        Title: <title>
        Ingredients:
        - <ingredient>
        Steps:
        1. <step>

    into a ParsedRecipe. Never raises; text outside a section is dropped, and a bare bullet
    inside one becomes an empty item.
    """
    recipe = ParsedRecipe()
    mode = ParseMode.NONE

    lines = (line.strip() for line in (raw or "").splitlines())
    for line in lines:
        if not line:
            continue

        plain = _strip_decoration(line)
        lower = plain.lower()

        if lower.startswith(_TITLE_PREFIX):
            recipe.title = plain[len(_TITLE_PREFIX):].strip()
            mode = ParseMode.NONE
            continue
        if lower.startswith(_INGREDIENTS_PREFIX):
            mode = ParseMode.INGREDIENTS
            continue
        if lower.startswith(_STEPS_PREFIX):
            mode = ParseMode.STEPS
            continue

        if mode is ParseMode.NONE:
            continue
        item = _content_line(line, mode)
        if mode is ParseMode.INGREDIENTS:
            recipe.ingredients.append(item)
        else:
            recipe.steps.append(item)

    return recipe
