from __future__ import annotations

import logging

from recipewreck.app.domain.models import RecipeResult
from recipewreck.services.genai_client import GenAIClient
from recipewreck.services.prompts import RECIPE_IMAGE_PROMPT, RECIPE_PROMPT
from recipewreck.services.recipe_parser import parse_recipe

logger = logging.getLogger(__name__)


def build_recipe_prompt(subject: str) -> str:
    return RECIPE_PROMPT.format(subject=subject)


def build_image_prompt(title: str) -> str:
    return RECIPE_IMAGE_PROMPT.format(title=title)


def generate_recipe(client: GenAIClient, subject: str) -> RecipeResult:
    """
    Ask the text model for a recipe, parse it, then ask the image model for a
    picture of the parsed title. Errors from either call propagate.
    """
    text_prompt = build_recipe_prompt(subject)
    logger.debug("Text prompt: %s", text_prompt)

    raw_text = client.generate_text(text_prompt)
    logger.debug("Text model response: %s", raw_text)
    parsed = parse_recipe(raw_text)

    image_base64 = client.generate_image_base64(build_image_prompt(parsed.title))

    result = RecipeResult(
        title=parsed.title,
        ingredients=parsed.ingredients,
        steps=parsed.steps,
        image_base64=image_base64,
    )
    logger.info(
        "Generated recipe %r: %d ingredients, %d steps, image=%s",
        result.title,
        len(result.ingredients),
        len(result.steps),
        "[IMAGE_DATA_PRESENT]" if result.image_base64 else "[NO_IMAGE_DATA]",
    )
    return result
