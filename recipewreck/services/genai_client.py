from __future__ import annotations

import base64
import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from recipewreck.services.errors import (
    GenAIConfigurationError,
    GenerationFailedError,
    RateLimitedError,
)

logger = logging.getLogger(__name__)

DEFAULT_TEXT_MODEL = "gemini-1.5-flash-latest"
DEFAULT_IMAGE_MODEL = "imagen-3.0-generate-002"


def _user_contents(prompt: str) -> list[dict]:
    return [{"role": "user", "parts": [{"text": prompt}]}]


def _translate_error(err: Exception, model_name: str) -> GenerationFailedError:
    code = getattr(err, "code", None)
    message = str(err)
    if code == 429 or "RESOURCE_EXHAUSTED" in message:
        return RateLimitedError(f"Rate limit reached for {model_name}. Try again shortly.")
    return GenerationFailedError(f"{model_name} call failed: {message}")


class GenAIClient:
    """Thin wrapper over the Google GenAI SDK for the calls this service makes."""

    def __init__(
        self,
        api_key: str,
        text_model: str = DEFAULT_TEXT_MODEL,
        image_model: str = DEFAULT_IMAGE_MODEL,
    ) -> None:
        if not api_key:
            raise GenAIConfigurationError("Missing Google GenAI API key.")
        self.text_model = text_model
        self.image_model = image_model
        self._client = genai.Client(api_key=api_key)

    def generate_text(self, prompt: str) -> str:
        try:
            response = self._client.models.generate_content(
                model=self.text_model,
                contents=_user_contents(prompt),
            )
        except (genai_errors.APIError, httpx.HTTPError) as err:
            raise _translate_error(err, self.text_model) from err
        return response.text or ""

    def stream_text(self, prompt: str) -> str:
        """Same as generate_text but consumes the streaming endpoint."""
        config = types.GenerateContentConfig(response_mime_type="text/plain")
        pieces: list[str] = []
        try:
            stream = self._client.models.generate_content_stream(
                model=self.text_model,
                contents=_user_contents(prompt),
                config=config,
            )
            for chunk in stream:
                if chunk is not None and isinstance(chunk.text, str):
                    pieces.append(chunk.text)
        except (genai_errors.APIError, httpx.HTTPError) as err:
            raise _translate_error(err, self.text_model) from err
        return "".join(pieces)

    def generate_image_base64(self, prompt: str) -> str:
        """First generated image as base64, or an empty string when none came back."""
        try:
            response = self._client.models.generate_images(
                model=self.image_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(number_of_images=1),
            )
        except (genai_errors.APIError, httpx.HTTPError) as err:
            raise _translate_error(err, self.image_model) from err

        images = response.generated_images or []
        if not images or images[0].image is None or not images[0].image.image_bytes:
            logger.warning("Image model %s returned no image", self.image_model)
            return ""
        return base64.b64encode(images[0].image.image_bytes).decode("ascii")
