"""
Gemini image generation client.
Wraps the generateContent endpoint for outfit generation and outfit edits.
"""

from typing import Any, Optional

import httpx

from virtual_stylist.config import logger
from virtual_stylist.core.encoder import JPEG_MIME_TYPE, strip_data_uri, to_data_uri
from virtual_stylist.core.outfits import Style
from virtual_stylist.core.prompt_templates import build_edit_prompt, build_outfit_prompt

DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GenerationClientError(Exception):
    """Base class for failures talking to the image generation service."""


class TransportError(GenerationClientError):
    """The request could not complete (network failure or non-success status)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class GenerationError(GenerationClientError):
    """The service answered but the response carried no image."""


class GeminiImageClient:
    """
    Async client for Gemini image generation.

    Built once at startup with an explicit API key and handed to whoever needs
    it. No retries are attempted and no timeout is applied unless one is given.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_key:
            raise ValueError("A Gemini API key is required")

        self.model = model
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
        )
        self._endpoint = f"{base_url.rstrip('/')}/models/{model}:generateContent"
        self._headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": api_key,
        }

        logger.info(f"Gemini image client initialized for model {model}")

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def generate(self, image_payload: str, style: Style) -> str:
        """
        Generate an image of a model wearing the uploaded item in the given style.

        Args:
            image_payload: Source image as a data URI or raw base64 string
            style: Outfit style to dress the model in

        Returns:
            Generated image as a ``data:image/jpeg;base64,...`` URI

        Raises:
            TransportError: If the request fails or returns a non-success status
            GenerationError: If the response contains no image
        """
        prompt = build_outfit_prompt(style)
        logger.info(f"Requesting {style.label} outfit from {self.model}")

        try:
            result = await self._generate_content(prompt, image_payload)
        except GenerationClientError as exc:
            logger.error(f"Gemini generation error ({style.value}): {exc}")
            raise

        image_data = _first_inline_image(result)
        if not image_data:
            logger.error(f"Gemini generation error ({style.value}): no image in response")
            raise GenerationError("No image generated.")

        return to_data_uri(image_data)

    async def edit(self, image_uri: str, instruction: str) -> str:
        """
        Edit an existing generated image according to a free-text instruction.

        Raises:
            ValueError: If the instruction is empty or whitespace only
            TransportError: If the request fails or returns a non-success status
            GenerationError: If the response contains no image
        """
        prompt = build_edit_prompt(instruction)
        logger.info(f"Requesting outfit edit from {self.model}")

        try:
            result = await self._generate_content(prompt, image_uri)
        except GenerationClientError as exc:
            logger.error(f"Gemini edit error: {exc}")
            raise

        image_data = _first_inline_image(result)
        if not image_data:
            logger.error("Gemini edit error: no image in response")
            raise GenerationError("No edited image generated.")

        return to_data_uri(image_data)

    async def _generate_content(self, prompt: str, image: str) -> Any:
        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {
                            "inline_data": {
                                "mime_type": JPEG_MIME_TYPE,
                                "data": strip_data_uri(image),
                            }
                        },
                    ]
                }
            ]
        }

        try:
            response = await self._client.post(
                self._endpoint,
                json=payload,
                headers=self._headers,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"Gemini API HTTP error: {exc.response.status_code} - {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Network error calling Gemini API: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"Gemini API returned invalid JSON: {exc}") from exc


def _first_inline_image(api_result: Any) -> Optional[str]:
    """Return the base64 data of the first inline image part, if any."""
    if not isinstance(api_result, dict):
        return None

    candidates = api_result.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None

    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return None

    content = candidate.get("content")
    if not isinstance(content, dict):
        return None

    parts = content.get("parts")
    if not isinstance(parts, list):
        return None

    for part in parts:
        if not isinstance(part, dict):
            continue
        # Check both camelCase and snake_case formats
        inline = part.get("inlineData") or part.get("inline_data")
        if isinstance(inline, dict) and inline.get("data"):
            return inline["data"]

    return None


__all__ = [
    "GeminiImageClient",
    "GenerationClientError",
    "GenerationError",
    "TransportError",
    "DEFAULT_MODEL",
    "DEFAULT_BASE_URL",
]
