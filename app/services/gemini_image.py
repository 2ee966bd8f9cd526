"""
Gemini "Nano Banana" Image Generation Service
Sends reference images plus an editing instruction to the native Gemini
image model and normalizes what comes back.
Documentation: https://ai.google.dev/gemini-api/docs/image-generation
"""

import asyncio
import base64
import logging
from typing import List, Optional

from google import genai
from google.genai import types

from app.core.config import settings
from app.core.errors import ConfigurationError
from app.models.generation import GenerationRequest, ProviderResponse, ResponseSegment

logger = logging.getLogger(__name__)


def _enum_value(value) -> Optional[str]:
    if value is None:
        return None
    return str(getattr(value, "value", value))


def normalize_response(response) -> ProviderResponse:
    """Flatten the first candidate's content parts into response segments."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = _enum_value(getattr(feedback, "block_reason", None))
        return ProviderResponse(segments=(), finish_reason=block_reason)

    candidate = candidates[0]
    content = getattr(candidate, "content", None)
    parts = (getattr(content, "parts", None) if content else None) or []

    segments = []
    for part in parts:
        inline = getattr(part, "inline_data", None)
        segments.append(
            ResponseSegment(
                mime_type=getattr(inline, "mime_type", None) if inline else None,
                data=getattr(inline, "data", None) if inline else None,
                text=getattr(part, "text", None),
            )
        )

    return ProviderResponse(
        segments=tuple(segments),
        finish_reason=_enum_value(getattr(candidate, "finish_reason", None)),
    )


class GeminiImageService:
    """Provider adapter for image editing with Gemini models."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[genai.Client] = None,
    ):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model_name = model_name or settings.GEMINI_MODEL
        self.timeout = timeout or settings.GENERATION_TIMEOUT
        self._client = client
        logger.info(f"[Gemini] Initialized with model: {self.model_name}")

    def check_configured(self) -> None:
        """Raise ConfigurationError if no client can be built."""
        if self._client is None and not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY environment variable not set")

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self.check_configured()
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def build_contents(self, request: GenerationRequest) -> List[types.Content]:
        """Image parts in upload order, then the instruction as a trailing text part."""
        parts = [
            types.Part.from_bytes(data=base64.b64decode(part.data), mime_type=part.mime_type)
            for part in request.image_parts
        ]
        parts.append(types.Part.from_text(text=request.instruction))
        return [types.Content(role="user", parts=parts)]

    def build_config(self) -> types.GenerateContentConfig:
        # Image editing needs TEXT alongside IMAGE
        return types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"])

    async def generate(self, request: GenerationRequest) -> ProviderResponse:
        """
        Issue one generate_content call.

        Any SDK error or timeout propagates to the caller unchanged.
        """
        logger.debug(
            f"[Gemini] Sending {len(request.image_parts)} image(s) to {self.model_name}, "
            f"prompt: {request.instruction[:100]}..."
        )
        response = await asyncio.wait_for(
            self.client.aio.models.generate_content(
                model=self.model_name,
                contents=self.build_contents(request),
                config=self.build_config(),
            ),
            timeout=self.timeout,
        )
        return normalize_response(response)
