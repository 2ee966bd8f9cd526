"""
Response Reducer
Picks the generated image out of a provider response.
"""

import base64
import logging

from app.core.errors import FailureKind
from app.models.generation import GenerationOutcome, ProviderResponse

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "No image was generated. The model may have returned only text."
DEFAULT_IMAGE_MIME = "image/png"


def reduce_response(response: ProviderResponse, index: int) -> GenerationOutcome:
    """
    Return the first inline image in the response as a success outcome.

    Later image segments are ignored. A response with no image at all is a
    NO_IMAGE_RETURNED failure for this call only.
    """
    for segment in response.segments:
        if not segment.has_image:
            continue
        data = segment.data
        if isinstance(data, (bytes, bytearray)):
            # SDK hands back decoded bytes
            data = base64.b64encode(data).decode("ascii")
        return GenerationOutcome.success(
            index=index,
            mime_type=segment.mime_type or DEFAULT_IMAGE_MIME,
            data=data,
        )

    message = NO_IMAGE_MESSAGE
    if response.finish_reason:
        message += f" Finish reason: {response.finish_reason}."
    text = response.text
    if text:
        logger.info(f"[Reducer] Call {index + 1} returned text only: {text[:100]}")
    return GenerationOutcome.failed(index, FailureKind.NO_IMAGE_RETURNED, message)
