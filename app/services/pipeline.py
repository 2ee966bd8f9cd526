"""
Generation Pipeline
Validates a form submission, builds one shared request and fans it out.

    validate -> encode images -> compose prompt -> build request
             -> fan out N calls -> reduce each -> all images or one error
"""

import logging
from typing import List, Optional, Sequence

from app.core.config import settings
from app.core.errors import GenerationFailedError, ValidationError
from app.models.generation import FormParameters, GenerationOutcome, GenerationResult
from app.services.encoder import encode_images
from app.services.fan_out import FanOutExecutor, ImageProvider
from app.services.prompt_composer import compose_prompt
from app.services.request_builder import build_request

logger = logging.getLogger(__name__)


def collect_images(outcomes: Sequence[GenerationOutcome]) -> List[str]:
    """
    All-or-nothing reduction of fan-out outcomes.

    Returns every data URI in issue order, or raises GenerationFailedError
    naming the lowest-index failure. There is no partial-result mode.
    """
    failures = [o.failure for o in outcomes if not o.ok]
    if failures:
        raise GenerationFailedError(failures, total_calls=len(outcomes))
    return [o.data_uri for o in outcomes]


class GenerationPipeline:
    """Turns FormParameters into FAN_OUT_COUNT edited images."""

    def __init__(
        self,
        provider: ImageProvider,
        fan_out_count: Optional[int] = None,
        max_images: Optional[int] = None,
        max_image_bytes: Optional[int] = None,
    ):
        self.provider = provider
        self.fan_out_count = fan_out_count or settings.FAN_OUT_COUNT
        self.max_images = max_images or settings.MAX_UPLOAD_IMAGES
        self.max_image_bytes = max_image_bytes or settings.MAX_UPLOAD_BYTES
        self.executor = FanOutExecutor(provider, count=self.fan_out_count)

    def validate(self, params: FormParameters) -> None:
        """Check preconditions. Nothing here touches the network."""
        if not params.images:
            raise ValidationError("no images provided")
        if len(params.images) > self.max_images:
            raise ValidationError(
                f"too many images provided ({len(params.images)}, maximum {self.max_images})",
                details={"count": len(params.images), "max": self.max_images},
            )
        if not params.has_description:
            raise ValidationError("no description provided")
        for image in params.images:
            if not (image.mime_type or "").startswith("image/"):
                raise ValidationError(
                    f"unsupported media type '{image.mime_type}' for {image.filename or 'upload'}",
                    details={"filename": image.filename, "mime_type": image.mime_type},
                )

    async def generate(self, params: FormParameters) -> GenerationResult:
        """
        Run one generation.

        Raises:
            ValidationError: bad input, no network call made
            EncodingError: an upload could not be read
            ConfigurationError: provider is not configured
            GenerationFailedError: at least one fan-out call failed
        """
        self.validate(params)
        self.provider.check_configured()

        parts = await encode_images(params.images, max_bytes=self.max_image_bytes)
        prompt = compose_prompt(params)
        request = build_request(parts, prompt)
        logger.info(
            f"[Pipeline] Generating {self.fan_out_count} variant(s) from "
            f"{len(parts)} image(s), prompt: {prompt[:100]}..."
        )

        outcomes = await self.executor.run(request)
        try:
            images = collect_images(outcomes)
        except GenerationFailedError as e:
            logger.error(f"[Pipeline] {e.message} ({len(e.failures)}/{e.total_calls} calls failed)")
            raise

        logger.info(f"[Pipeline] Generated {len(images)} image(s)")
        return GenerationResult(images=tuple(images), prompt=prompt, outcomes=tuple(outcomes))
