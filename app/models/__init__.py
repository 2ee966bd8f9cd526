# Pipeline models package
from app.models.generation import (
    Quality,
    AspectRatio,
    UploadedImage,
    FormParameters,
    EncodedImagePart,
    GenerationRequest,
    ResponseSegment,
    ProviderResponse,
    GenerationOutcome,
    GenerationResult,
)

__all__ = [
    "Quality",
    "AspectRatio",
    "UploadedImage",
    "FormParameters",
    "EncodedImagePart",
    "GenerationRequest",
    "ResponseSegment",
    "ProviderResponse",
    "GenerationOutcome",
    "GenerationResult",
]
