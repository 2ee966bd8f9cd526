# Pydantic schemas package
from app.schemas.generate import (
    GeneratedImage,
    GenerateResponse,
    PromptPreviewResponse,
    GenerationOptionsResponse,
)

__all__ = [
    "GeneratedImage",
    "GenerateResponse",
    "PromptPreviewResponse",
    "GenerationOptionsResponse",
]
