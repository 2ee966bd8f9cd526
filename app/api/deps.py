"""
API Dependencies
Common dependencies for FastAPI routes.
"""

from functools import lru_cache

from app.services.gemini_image import GeminiImageService
from app.services.pipeline import GenerationPipeline


@lru_cache()
def get_pipeline() -> GenerationPipeline:
    """Shared pipeline backed by the Gemini provider."""
    return GenerationPipeline(provider=GeminiImageService())
