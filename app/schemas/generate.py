"""
Generate Schemas
Pydantic models for generation API responses.
"""

import time
from typing import List, Optional
from pydantic import BaseModel

from app.models.generation import AspectRatio, Quality


class GeneratedImage(BaseModel):
    """One renderable result."""
    id: str
    src: str  # data:{mime};base64,{payload}
    alt: str
    filename: str

    @classmethod
    def from_results(cls, images: List[str], character: str = "", now_ms: Optional[int] = None) -> List["GeneratedImage"]:
        """Attach ids, alt text and download names to generated data URIs."""
        stamp = int(time.time() * 1000) if now_ms is None else now_ms
        alt = character.strip()
        return [
            cls(
                id=f"gen-{stamp}-{index}",
                src=src,
                alt=alt or f"Generated image {index + 1}",
                filename=f"generated-image-{index + 1}.png",
            )
            for index, src in enumerate(images)
        ]


class GenerateResponse(BaseModel):
    """Schema for generation response."""
    images: List[GeneratedImage]
    prompt: str


class PromptPreviewResponse(BaseModel):
    """Schema for prompt preview response."""
    prompt: str
    image_count: int


class GenerationOptionsResponse(BaseModel):
    """Choices the form can offer."""
    qualities: List[Quality] = list(Quality)
    aspect_ratios: List[AspectRatio] = list(AspectRatio)
    fan_out_count: int
    max_images: int
    defaults: dict = {
        "quality": Quality.STANDARD.value,
        "aspect_ratio": AspectRatio.SQUARE.value,
        "remove_background": True,
    }
