"""
Request Builder
Assembles encoded images and the instruction into one generation request.
"""

from typing import Sequence

from app.models.generation import EncodedImagePart, GenerationRequest


def build_request(image_parts: Sequence[EncodedImagePart], instruction: str) -> GenerationRequest:
    """Image parts keep upload order; the instruction trails them."""
    if not image_parts:
        # Upstream validation guarantees at least one image
        raise ValueError("A generation request needs at least one image part")
    return GenerationRequest(image_parts=tuple(image_parts), instruction=instruction)
