"""
Binary Encoder
Turns uploaded images into base64 inline-data parts.
"""

import asyncio
import base64
import inspect
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from app.core.errors import EncodingError, ValidationError
from app.models.generation import EncodedImagePart, UploadedImage

logger = logging.getLogger(__name__)


async def _read_all(content) -> bytes:
    """Read the full binary content of an upload source."""
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    if isinstance(content, Path):
        return await asyncio.to_thread(content.read_bytes)
    if hasattr(content, "read"):
        if hasattr(content, "seek"):
            # UploadFile / file objects may have been read already
            rewound = content.seek(0)
            if inspect.isawaitable(rewound):
                await rewound
        data = content.read()
        if inspect.isawaitable(data):
            data = await data
        return bytes(data)
    raise TypeError(f"Unsupported image source: {type(content).__name__}")


async def encode_image(image: UploadedImage, max_bytes: Optional[int] = None) -> EncodedImagePart:
    """
    Encode one uploaded image as base64 text.

    Args:
        image: Uploaded image to read
        max_bytes: Optional per-file size limit

    Raises:
        EncodingError: content could not be read or is empty
        ValidationError: content exceeds ``max_bytes``
    """
    name = image.filename or "upload"
    declared = getattr(image.content, "size", None)
    if max_bytes is not None and isinstance(declared, int) and declared > max_bytes:
        raise ValidationError(
            f"Image '{name}' is too large ({declared} bytes, limit {max_bytes})",
            details={"filename": image.filename, "size": declared},
        )

    try:
        raw = await _read_all(image.content)
    except Exception as e:
        logger.error(f"[Encoder] Failed to read {name}: {e}")
        raise EncodingError(
            f"Could not read image '{name}': {e}",
            details={"filename": image.filename},
        ) from e

    if not raw:
        raise EncodingError(f"Image '{name}' is empty", details={"filename": image.filename})

    if max_bytes is not None and len(raw) > max_bytes:
        raise ValidationError(
            f"Image '{name}' is too large ({len(raw)} bytes, limit {max_bytes})",
            details={"filename": image.filename, "size": len(raw)},
        )

    logger.debug(f"[Encoder] Encoded {name} ({len(raw)} bytes, {image.mime_type})")
    return EncodedImagePart(
        mime_type=image.mime_type,
        data=base64.b64encode(raw).decode("ascii"),
    )


async def encode_images(
    images: Iterable[UploadedImage],
    max_bytes: Optional[int] = None,
) -> List[EncodedImagePart]:
    """Encode all images concurrently, preserving upload order."""
    return list(await asyncio.gather(*(encode_image(img, max_bytes) for img in images)))
