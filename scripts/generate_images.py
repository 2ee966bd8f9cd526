#!/usr/bin/env python3
"""
Local Generation Script
Runs the generation pipeline against image files on disk.

Usage:
    python scripts/generate_images.py face.jpg --character "a knight"
    python scripts/generate_images.py a.png b.png --scene "a tavern" --quality 4K
    python scripts/generate_images.py face.jpg --character "a knight" --dry-run
"""

import argparse
import asyncio
import base64
import logging
import mimetypes
import os
import sys
from pathlib import Path
from typing import List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import settings
from app.core.errors import PipelineError
from app.models.generation import AspectRatio, FormParameters, Quality, UploadedImage
from app.services.gemini_image import GeminiImageService
from app.services.pipeline import GenerationPipeline
from app.services.prompt_composer import compose_prompt


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger("generate")


def load_images(paths: List[str]) -> List[UploadedImage]:
    images = []
    for path in paths:
        mime_type, _ = mimetypes.guess_type(path)
        images.append(UploadedImage(content=Path(path), mime_type=mime_type or "", filename=os.path.basename(path)))
    return images


def save_data_uri(data_uri: str, output_dir: Path, index: int) -> Path:
    """Write a data URI to generated-image-{n}.{ext}."""
    header, payload = data_uri.split(",", 1)
    mime_type = header[len("data:"):].split(";", 1)[0]
    extension = mimetypes.guess_extension(mime_type) or ".png"
    path = output_dir / f"generated-image-{index + 1}{extension}"
    path.write_bytes(base64.b64decode(payload))
    return path


def main():
    parser = argparse.ArgumentParser(description="Generate identity-preserving image variants")
    parser.add_argument("images", nargs="+", help="Reference image files (up to 5)")
    parser.add_argument("--character", "-c", default="", help="Character description")
    parser.add_argument("--scene", "-s", default="", help="Scene / environment description")
    parser.add_argument(
        "--quality", "-q",
        choices=[q.value for q in Quality],
        default=Quality.STANDARD.value,
        help="Quality tier (default: Standard)"
    )
    parser.add_argument(
        "--aspect-ratio", "-a",
        choices=[a.value for a in AspectRatio],
        default=AspectRatio.SQUARE.value,
        help="Aspect ratio (default: 1:1)"
    )
    parser.add_argument(
        "--keep-background",
        action="store_true",
        help="Do not ask the model to remove the background"
    )
    parser.add_argument("--output-dir", "-o", default="outputs", help="Where to write results")
    parser.add_argument("--dry-run", action="store_true", help="Print the prompt and exit")

    args = parser.parse_args()

    params = FormParameters(
        character=args.character,
        scene=args.scene,
        quality=args.quality,
        remove_background=not args.keep_background,
        aspect_ratio=args.aspect_ratio,
        images=load_images(args.images),
    )

    pipeline = GenerationPipeline(provider=GeminiImageService())

    if args.dry_run:
        try:
            pipeline.validate(params)
        except PipelineError as e:
            logger.error(f"Invalid input: {e.message}")
            sys.exit(2)
        print(compose_prompt(params))
        sys.exit(0)

    logger.info(f"Generating {settings.FAN_OUT_COUNT} variant(s) from {len(params.images)} image(s)")
    try:
        result = asyncio.run(pipeline.generate(params))
    except PipelineError as e:
        logger.error(f"Failed to generate images: {e.message}")
        if e.details:
            logger.error(f"Details: {e.details}")
        sys.exit(1)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    for index, data_uri in enumerate(result.images):
        path = save_data_uri(data_uri, output_dir, index)
        logger.info(f"Saved {path}")


if __name__ == "__main__":
    main()
