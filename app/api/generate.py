"""
Generation API Routes
Accepts reference images and form fields, returns the generated variants.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.api.deps import get_pipeline
from app.core.errors import (
    ConfigurationError,
    EncodingError,
    GenerationFailedError,
    PipelineError,
    ValidationError,
)
from app.models.generation import AspectRatio, FormParameters, Quality, UploadedImage
from app.schemas.generate import (
    GeneratedImage,
    GenerateResponse,
    GenerationOptionsResponse,
    PromptPreviewResponse,
)
from app.services.pipeline import GenerationPipeline
from app.services.prompt_composer import PromptContext, compose_instruction

logger = logging.getLogger(__name__)

router = APIRouter()


def to_http_error(error: PipelineError) -> HTTPException:
    """Map a pipeline error to the response the form collaborator shows."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    if isinstance(error, EncodingError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=error.message)
    if isinstance(error, ConfigurationError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=error.message)
    if isinstance(error, GenerationFailedError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to generate images: {error.message}",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to generate images: {error.message}",
    )


@router.post("/generate", response_model=GenerateResponse)
async def generate_images(
    character: str = Form(""),
    scene: str = Form(""),
    quality: Quality = Form(Quality.STANDARD),
    remove_background: bool = Form(True),
    aspect_ratio: AspectRatio = Form(AspectRatio.SQUARE),
    files: Optional[List[UploadFile]] = File(None),
    pipeline: GenerationPipeline = Depends(get_pipeline),
):
    """
    Generate edited variants of the uploaded reference images.

    All variants are returned together, or the request fails as a whole.
    """
    files = files or []
    logger.info(f"[Generate API] Request with {len(files)} image(s), quality={quality.value}")

    params = FormParameters(
        character=character,
        scene=scene,
        quality=quality,
        remove_background=remove_background,
        aspect_ratio=aspect_ratio,
        images=tuple(
            UploadedImage(content=f, mime_type=f.content_type or "", filename=f.filename)
            for f in files
        ),
    )

    try:
        result = await pipeline.generate(params)
    except PipelineError as e:
        logger.warning(f"[Generate API] {type(e).__name__}: {e.message}")
        raise to_http_error(e) from e

    return GenerateResponse(
        images=GeneratedImage.from_results(list(result.images), character=character),
        prompt=result.prompt,
    )


@router.post("/prompt/preview", response_model=PromptPreviewResponse)
async def preview_prompt(
    image_count: int = Form(1, ge=1),
    character: str = Form(""),
    scene: str = Form(""),
    quality: Quality = Form(Quality.STANDARD),
    remove_background: bool = Form(True),
    aspect_ratio: AspectRatio = Form(AspectRatio.SQUARE),
):
    """Show the instruction that would be sent, without calling the model."""
    ctx = PromptContext(
        image_count=image_count,
        character=character,
        scene=scene,
        quality=quality,
        remove_background=remove_background,
        aspect_ratio=aspect_ratio,
    )
    return PromptPreviewResponse(prompt=compose_instruction(ctx), image_count=image_count)


@router.get("/options", response_model=GenerationOptionsResponse)
async def generation_options(pipeline: GenerationPipeline = Depends(get_pipeline)):
    """Quality tiers, aspect ratios and upload limits."""
    return GenerationOptionsResponse(
        fan_out_count=pipeline.fan_out_count,
        max_images=pipeline.max_images,
    )
