# Services package - generation pipeline stages and the Gemini integration
from app.services.encoder import encode_image, encode_images
from app.services.prompt_composer import PromptContext, compose_instruction, compose_prompt
from app.services.request_builder import build_request
from app.services.response_reducer import reduce_response
from app.services.fan_out import FanOutExecutor, ImageProvider
from app.services.gemini_image import GeminiImageService
from app.services.pipeline import GenerationPipeline, collect_images

__all__ = [
    "encode_image",
    "encode_images",
    "PromptContext",
    "compose_instruction",
    "compose_prompt",
    "build_request",
    "reduce_response",
    "FanOutExecutor",
    "ImageProvider",
    "GeminiImageService",
    "GenerationPipeline",
    "collect_images",
]
