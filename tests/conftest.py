"""Shared pytest fixtures for pipeline and API tests."""

import asyncio
from typing import Callable, List, Optional, Sequence, Union

import pytest

from app.models.generation import (
    FormParameters,
    GenerationRequest,
    ProviderResponse,
    ResponseSegment,
    UploadedImage,
)
from app.services.pipeline import GenerationPipeline

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def image_response(payload: bytes = b"generated", mime_type: str = "image/png") -> ProviderResponse:
    """Provider response with a text part followed by one image."""
    return ProviderResponse(
        segments=(
            ResponseSegment(text="Here is your image."),
            ResponseSegment(mime_type=mime_type, data=payload),
        ),
        finish_reason="STOP",
    )


def text_response(text: str = "I cannot edit this image.") -> ProviderResponse:
    return ProviderResponse(segments=(ResponseSegment(text=text),), finish_reason="STOP")


class FakeProvider:
    """In-memory provider recording every call.

    ``responses`` holds one entry per call index: a ProviderResponse to
    return or an exception to raise. ``delays`` optionally staggers calls.
    """

    def __init__(
        self,
        responses: Optional[Sequence[Union[ProviderResponse, Exception]]] = None,
        delays: Optional[Sequence[float]] = None,
    ):
        self.responses = list(responses) if responses is not None else None
        self.delays = list(delays) if delays is not None else None
        self.requests: List[GenerationRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def check_configured(self) -> None:
        pass

    async def generate(self, request: GenerationRequest) -> ProviderResponse:
        index = len(self.requests)
        self.requests.append(request)
        if self.delays:
            await asyncio.sleep(self.delays[index])
        if self.responses is None:
            return image_response(f"image-{index}".encode())
        item = self.responses[index]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture
def make_image_response() -> Callable[..., ProviderResponse]:
    return image_response


@pytest.fixture
def make_text_response() -> Callable[..., ProviderResponse]:
    return text_response


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def provider() -> FakeProvider:
    """Provider whose four calls all succeed."""
    return FakeProvider()


@pytest.fixture
def png_image() -> UploadedImage:
    return UploadedImage(content=PNG_BYTES, mime_type="image/png", filename="face.png")


@pytest.fixture
def make_form(png_image: UploadedImage) -> Callable[..., FormParameters]:
    """Build FormParameters with sensible defaults (one image, a character)."""

    def _make(**overrides) -> FormParameters:
        values = {
            "character": "a knight",
            "scene": "",
            "quality": "Standard",
            "remove_background": True,
            "aspect_ratio": "1:1",
            "images": (png_image,),
        }
        values.update(overrides)
        return FormParameters(**values)

    return _make


@pytest.fixture
def make_pipeline() -> Callable[..., GenerationPipeline]:
    def _make(provider, **kwargs) -> GenerationPipeline:
        kwargs.setdefault("fan_out_count", 4)
        kwargs.setdefault("max_images", 5)
        return GenerationPipeline(provider=provider, **kwargs)

    return _make


@pytest.fixture
def api_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def test_client(api_provider: FakeProvider, make_pipeline):
    """TestClient with the Gemini pipeline swapped for a fake provider."""
    from fastapi.testclient import TestClient

    from app.api.deps import get_pipeline
    from app.main import app

    app.dependency_overrides[get_pipeline] = lambda: make_pipeline(api_provider)
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
