"""
Generation Pipeline Models
Value types passed between the pipeline stages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple

from app.core.errors import CallFailure, FailureKind


class Quality(str, Enum):
    """Requested output quality tier."""
    STANDARD = "Standard"
    TWO_K = "2K"
    FOUR_K = "4K"
    EIGHT_K = "8K"


class AspectRatio(str, Enum):
    """Supported output aspect ratios."""
    SQUARE = "1:1"
    PORTRAIT = "3:4"
    TALL = "9:16"
    WIDE = "16:9"


@dataclass(frozen=True)
class UploadedImage:
    """
    A user-supplied reference image.

    ``content`` is either raw bytes, a filesystem path, or a file-like object
    exposing ``read()`` (sync or async, e.g. FastAPI's ``UploadFile``).
    """
    content: Any
    mime_type: str
    filename: Optional[str] = None


@dataclass(frozen=True)
class FormParameters:
    """Everything the caller collects for one generation."""
    character: str = ""
    scene: str = ""
    quality: Quality = Quality.STANDARD
    remove_background: bool = True
    aspect_ratio: AspectRatio = AspectRatio.SQUARE
    images: Tuple[UploadedImage, ...] = ()

    def __post_init__(self):
        # Accept plain strings / lists from callers
        object.__setattr__(self, "character", self.character or "")
        object.__setattr__(self, "scene", self.scene or "")
        object.__setattr__(self, "quality", Quality(self.quality))
        object.__setattr__(self, "aspect_ratio", AspectRatio(self.aspect_ratio))
        object.__setattr__(self, "images", tuple(self.images))

    @property
    def has_description(self) -> bool:
        return bool(self.character or self.scene)


@dataclass(frozen=True)
class EncodedImagePart:
    """Base64 payload of one uploaded image, tagged with its media type."""
    mime_type: str
    data: str


@dataclass(frozen=True)
class GenerationRequest:
    """Shared, read-only request issued by every fan-out call."""
    image_parts: Tuple[EncodedImagePart, ...]
    instruction: str


@dataclass(frozen=True)
class ResponseSegment:
    """One content part returned by the provider."""
    mime_type: Optional[str] = None
    data: Optional[Any] = None  # bytes or base64 str
    text: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return bool(self.data)


@dataclass(frozen=True)
class ProviderResponse:
    """Provider response normalized to ordered content segments."""
    segments: Tuple[ResponseSegment, ...] = ()
    finish_reason: Optional[str] = None

    @property
    def text(self) -> str:
        return " ".join(s.text for s in self.segments if s.text).strip()


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of one fan-out call: an image or a typed failure."""
    index: int
    mime_type: Optional[str] = None
    data: Optional[str] = None
    failure: Optional[CallFailure] = None

    @classmethod
    def success(cls, index: int, mime_type: str, data: str) -> "GenerationOutcome":
        return cls(index=index, mime_type=mime_type, data=data)

    @classmethod
    def failed(cls, index: int, kind: FailureKind, message: str) -> "GenerationOutcome":
        return cls(index=index, failure=CallFailure(index, kind, message))

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def data_uri(self) -> str:
        if not self.ok:
            raise ValueError(f"Outcome {self.index} has no image: {self.failure.message}")
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class GenerationResult:
    """All fan-out images, in issue order, as data URIs."""
    images: Tuple[str, ...]
    prompt: str = ""
    outcomes: Tuple[GenerationOutcome, ...] = field(default=(), repr=False)

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self):
        return iter(self.images)
