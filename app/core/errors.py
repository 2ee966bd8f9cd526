"""
Pipeline Errors
Exception taxonomy for the generation pipeline.
"""

from enum import Enum
from typing import List, Optional


class FailureKind(str, Enum):
    """Why a single fan-out call did not yield an image."""
    TRANSPORT = "transport"
    NO_IMAGE_RETURNED = "no_image_returned"


class PipelineError(Exception):
    """Base exception for generation pipeline errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(PipelineError):
    """Input precondition violated. Raised before any network activity."""


class EncodingError(PipelineError):
    """An uploaded file's content could not be read."""


class ConfigurationError(PipelineError):
    """Service is missing configuration it needs to reach the provider."""


class GenerationFailedError(PipelineError):
    """
    Aggregate failure of a fan-out.

    The message names the first failed call (by issue index); every failure
    is kept in ``failures`` for diagnostics.
    """

    def __init__(self, failures: List["CallFailure"], total_calls: int):
        first = failures[0]
        message = f"Generation call {first.index + 1} of {total_calls} failed: {first.message}"
        super().__init__(
            message,
            details={
                "failed_calls": len(failures),
                "total_calls": total_calls,
                "failures": [f.as_dict() for f in failures],
            },
        )
        self.failures = failures
        self.total_calls = total_calls

    @property
    def kind(self) -> FailureKind:
        """Failure kind of the first failed call."""
        return self.failures[0].kind


class CallFailure:
    """Failure reason for one fan-out call."""

    __slots__ = ("index", "kind", "message")

    def __init__(self, index: int, kind: FailureKind, message: str):
        self.index = index
        self.kind = kind
        self.message = message

    def as_dict(self) -> dict:
        return {"index": self.index, "kind": self.kind.value, "message": self.message}

    def __repr__(self) -> str:
        return f"CallFailure(index={self.index}, kind={self.kind.value}, message={self.message!r})"
