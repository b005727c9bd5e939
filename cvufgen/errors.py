"""Error taxonomy for the generation pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .models import DocumentIssue


class GenerationError(RuntimeError):
    """Base class for failures that abort document synthesis."""


class UpstreamGenerationError(GenerationError):
    """Raised when the generative provider call fails or returns nothing usable."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class TransientProviderError(UpstreamGenerationError):
    """Provider failure that is worth retrying (network, throttling, 5xx)."""


class MalformedDocument(GenerationError):
    """Raised when provider output cannot be turned into a CVUF document."""

    def __init__(self, message: str, issues: Sequence["DocumentIssue"] = ()) -> None:
        super().__init__(message)
        self.issues = list(issues)


class InputShapeError(ValueError):
    """Raised when the intake payload is not a key/value mapping at all."""


__all__ = [
    "GenerationError",
    "InputShapeError",
    "MalformedDocument",
    "TransientProviderError",
    "UpstreamGenerationError",
]
