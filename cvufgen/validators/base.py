"""Core intake check data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ..models import IntakeRequest, ValidationWarning

RequestPredicate = Callable[[IntakeRequest], bool]


class IntakeCheck(Protocol):
    """Protocol implemented by intake consistency checks."""

    field: str

    def check(self, request: IntakeRequest) -> Optional[ValidationWarning]:
        """Return a warning when the request fails this check."""


@dataclass(frozen=True)
class MissingDetailCheck:
    """Flags a feature that was requested without its supporting detail."""

    field: str
    message: str
    requested: RequestPredicate
    detailed: RequestPredicate

    def check(self, request: IntakeRequest) -> Optional[ValidationWarning]:
        if self.requested(request) and not self.detailed(request):
            return ValidationWarning(field=self.field, message=self.message)
        return None


@dataclass(frozen=True)
class CombinationCheck:
    """Flags a combination of answers that works but deserves attention."""

    field: str
    message: str
    applies: RequestPredicate

    def check(self, request: IntakeRequest) -> Optional[ValidationWarning]:
        if self.applies(request):
            return ValidationWarning(field=self.field, message=self.message)
        return None


__all__ = ["CombinationCheck", "IntakeCheck", "MissingDetailCheck", "RequestPredicate"]
