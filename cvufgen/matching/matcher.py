"""Heuristic scoring of a request description against the archetype catalog."""

from __future__ import annotations

from typing import Optional, Sequence

from ..models import TemplateCatalogEntry, TemplateMatch
from .catalog import TEMPLATE_CATALOG

KEYWORD_POINTS = 20
DEPARTMENT_BONUS = 30


class TemplateMatcher:
    """Picks the single best-scoring archetype for a request.

    Each keyword found as a case-insensitive substring of the description is
    worth ``KEYWORD_POINTS``; a case-insensitive department match adds
    ``DEPARTMENT_BONUS``. Ties keep the entry that comes first in the catalog.
    """

    def __init__(self, catalog: Sequence[TemplateCatalogEntry] = TEMPLATE_CATALOG) -> None:
        self.catalog = tuple(catalog)

    def match(self, description: Optional[str], department: Optional[str]) -> TemplateMatch:
        """Return the best archetype, or ``TemplateMatch(None, 0)`` when nothing scores."""
        description_lower = (description or "").lower()
        department_lower = (department or "").strip().lower()

        best = TemplateMatch()
        for entry in self.catalog:
            score = self.score(entry, description_lower, department_lower)
            if score > best.score:
                best = TemplateMatch(template_id=entry.id, score=score)
        return best

    @staticmethod
    def score(entry: TemplateCatalogEntry, description_lower: str, department_lower: str) -> int:
        score = sum(KEYWORD_POINTS for keyword in entry.keywords if keyword in description_lower)
        if department_lower and entry.department.lower() == department_lower:
            score += DEPARTMENT_BONUS
        return score


__all__ = ["DEPARTMENT_BONUS", "KEYWORD_POINTS", "TemplateMatcher"]
