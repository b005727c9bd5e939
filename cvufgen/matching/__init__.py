"""Template archetype catalog and matcher."""

from .catalog import TEMPLATE_CATALOG
from .matcher import TemplateMatcher

__all__ = ["TEMPLATE_CATALOG", "TemplateMatcher"]
