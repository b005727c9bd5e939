"""Prompt construction for CVUF generation."""

from .builder import PromptBuilder, PromptMessage, PromptRequest
from .constants import HINT_THRESHOLD

__all__ = ["HINT_THRESHOLD", "PromptBuilder", "PromptMessage", "PromptRequest"]
