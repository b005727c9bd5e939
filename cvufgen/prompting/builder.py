"""Builds the generation prompts sent to the document model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import FlagValue, IntakeRequest, TemplateMatch, is_affirmative, is_yes
from .constants import (
    CRITICAL_INSTRUCTIONS,
    DEFAULT_BRANDING,
    DELIVERABLES,
    HINT_THRESHOLD,
    NONE_LABEL,
    NOT_SPECIFIED,
    STORE_ONLY,
    SYSTEM_ROLE,
)


@dataclass(frozen=True)
class PromptMessage:
    """Represents a single chat message for LLM prompting."""

    role: str
    content: str


@dataclass
class PromptRequest:
    """A complete generation request: system prompt plus chat messages."""

    system: str
    messages: List[PromptMessage]
    max_tokens: int | None = None
    metadata: Dict[str, object] = field(default_factory=dict)


def _or_placeholder(value: Any, placeholder: str = NOT_SPECIFIED) -> str:
    if value is None or value == "":
        return placeholder
    return str(value)


def _or_none(value: Any) -> str:
    return _or_placeholder(value, NONE_LABEL)


def _yes_no(value: FlagValue) -> str:
    return "Yes" if is_affirmative(value) else "No"


def _answer(value: FlagValue) -> str:
    if value is None:
        return NOT_SPECIFIED
    return "Yes" if is_yes(value) else "No"


def _detail(value: Any) -> str:
    return f" - {value}" if value else ""


def _join_or(values: Sequence[str], fallback: str) -> str:
    return ", ".join(values) if values else fallback


class PromptBuilder:
    """Renders the labelled requirement prompt and the system prompt."""

    def __init__(self, templates_dir: Path | None = None, *, max_tokens: int | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self.max_tokens = max_tokens
        self._env = self._create_env(self.templates_dir)

    def build(self, request: IntakeRequest, match: TemplateMatch) -> str:
        """Return the user prompt describing ``request``.

        The archetype hint is only included when the match score reaches
        ``HINT_THRESHOLD``.
        """
        suggested = match if match.template_id and match.score >= HINT_THRESHOLD else None
        template = self._env.get_template("generation.j2")
        return template.render(
            r=request,
            suggested_template=suggested,
            deliverables=DELIVERABLES,
            store_only=STORE_ONLY,
            none_label=NONE_LABEL,
            default_branding=DEFAULT_BRANDING,
        ).strip()

    def build_system_prompt(self) -> str:
        template = self._env.get_template("system.j2")
        return template.render(role=SYSTEM_ROLE, instructions=CRITICAL_INSTRUCTIONS).strip()

    def build_request(self, request: IntakeRequest, match: TemplateMatch) -> PromptRequest:
        """Bundle the system and user prompts into a single ``PromptRequest``."""
        return PromptRequest(
            system=self.build_system_prompt(),
            messages=[PromptMessage(role="user", content=self.build(request, match))],
            max_tokens=self.max_tokens,
            metadata={"templateMatch": match.to_dict()},
        )

    @staticmethod
    def _create_env(templates_dir: Path) -> Environment:
        env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        env.filters.update(
            or_placeholder=_or_placeholder,
            or_none=_or_none,
            yes_no=_yes_no,
            answer=_answer,
            detail=_detail,
            join_or=_join_or,
        )
        return env


__all__ = ["PromptBuilder", "PromptMessage", "PromptRequest"]
