"""Extraction of a CVUF document from free-form provider output."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from ..errors import MalformedDocument

_FENCED = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?(?P<body>.*?)\n?[ \t]*```$", re.DOTALL)
_UNPARSED = object()


class ResponseParser:
    """Turns provider text into a document carrying a root ``form`` object.

    Recovery order: strip an enclosing code fence, parse the whole text, then
    parse the span from the first ``{`` to the last ``}``.
    """

    def parse(self, raw_text: str) -> Dict[str, Any]:
        """Return the parsed document or raise ``MalformedDocument``."""
        text = self.strip_fences(raw_text or "")

        document = self._load(text)
        if document is _UNPARSED:
            span = self._brace_span(text)
            if span is not None:
                document = self._load(span)
        if document is _UNPARSED:
            raise MalformedDocument("Failed to parse generated CVUF: no JSON object found")

        if not isinstance(document, dict) or not isinstance(document.get("form"), dict):
            raise MalformedDocument("Generated CVUF is missing the root 'form' object")
        return document

    @staticmethod
    def strip_fences(text: str) -> str:
        stripped = text.strip()
        match = _FENCED.match(stripped)
        if match:
            return match.group("body").strip()
        return stripped

    @staticmethod
    def _brace_span(text: str) -> Optional[str]:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return None
        return text[start : end + 1]

    @staticmethod
    def _load(text: str) -> Any:
        if not text:
            return _UNPARSED
        try:
            return json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError:
            return _UNPARSED


def serialize(document: Dict[str, Any]) -> str:
    """Return whitespace-minimal JSON for ``document``."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _reject_constant(name: str) -> Any:
    raise MalformedDocument(f"Generated CVUF contains non-JSON number {name}")


__all__ = ["ResponseParser", "serialize"]
