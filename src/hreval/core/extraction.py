"""Locate and decode the JSON object inside a raw model completion."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Literal

ExtractionStrategy = Literal["json_fence", "fence", "braces", "raw"]

_FENCE = "```"
_JSON_LABEL = "json"
_FENCE_TAG = re.compile(r"[\w+-]*")


@dataclass(slots=True)
class JsonCandidate:
    """Substring that looks like JSON and the strategy that found it."""

    strategy: ExtractionStrategy
    text: str


@dataclass(slots=True)
class ParsedResponse:
    """Decoded payload of unknown shape."""

    strategy: ExtractionStrategy
    payload: Any


class ResponseExtractor:
    """Find JSON in free-form completions without ever raising.

    Strategies are tried in order: a fenced block labelled ``json``, any
    fenced block, then the span from the first ``{`` to the last ``}``.
    Fences are located with ``str.find`` so every scan is linear in the
    response length, including unterminated fences.
    """

    def extract(self, text: Any) -> JsonCandidate | None:
        if not isinstance(text, str) or not text:
            return None

        body = _json_fence_body(text)
        if body is not None:
            return JsonCandidate("json_fence", body.strip())

        body = _fence_body(text)
        if body is not None:
            return JsonCandidate("fence", body.strip())

        start = text.find("{")
        end = text.rfind("}")
        if start != -1 and end > start:
            return JsonCandidate("braces", text[start : end + 1])
        return None

    def parse(self, text: Any) -> ParsedResponse | None:
        """Decode the extracted candidate, then the whole response.

        Returns ``None`` when nothing decodes; a decoded ``null`` is still a
        successful parse.
        """
        if not isinstance(text, str):
            return None

        candidate = self.extract(text)
        if candidate is not None:
            ok, payload = _loads(candidate.text.strip())
            if ok:
                return ParsedResponse(candidate.strategy, payload)

        ok, payload = _loads(text.strip())
        if ok:
            return ParsedResponse("raw", payload)
        return None


def _loads(text: str) -> tuple[bool, Any]:
    if not text:
        return False, None
    try:
        return True, json.loads(text)
    except (ValueError, RecursionError):
        return False, None


def _json_fence_body(text: str) -> str | None:
    start = text.find(_FENCE)
    while start != -1:
        label_end = start + len(_FENCE) + len(_JSON_LABEL)
        if text[start + len(_FENCE) : label_end].lower() == _JSON_LABEL:
            end = text.find(_FENCE, label_end)
            return text[label_end:end] if end != -1 else None
        start = text.find(_FENCE, start + 1)
    return None


def _fence_body(text: str) -> str | None:
    start = text.find(_FENCE)
    if start == -1:
        return None
    body_start = _FENCE_TAG.match(text, start + len(_FENCE)).end()
    end = text.find(_FENCE, body_start)
    return text[body_start:end] if end != -1 else None
