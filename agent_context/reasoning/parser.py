"""Tolerant parsing of model replies.

Models wrap JSON in code fences, surround it with prose, or return something
that is not JSON at all. Everything here degrades to an empty result instead
of raising.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Optional

from agent_context.constants import GENERAL_LANGUAGE, MAX_RESULT_SCRAPE_LENGTH
from agent_context.reasoning.models import RuleCandidate
from agent_context.rules.classifier import normalize_rule

__all__ = [
    "extract_text_from_result",
    "normalize_rule",
    "parse_extraction_response",
]

_FENCE_RE = re.compile(r"```[\w-]*\s*\n?(.*?)\n?\s*```", re.DOTALL)
_ARRAY_RE = re.compile(r"\[.*?\]", re.DOTALL)


def _json_payload(text: str) -> str:
    fence = _FENCE_RE.search(text)
    if fence:
        return fence.group(1).strip()

    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end > start:
        return text[start : end + 1]
    return text


def _to_candidate(item: Any) -> Optional[RuleCandidate]:
    if not isinstance(item, dict):
        return None
    rule = item.get("rule")
    if not isinstance(rule, str) or not rule.strip():
        return None
    language = item.get("language")
    return RuleCandidate(
        rule=rule.strip(),
        language=language.lower() if isinstance(language, str) else GENERAL_LANGUAGE,
    )


def parse_extraction_response(raw: str) -> list[RuleCandidate]:
    try:
        parsed = json.loads(_json_payload(raw.strip()))
    except (ValueError, RecursionError):
        return []
    if not isinstance(parsed, list):
        return []

    candidates: list[RuleCandidate] = []
    for item in parsed:
        candidate = _to_candidate(item)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def _first_text(items: Any) -> Optional[str]:
    if not isinstance(items, list):
        return None
    for item in items:
        if isinstance(item, str):
            return item
        if isinstance(item, dict) and isinstance(item.get("text"), str):
            return item["text"]
    return None


def _direct_text(result: dict[str, Any]) -> Optional[str]:
    text = result.get("text")
    return text if isinstance(text, str) else None


def _parts_text(result: dict[str, Any]) -> Optional[str]:
    return _first_text(result.get("parts")) or None


def _content_text(result: dict[str, Any]) -> Optional[str]:
    return _first_text(result.get("content")) or None


_FLAT_VARIANTS: tuple[Callable[[dict[str, Any]], Optional[str]], ...] = (
    _direct_text,
    _parts_text,
)


def _message_text(result: dict[str, Any]) -> Optional[str]:
    message = result.get("message")
    if not isinstance(message, dict):
        return None
    for variant in (*_FLAT_VARIANTS, _content_text):
        text = variant(message)
        if text is not None:
            return text
    return None


def _scraped_array(result: dict[str, Any]) -> Optional[str]:
    try:
        serialized = json.dumps(result, default=str)
    except (TypeError, ValueError, RecursionError):
        return None
    if len(serialized) <= 2 or len(serialized) >= MAX_RESULT_SCRAPE_LENGTH:
        return None
    match = _ARRAY_RE.search(serialized)
    return match.group(0) if match else None


RESULT_VARIANTS: tuple[Callable[[dict[str, Any]], Optional[str]], ...] = (
    _direct_text,
    _parts_text,
    _message_text,
    _content_text,
    _scraped_array,
)


def extract_text_from_result(result: Any) -> Optional[str]:
    """Pull the reply text out of an opaque model result.

    Shapes are tried in a fixed order: ``text``, ``parts``, nested
    ``message`` (one level), ``content``, then a scrape of the serialized
    result for an array.
    """
    if not isinstance(result, dict):
        return None
    for variant in RESULT_VARIANTS:
        text = variant(result)
        if text is not None:
            return text
    return None
