"""Heuristic detection and normalization of user-stated coding rules."""

from __future__ import annotations

import re
from typing import Callable, Optional

from agent_context.constants import MAX_RULE_LENGTH, MIN_RULE_LENGTH
from agent_context.rules.models import ExtractedRule
from agent_context.utils import capitalize_first

SIGNAL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bbecause\b", re.IGNORECASE),
    re.compile(r"\balways\b", re.IGNORECASE),
    re.compile(r"\bnever\b", re.IGNORECASE),
    re.compile(r"\bprefer\b", re.IGNORECASE),
    re.compile(r"\bavoid\b", re.IGNORECASE),
    re.compile(r"\buse\s+\S+\s+(?:for|instead|over)\b", re.IGNORECASE),
    re.compile(r"\bdon'?t\s+use\b", re.IGNORECASE),
    re.compile(r"\bdo\s+not\s+use\b", re.IGNORECASE),
    re.compile(r"\binstead\s+of\b", re.IGNORECASE),
    re.compile(r"\bmake\s+sure\s+(?:to|you)\b", re.IGNORECASE),
    re.compile(r"\bwhen\s+\w+ing\b.*\balways\b", re.IGNORECASE),
    re.compile(r"\bshould\s+(?:always|never)\b", re.IGNORECASE),
    re.compile(r"\brule\s*:", re.IGNORECASE),
    re.compile(r"\bconvention\s*:", re.IGNORECASE),
    re.compile(r"\bpattern\s*:", re.IGNORECASE),
)

NOISE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\s*$"),
    re.compile(
        r"^(?:ok|yes|no|sure|thanks|thank you|got it|understood|done|right)\s*[.!?]?\s*$",
        re.IGNORECASE,
    ),
    re.compile(r"^(?:can you|could you|please|help me|show me|tell me)\b", re.IGNORECASE),
    re.compile(
        r"^(?:what|where|when|who|how|why)\s+"
        r"(?:is|are|do|does|did|was|were|should|would|could|can)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"^(?:fix|run|build|test|deploy|install|update|upgrade|delete|remove|create|add)\s",
        re.IGNORECASE,
    ),
)

DISCOURSE_MARKERS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^remember\b\s*(?:that\b\s*)?[:,]?\s*", re.IGNORECASE),
    re.compile(r"^note\b\s*(?:that\b\s*)?[:,]?\s*", re.IGNORECASE),
    re.compile(r"^from\s+now\s+on\b\s*[:,]?\s*", re.IGNORECASE),
    re.compile(r"^going\s+forward\b\s*[:,]?\s*", re.IGNORECASE),
    re.compile(r"^in\s+this\s+project\b\s*[:,]?\s*", re.IGNORECASE),
)


def is_memorable(text: str) -> bool:
    """Return True when ``text`` reads like a durable coding preference.

    Noise (acknowledgements, questions, requests, commands) is checked before
    signal, so a message matching both is rejected.
    """
    trimmed = text.strip()
    if not MIN_RULE_LENGTH <= len(trimmed) <= MAX_RULE_LENGTH:
        return False
    if any(pattern.search(trimmed) for pattern in NOISE_PATTERNS):
        return False
    return any(pattern.search(trimmed) for pattern in SIGNAL_PATTERNS)


def _strip_discourse_markers(text: str) -> str:
    stripped = text
    while True:
        for pattern in DISCOURSE_MARKERS:
            match = pattern.match(stripped)
            if match and match.end() > 0:
                stripped = stripped[match.end() :]
                break
        else:
            return stripped


def normalize_rule(text: str) -> str:
    rule = capitalize_first(_strip_discourse_markers(text.strip()))
    if not rule.endswith((".", "!")):
        rule += "."
    return rule


def extract_with_language(
    text: str, detect: Callable[[str], Optional[str]]
) -> ExtractedRule:
    return ExtractedRule(text=normalize_rule(text), language=detect(text))
