"""Rule data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExtractedRule:
    text: str
    language: Optional[str] = None


@dataclass(frozen=True)
class CapturedRule:
    text: str
    language: str
    added: bool
