"""Language detection tables."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageMapping:
    extensions: tuple[str, ...]
    language: str


@dataclass(frozen=True)
class FrameworkIndicator:
    framework: str
    indicators: tuple[str, ...]


@dataclass(frozen=True)
class LanguagePattern:
    pattern: re.Pattern[str]
    language: str
