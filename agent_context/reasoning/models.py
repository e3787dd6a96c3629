"""Models for the LLM-assisted extraction pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class RuleCandidate:
    rule: str
    language: str


class CycleState(str, Enum):
    IDLE = "idle"
    PROMPT_BUILT = "prompt_built"
    AWAITING_MODEL = "awaiting_model"
    RESPONSE_PARSED = "response_parsed"
    APPLIED = "applied"
    SKIPPED = "skipped"


class CycleOutcome(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass
class CycleResult:
    outcome: CycleOutcome
    rules: list[RuleCandidate] = field(default_factory=list)
    processed: int = 0
    error: Optional[str] = None

    @property
    def advanced(self) -> bool:
        return self.outcome in (CycleOutcome.APPLIED, CycleOutcome.SKIPPED)
