"""One LLM-assisted extraction pass over buffered user messages."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from agent_context.reasoning.clients import IModelClient
from agent_context.reasoning.models import (
    CycleOutcome,
    CycleResult,
    CycleState,
    RuleCandidate,
)
from agent_context.reasoning.parser import (
    extract_text_from_result,
    normalize_rule,
    parse_extraction_response,
)
from agent_context.reasoning.prompts import build_extraction_prompt, get_system_prompt
from agent_context.rules.repository import ContextRepository
from agent_context.utils import sanitize_language

logger = logging.getLogger(__name__)


class RuleExtractionCycle:
    """Runs extraction cycles and tracks how much of the transcript is done.

    The watermark is the number of buffered messages already processed. It
    moves forward after a successful call, including one that extracted no
    rules, and stays put when the model call fails so the same messages are
    retried on the next trigger.
    """

    def __init__(self, store: ContextRepository, client: IModelClient) -> None:
        self._store = store
        self._client = client
        self._watermark = 0
        self._state = CycleState.IDLE
        self._running = False

    @property
    def watermark(self) -> int:
        return self._watermark

    @property
    def state(self) -> CycleState:
        return self._state

    def rebase(self, dropped: int) -> None:
        """Shift the watermark after ``dropped`` messages left the buffer."""
        self._watermark = max(0, self._watermark - dropped)

    def run(self, messages: Sequence[str]) -> CycleResult:
        if self._running or len(messages) <= self._watermark:
            return CycleResult(outcome=CycleOutcome.UNCHANGED, processed=self._watermark)

        self._running = True
        try:
            return self._run(messages)
        finally:
            self._running = False
            self._state = CycleState.IDLE

    def _run(self, messages: Sequence[str]) -> CycleResult:
        total = len(messages)
        existing = [
            rule for rules in self._store.get_all_rules().values() for rule in rules
        ]
        prompt = build_extraction_prompt(messages[self._watermark :], existing)
        self._state = CycleState.PROMPT_BUILT

        raw, error = self._call_model(prompt)
        if raw is None:
            logger.warning("Rule extraction failed: %s", error)
            return CycleResult(
                outcome=CycleOutcome.FAILED, processed=self._watermark, error=error
            )

        candidates = parse_extraction_response(raw)
        self._state = CycleState.RESPONSE_PARSED

        if not candidates:
            self._state = CycleState.SKIPPED
            self._watermark = total
            logger.info("Rule extraction found nothing new in %d message(s)", total)
            return CycleResult(outcome=CycleOutcome.SKIPPED, processed=total)

        applied: list[RuleCandidate] = []
        for candidate in candidates:
            rule = normalize_rule(candidate.rule)
            language = sanitize_language(candidate.language)
            if self._store.add_rule(language, rule):
                applied.append(RuleCandidate(rule=rule, language=language))
                logger.info("Saved rule to %s: %s", language, rule)

        self._state = CycleState.APPLIED
        self._watermark = total
        return CycleResult(outcome=CycleOutcome.APPLIED, rules=applied, processed=total)

    def _call_model(self, prompt: str) -> tuple[Optional[str], Optional[str]]:
        session_id: Optional[str] = None
        try:
            session_id = self._client.create_session()
            self._state = CycleState.AWAITING_MODEL
            result = self._client.prompt(session_id, prompt, system=get_system_prompt())
        except Exception as exc:
            return None, str(exc) or exc.__class__.__name__
        finally:
            if session_id is not None:
                self._release(session_id)

        text = extract_text_from_result(result)
        if text is None:
            return None, "model result contained no text"
        return text, None

    def _release(self, session_id: str) -> None:
        try:
            self._client.delete_session(session_id)
        except Exception as exc:
            logger.warning("Could not release model session %s: %s", session_id, exc)
