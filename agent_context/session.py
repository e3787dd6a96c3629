"""Per-project session state and host event handlers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from agent_context.config import AgentContextConfig
from agent_context.constants import GENERAL_LANGUAGE
from agent_context.injector import ContextInjector
from agent_context.languages.detector import (
    frameworks_for_files,
    language_for_extension,
    language_from_utterance,
    languages_for_files,
)
from agent_context.project_files import ProjectFileScanner
from agent_context.reasoning.clients import IModelClient
from agent_context.reasoning.cycle import RuleExtractionCycle
from agent_context.reasoning.models import CycleResult
from agent_context.rules.classifier import extract_with_language, is_memorable, normalize_rule
from agent_context.rules.models import CapturedRule
from agent_context.rules.repository import ContextRepository
from agent_context.utils import capitalize_first, sanitize_language

logger = logging.getLogger(__name__)

REMEMBER_USAGE = "No rule provided. Usage: /remember <rule>"
NO_RULES_HINT = (
    "No rules saved yet. Use /remember to save a rule, or just explain a "
    "preference and it will be auto-detected."
)

FileLister = Callable[[], Iterable[str]]


class ActiveLanguageSet:
    """Insertion-ordered set of language tags relevant to a session."""

    def __init__(self, languages: Iterable[str] = ()) -> None:
        self._languages: dict[str, None] = {}
        self.update(languages)

    def add(self, language: str) -> None:
        self._languages.setdefault(language)

    def update(self, languages: Iterable[str]) -> None:
        for language in languages:
            self.add(language)

    def as_list(self) -> list[str]:
        return list(self._languages)

    def __contains__(self, language: object) -> bool:
        return language in self._languages

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._languages))

    def __len__(self) -> int:
        return len(self._languages)


class AgentContextSession:
    def __init__(
        self,
        project_root: Path,
        config: Optional[AgentContextConfig] = None,
        client: Optional[IModelClient] = None,
    ) -> None:
        self.project_root = project_root
        self.config = config or AgentContextConfig()
        self.store = ContextRepository(project_root, self.config.context_dir)
        self.injector = ContextInjector(self.store)
        self.languages = ActiveLanguageSet()
        self.messages: list[str] = []
        self.cycle = RuleExtractionCycle(self.store, client) if client is not None else None
        self._initialized = False

    def initialize(self, file_lister: Optional[FileLister] = None) -> None:
        if self._initialized:
            return
        self._initialized = True

        lister = file_lister or ProjectFileScanner(self.project_root).list_files
        try:
            files = list(lister())
        except Exception as exc:
            logger.debug("Could not auto-detect project languages: %s", exc)
        else:
            self.languages.update(languages_for_files(files))
            self.languages.update(frameworks_for_files(files))

        logger.info(
            "Agent context initialized (languages=%s, context_files=%s)",
            self.languages.as_list(),
            self.store.list_context_files(),
        )

    def handle_user_message(self, text: str) -> Optional[CapturedRule]:
        self._buffer(text)
        if not self.config.auto_capture or not is_memorable(text):
            return None

        extracted = extract_with_language(text, language_from_utterance)
        language = sanitize_language(extracted.language or GENERAL_LANGUAGE)
        added = self.store.add_rule(language, extracted.text)
        self.languages.add(language)
        if added:
            logger.info("Saved rule to %s: %s", language, extracted.text)
        return CapturedRule(text=extracted.text, language=language, added=added)

    def handle_file_read(self, path: str) -> Optional[str]:
        language = language_for_extension(path)
        if language is not None:
            self.languages.add(language)
        return language

    def handle_idle(self) -> Optional[CycleResult]:
        if self.cycle is None or not self.config.reasoning.enabled:
            return None
        result = self.cycle.run(self.messages)
        for rule in result.rules:
            self.languages.add(rule.language)
        return result

    def compaction_context(self) -> list[str]:
        contexts = self.injector.build_compact_context_string(self.languages.as_list())
        logger.debug(
            "Injected context (languages=%s, count=%d)", self.languages.as_list(), len(contexts)
        )
        return contexts

    def remember(self, rule: str, language: Optional[str] = None) -> str:
        if not rule or not rule.strip():
            return REMEMBER_USAGE
        target = sanitize_language(language or GENERAL_LANGUAGE)
        cleaned = normalize_rule(rule)
        self.store.add_rule(target, cleaned)
        self.languages.add(target)
        return f"Rule saved to {target} context:\n> {cleaned}"

    def describe_rules(self) -> str:
        all_rules = self.store.get_all_rules()
        if not all_rules:
            return NO_RULES_HINT

        sections = []
        for language, rules in all_rules.items():
            listing = "\n".join(f"- {rule}" for rule in rules)
            sections.append(f"### {capitalize_first(language)}\n{listing}")
        return "## Saved Context Rules\n\n" + "\n\n".join(sections)

    def _buffer(self, text: str) -> None:
        if not text.strip():
            return
        self.messages.append(text)
        overflow = len(self.messages) - self.config.reasoning.max_buffered_messages
        if overflow > 0:
            del self.messages[:overflow]
            if self.cycle is not None:
                self.cycle.rebase(overflow)
