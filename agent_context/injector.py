"""Assemble remembered rules into a block for prompt augmentation."""

from __future__ import annotations

from typing import Iterable

from agent_context.constants import GENERAL_LANGUAGE
from agent_context.rules.repository import ContextRepository

INJECTION_HEADER = (
    "## Agent Context - Remembered Rules\n"
    "The following rules were explicitly saved by the user across previous sessions.\n"
    "Follow these rules unless the user explicitly overrides them.\n"
)


class ContextInjector:
    def __init__(self, store: ContextRepository) -> None:
        self._store = store

    def build_context_injection(self, active_languages: Iterable[str]) -> str:
        targets = set(active_languages)
        targets.add(GENERAL_LANGUAGE)

        sections: list[str] = []
        for language in self._store.list_context_files():
            if language not in targets:
                continue
            content = self._store.get_context_file_content(language)
            if content and content.strip():
                sections.append(content.strip())

        if not sections:
            return ""
        return INJECTION_HEADER + "\n" + "\n\n".join(sections) + "\n"

    def build_compact_context_string(self, active_languages: Iterable[str]) -> list[str]:
        injection = self.build_context_injection(active_languages)
        if not injection:
            return []
        return [injection]
