"""Repository for per-language rule documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from agent_context.constants import CONTEXT_DIRNAME, RULE_FILE_SUFFIX
from agent_context.rules.parser import append_rule, parse_rules, serialize_document
from agent_context.utils import sanitize_language

logger = logging.getLogger(__name__)


class ContextRepository:
    """One Markdown document of bullet rules per language tag.

    There is no locking: concurrent writers on one document can lose an
    append. I/O errors are left to the caller.
    """

    def __init__(self, project_root: Path, context_dir: str = CONTEXT_DIRNAME) -> None:
        self._project_root = project_root
        self._context_dir = project_root / context_dir

    @property
    def project_root(self) -> Path:
        return self._project_root

    @property
    def context_dir(self) -> Path:
        return self._context_dir

    def rule_path(self, language: str) -> Path:
        return self._context_dir / f"{sanitize_language(language)}{RULE_FILE_SUFFIX}"

    def read_rules(self, language: str) -> list[str]:
        content = self.get_context_file_content(language)
        if content is None:
            return []
        return parse_rules(content)

    def add_rule(self, language: str, rule: str) -> bool:
        """Append ``rule`` to the language document; return False if unchanged."""
        self._context_dir.mkdir(parents=True, exist_ok=True)
        key = sanitize_language(language)
        path = self.rule_path(key)
        normalized = rule.strip()
        if not normalized:
            return False

        lowered = normalized.lower()
        if any(existing.lower() == lowered for existing in self.read_rules(key)):
            logger.debug("Rule already saved to %s: %s", key, normalized)
            return False

        if not path.exists():
            path.write_text(serialize_document(key, [normalized]), encoding="utf-8")
        else:
            current = path.read_text(encoding="utf-8")
            path.write_text(append_rule(current, normalized), encoding="utf-8")
        return True

    def get_all_rules(self) -> dict[str, list[str]]:
        result: dict[str, list[str]] = {}
        for language in self.list_context_files():
            rules = self.read_rules(language)
            if rules:
                result[language] = rules
        return result

    def get_context_file_content(self, language: str) -> Optional[str]:
        path = self.rule_path(language)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def list_context_files(self) -> list[str]:
        if not self._context_dir.exists():
            return []
        languages: list[str] = []
        for child in sorted(self._context_dir.iterdir()):
            if child.suffix == RULE_FILE_SUFFIX and not child.name.startswith(".") and child.is_file():
                languages.append(child.stem)
        return languages
