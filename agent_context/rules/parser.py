"""Parse and serialize per-language rule documents."""

from __future__ import annotations

from agent_context.utils import capitalize_first

_BULLET_MARKERS = ("- ", "* ")


def parse_rules(content: str) -> list[str]:
    """Return bullet items, ignoring headings, prose and blank lines."""
    rules: list[str] = []
    for line in content.split("\n"):
        trimmed = line.strip()
        if not trimmed.startswith(_BULLET_MARKERS):
            continue
        rule = trimmed[2:].strip()
        if rule:
            rules.append(rule)
    return rules


def document_title(language: str) -> str:
    return f"# {capitalize_first(language)} Rules"


def serialize_document(language: str, rules: list[str]) -> str:
    lines = [document_title(language), ""]
    lines.extend(f"- {rule}" for rule in rules)
    return "\n".join(lines) + "\n"


def append_rule(content: str, rule: str) -> str:
    return f"{content.rstrip()}\n- {rule}\n"
