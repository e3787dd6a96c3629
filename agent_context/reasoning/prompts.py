"""Prompt construction for the extraction pass."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Sequence

SYSTEM_PROMPT_RESOURCE = "system_prompt.txt"


@lru_cache(maxsize=1)
def get_system_prompt() -> str:
    resource = resources.files("agent_context.reasoning").joinpath(SYSTEM_PROMPT_RESOURCE)
    return resource.read_text(encoding="utf-8").strip()


def build_extraction_prompt(messages: Sequence[str], existing_rules: Sequence[str]) -> str:
    parts: list[str] = []

    if existing_rules:
        parts.append(
            "## Already saved rules (do NOT re-extract these)\n"
            + "\n".join(f"- {rule}" for rule in existing_rules)
        )

    parts.append(
        "## User messages from this session\n"
        + "\n".join(f"[{index}] {message}" for index, message in enumerate(messages, start=1))
    )
    parts.append(
        "Analyze the messages above. Extract any new rules the user expressed. "
        "Respond with ONLY a JSON array."
    )
    return "\n\n".join(parts)
