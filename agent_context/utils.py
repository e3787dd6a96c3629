import re
from pathlib import Path

from agent_context.constants import GENERAL_LANGUAGE

_UNSAFE_TAG_CHARS = re.compile(r"[^a-z0-9-]")


def sanitize_language(language: str) -> str:
    """Lowercase a language tag and drop anything outside ``[a-z0-9-]``."""
    sanitized = _UNSAFE_TAG_CHARS.sub("", language.lower())
    return sanitized or GENERAL_LANGUAGE


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text
