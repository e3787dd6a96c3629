"""Map file paths and utterances to language tags."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from agent_context.languages.models import (
    FrameworkIndicator,
    LanguageMapping,
    LanguagePattern,
)

LANGUAGE_MAP: tuple[LanguageMapping, ...] = (
    LanguageMapping((".ts", ".tsx", ".mts", ".cts"), "typescript"),
    LanguageMapping((".js", ".jsx", ".mjs", ".cjs"), "javascript"),
    LanguageMapping((".go",), "go"),
    LanguageMapping((".py", ".pyw"), "python"),
    LanguageMapping((".rs",), "rust"),
    LanguageMapping((".rb",), "ruby"),
    LanguageMapping((".java",), "java"),
    LanguageMapping((".kt", ".kts"), "kotlin"),
    LanguageMapping((".swift",), "swift"),
    LanguageMapping((".cs",), "csharp"),
    LanguageMapping((".cpp", ".cc", ".cxx", ".hpp", ".h"), "cpp"),
    LanguageMapping((".c",), "c"),
    LanguageMapping((".php",), "php"),
    LanguageMapping((".dart",), "dart"),
    LanguageMapping((".ex", ".exs"), "elixir"),
    LanguageMapping((".erl", ".hrl"), "erlang"),
    LanguageMapping((".zig",), "zig"),
    LanguageMapping((".lua",), "lua"),
    LanguageMapping((".scala", ".sc"), "scala"),
    LanguageMapping((".clj", ".cljs", ".cljc"), "clojure"),
    LanguageMapping((".hs",), "haskell"),
    LanguageMapping((".vue",), "vue"),
    LanguageMapping((".svelte",), "svelte"),
    LanguageMapping((".astro",), "astro"),
)

FRAMEWORK_INDICATORS: tuple[FrameworkIndicator, ...] = (
    FrameworkIndicator("nextjs", ("next.config.js", "next.config.mjs", "next.config.ts")),
    FrameworkIndicator("react", ("react", "react-dom")),
    FrameworkIndicator("vue", (".vue",)),
    FrameworkIndicator("svelte", (".svelte",)),
    FrameworkIndicator("astro", ("astro.config.mjs", "astro.config.ts")),
    FrameworkIndicator("tailwind", ("tailwind.config.js", "tailwind.config.ts")),
    FrameworkIndicator("prisma", ("prisma/schema.prisma",)),
    FrameworkIndicator("drizzle", ("drizzle.config.ts",)),
)


def _phrase(name: str) -> re.Pattern[str]:
    # (?!\w) also bounds names that end in a symbol, such as c# and c++.
    return re.compile(rf"\bin\s+{name}(?!\w)")


LANGUAGE_PATTERNS: tuple[LanguagePattern, ...] = (
    LanguagePattern(_phrase("typescript"), "typescript"),
    LanguagePattern(_phrase("javascript"), "javascript"),
    LanguagePattern(_phrase("go"), "go"),
    LanguagePattern(_phrase("golang"), "go"),
    LanguagePattern(_phrase("python"), "python"),
    LanguagePattern(_phrase("rust"), "rust"),
    LanguagePattern(_phrase("ruby"), "ruby"),
    LanguagePattern(_phrase("java"), "java"),
    LanguagePattern(_phrase("kotlin"), "kotlin"),
    LanguagePattern(_phrase("swift"), "swift"),
    LanguagePattern(_phrase("c#"), "csharp"),
    LanguagePattern(_phrase(r"c\+\+"), "cpp"),
    LanguagePattern(_phrase("php"), "php"),
    LanguagePattern(_phrase("dart"), "dart"),
    LanguagePattern(_phrase("elixir"), "elixir"),
    LanguagePattern(_phrase("react"), "react"),
    LanguagePattern(_phrase(r"next\.?js"), "nextjs"),
    LanguagePattern(_phrase("vue"), "vue"),
    LanguagePattern(_phrase("svelte"), "svelte"),
)


def _extension(path: str) -> str:
    last_dot = path.rfind(".")
    if last_dot == -1:
        return ""
    return path[last_dot:].lower()


def _last_segment(path: str) -> str:
    return path.replace("\\", "/").rsplit("/", 1)[-1]


def language_for_extension(path: str) -> Optional[str]:
    extension = _extension(path)
    if not extension:
        return None
    for mapping in LANGUAGE_MAP:
        if extension in mapping.extensions:
            return mapping.language
    return None


def languages_for_files(paths: Iterable[str]) -> list[str]:
    detected: dict[str, None] = {}
    for path in paths:
        language = language_for_extension(path)
        if language is not None:
            detected.setdefault(language)
    return list(detected)


def frameworks_for_files(paths: Iterable[str]) -> list[str]:
    path_list = list(paths)
    names = {_last_segment(path) for path in path_list}

    detected: list[str] = []
    for entry in FRAMEWORK_INDICATORS:
        for indicator in entry.indicators:
            if indicator in names or any(path.endswith(indicator) for path in path_list):
                detected.append(entry.framework)
                break
    return detected


def language_from_utterance(text: str) -> Optional[str]:
    lowered = text.lower()
    for item in LANGUAGE_PATTERNS:
        if item.pattern.search(lowered):
            return item.language
    return None


def supported_languages() -> list[str]:
    return [mapping.language for mapping in LANGUAGE_MAP]
