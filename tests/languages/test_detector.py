"""Tests for language and framework detection."""

import pytest

from agent_context.languages.detector import (
    frameworks_for_files,
    language_for_extension,
    language_from_utterance,
    languages_for_files,
    supported_languages,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("src/app.ts", "typescript"),
        ("src/App.TSX", "typescript"),
        ("main.go", "go"),
        ("lib/util.h", "cpp"),
        ("lib/util.c", "c"),
        ("scripts/run.pyw", "python"),
        ("web/Page.svelte", "svelte"),
        ("README.md", None),
        ("Dockerfile", None),
    ],
)
def test_language_for_extension(path: str, expected) -> None:
    assert language_for_extension(path) == expected


def test_languages_dedupe_across_extensions() -> None:
    assert languages_for_files(["a.ts", "b.ts", "c.tsx"]) == ["typescript"]


def test_languages_skip_unknown_files() -> None:
    assert languages_for_files(["README.md", "Dockerfile"]) == []


def test_languages_keep_first_seen_order() -> None:
    assert languages_for_files(["main.go", "web/app.ts", "cmd/tool.go", "x.py"]) == [
        "go",
        "typescript",
        "python",
    ]


def test_frameworks_by_file_name() -> None:
    files = ["next.config.mjs", "src/index.tsx", "tailwind.config.ts"]
    assert frameworks_for_files(files) == ["nextjs", "tailwind"]


def test_frameworks_by_relative_path_suffix() -> None:
    assert frameworks_for_files(["db/prisma/schema.prisma"]) == ["prisma"]


def test_frameworks_by_extension_suffix() -> None:
    assert frameworks_for_files(["src/App.vue", "src/Widget.svelte"]) == ["vue", "svelte"]


def test_frameworks_none() -> None:
    assert frameworks_for_files(["main.go", "go.mod"]) == []


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Always handle errors in Go", "go"),
        ("in golang prefer small interfaces", "go"),
        ("in TypeScript never use any", "typescript"),
        ("in c# prefer records", "csharp"),
        ("In C++ avoid raw new", "cpp"),
        ("in next.js use the app router", "nextjs"),
        ("in nextjs use server actions", "nextjs"),
        ("in java and in kotlin prefer immutability", "java"),
        ("ingoing requests are logged", None),
        ("we use going forward semantics", None),
        ("in javascripty code", None),
        ("always use tabs", None),
    ],
)
def test_language_from_utterance(text: str, expected) -> None:
    assert language_from_utterance(text) == expected


def test_supported_languages() -> None:
    languages = supported_languages()
    assert languages[0] == "typescript"
    assert "astro" in languages
    assert len(languages) == len(set(languages))
