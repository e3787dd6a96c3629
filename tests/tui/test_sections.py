"""Tests for the shared console panels."""

from __future__ import annotations

from rich.console import Console

from agent_context.tui.enums import UIStyle
from agent_context.tui.sections import UISection


def _render(panel) -> str:
    console = Console(record=True, width=100, color_system=None)
    console.print(panel)
    return console.export_text()


def test_quoted_keeps_brackets_in_rule_text() -> None:
    panel = UISection.quoted("remember", "Rule saved to [bold]general[/bold] context", "use list[str] hints ", "green")
    output = _render(panel)
    assert "Rule saved to general context:" in output
    assert "> use list[str] hints" in output
    assert panel.border_style == "green"


def test_hint_is_dim() -> None:
    panel = UISection.hint("inject", "Nothing to inject.")
    assert panel.border_style == UIStyle.DIM.value
    assert "Nothing to inject." in _render(panel)
