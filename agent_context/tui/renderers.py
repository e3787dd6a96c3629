from rich.console import Console

from agent_context.reasoning.models import CycleOutcome, CycleResult
from agent_context.tui.enums import CYCLE_OUTCOME_STYLE, UIStyle
from agent_context.tui.sections import UISection
from agent_context.tui.tables import CycleTable, DetectionTable, RulesTable
from agent_context.utils import compact_home_path


class ContextConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_rule_saved(self, language: str, rule: str, added: bool) -> None:
        if added:
            panel = UISection.quoted(
                "remember", f"Rule saved to [bold]{language}[/bold] context", rule, UIStyle.GREEN.value
            )
        else:
            panel = UISection.quoted(
                "remember", f"Rule already saved in [bold]{language}[/bold] context", rule, UIStyle.YELLOW.value
            )
        self.console.print(panel)

    def render_capture_skipped(self, text: str) -> None:
        self.console.print(UISection.quoted("capture", "Not a memorable rule, skipped", text, UIStyle.DIM.value))

    def render_rules(self, rules: dict[str, list[str]], context_dir: str) -> None:
        if not rules:
            self.console.print(
                UISection.wrap(
                    "rules",
                    "No rules saved yet.\n- agent-context remember <rule> [-l <language>]",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "saved context rules",
                RulesTable.rules_table(rules),
                style=UIStyle.BLUE.value,
                subtitle=compact_home_path(context_dir),
            )
        )

    def render_injection(self, injection: str) -> None:
        if not injection:
            self.console.print(UISection.hint("inject", "Nothing to inject."))
            return
        self.console.print(injection.rstrip("\n"), markup=False, highlight=False, soft_wrap=True)

    def render_detection(self, languages: list[str], frameworks: list[str], scanned: int) -> None:
        self.console.print(
            UISection.wrap(
                "project detection",
                DetectionTable.summary_block(languages, frameworks, scanned),
                style=UIStyle.CYAN.value,
            )
        )

    def render_languages(self, languages: list[str]) -> None:
        self.console.print(
            UISection.wrap("supported languages", "\n".join(f"- {item}" for item in languages))
        )

    def render_cycle_result(self, result: CycleResult) -> None:
        style = CYCLE_OUTCOME_STYLE.get(result.outcome, UIStyle.WHITE.value)
        self.console.print(UISection.wrap("rule extraction", CycleTable.summary_block(result), style=style))
        if result.rules:
            self.console.print(
                UISection.wrap(
                    "saved rules", RulesTable.candidates_table(result.rules), style=UIStyle.GREEN.value
                )
            )
        elif result.outcome == CycleOutcome.UNCHANGED:
            self.console.print(UISection.hint("rule extraction", "No new messages to analyze."))
