from rich.markup import escape
from rich.table import Column, Table

from agent_context.reasoning.models import CycleResult, RuleCandidate
from agent_context.tui.enums import CYCLE_OUTCOME_STYLE, UIStyle


class RulesTable:
    @staticmethod
    def rules_table(rules: dict[str, list[str]]) -> Table:
        table = Table(
            Column(header="Language", width=14),
            Column(header="#", width=4, justify="right"),
            Column(header="Rule", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for language, items in rules.items():
            for index, rule in enumerate(items, start=1):
                label = f"[{UIStyle.CYAN.value}]{language}[/{UIStyle.CYAN.value}]" if index == 1 else ""
                table.add_row(label, str(index), escape(rule))
        return table

    @staticmethod
    def candidates_table(candidates: list[RuleCandidate]) -> Table:
        table = Table(
            Column(header="Language", width=14),
            Column(header="Rule", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for candidate in candidates:
            table.add_row(candidate.language, escape(candidate.rule))
        return table


class DetectionTable:
    @staticmethod
    def summary_block(languages: list[str], frameworks: list[str], scanned: int) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Files", str(scanned))
        table.add_row("Languages", ", ".join(languages) or "none")
        table.add_row("Frameworks", ", ".join(frameworks) or "none")
        return table


class CycleTable:
    @staticmethod
    def summary_block(result: CycleResult) -> Table:
        style = CYCLE_OUTCOME_STYLE.get(result.outcome, UIStyle.WHITE.value)
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Outcome", f"[{style}]{result.outcome.value}[/{style}]")
        table.add_row("Processed", str(result.processed))
        table.add_row("Saved", str(len(result.rules)))
        if result.error:
            table.add_row("Error", escape(result.error))
        return table
