from typing import Optional

from rich.console import RenderableType
from rich.markup import escape
from rich.panel import Panel

from agent_context.tui.enums import UIStyle


class UISection:
    @staticmethod
    def wrap(
        title: str,
        body: RenderableType,
        style: str = UIStyle.BLUE.value,
        subtitle: Optional[str] = None,
    ) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def quoted(title: str, heading: str, text: str, style: str) -> Panel:
        """Panel with a markup heading over a quoted, escaped rule or message."""
        body = f"{heading}:\n> {escape(text.strip())}"
        return UISection.wrap(title, body, style=style)

    @staticmethod
    def hint(title: str, message: str) -> Panel:
        return UISection.wrap(title, message, style=UIStyle.DIM.value)
