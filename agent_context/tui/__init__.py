from agent_context.tui.renderers import ContextConsoleUI

__all__ = ["ContextConsoleUI"]
