from enum import Enum

from agent_context.reasoning.models import CycleOutcome


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


CYCLE_OUTCOME_STYLE = {
    CycleOutcome.APPLIED: UIStyle.GREEN.value,
    CycleOutcome.SKIPPED: UIStyle.DIM.value,
    CycleOutcome.UNCHANGED: UIStyle.YELLOW.value,
    CycleOutcome.FAILED: UIStyle.RED.value,
}
