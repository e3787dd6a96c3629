from typing import Final


OPENCODE_DIRNAME: Final[str] = ".opencode"
CONTEXT_DIRNAME: Final[str] = f"{OPENCODE_DIRNAME}/context"
CONFIG_FILENAME: Final[str] = "agent-context.yaml"

RULE_FILE_SUFFIX: Final[str] = ".md"
GENERAL_LANGUAGE: Final[str] = "general"

MIN_RULE_LENGTH: Final[int] = 15
MAX_RULE_LENGTH: Final[int] = 500

MAX_RESULT_SCRAPE_LENGTH: Final[int] = 10000

DEFAULT_MODEL_URL: Final[str] = "http://localhost:11434"
DEFAULT_MODEL_NAME: Final[str] = "llama3.1"
DEFAULT_MODEL_TIMEOUT: Final[float] = 60.0
DEFAULT_MAX_BUFFERED_MESSAGES: Final[int] = 50

PROJECT_IGNORED_DIRS: Final[tuple[str, ...]] = (
    "node_modules",
    ".venv",
    "venv",
    "__pycache__",
    "dist",
    "build",
    "target",
)
PROJECT_SCAN_LIMIT: Final[int] = 5000
