from pathlib import Path


class AgentContextError(Exception):
    """Base user-facing application error."""


class ContextFileError(AgentContextError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class InvalidYamlFormatError(ContextFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid YAML format ({detail})")


class InvalidConfigSchemaError(ContextFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class ModelCallError(AgentContextError):
    """Raised by model clients when a prompt cannot be completed."""
