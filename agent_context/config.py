"""Project configuration loaded from ``.opencode/agent-context.yaml``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from agent_context.constants import (
    CONFIG_FILENAME,
    CONTEXT_DIRNAME,
    DEFAULT_MAX_BUFFERED_MESSAGES,
    DEFAULT_MODEL_NAME,
    DEFAULT_MODEL_TIMEOUT,
    DEFAULT_MODEL_URL,
    OPENCODE_DIRNAME,
)
from agent_context.errors import InvalidConfigSchemaError, InvalidYamlFormatError

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "context_dir": {"type": "string", "minLength": 1},
        "auto_capture": {"type": "boolean"},
        "reasoning": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "enabled": {"type": "boolean"},
                "max_buffered_messages": {"type": "integer", "minimum": 1},
            },
        },
        "model": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "url": {"type": "string", "minLength": 1},
                "name": {"type": "string", "minLength": 1},
                "timeout": {"type": "number", "exclusiveMinimum": 0},
            },
        },
    },
}


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@dataclass(frozen=True)
class ModelSettings:
    url: str = DEFAULT_MODEL_URL
    name: str = DEFAULT_MODEL_NAME
    timeout: float = DEFAULT_MODEL_TIMEOUT


@dataclass(frozen=True)
class ReasoningSettings:
    enabled: bool = False
    max_buffered_messages: int = DEFAULT_MAX_BUFFERED_MESSAGES


@dataclass(frozen=True)
class AgentContextConfig:
    context_dir: str = CONTEXT_DIRNAME
    auto_capture: bool = True
    reasoning: ReasoningSettings = field(default_factory=ReasoningSettings)
    model: ModelSettings = field(default_factory=ModelSettings)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "AgentContextConfig":
        reasoning = payload.get("reasoning") or {}
        model = payload.get("model") or {}
        return cls(
            context_dir=payload.get("context_dir", CONTEXT_DIRNAME),
            auto_capture=payload.get("auto_capture", True),
            reasoning=ReasoningSettings(
                enabled=reasoning.get("enabled", False),
                max_buffered_messages=reasoning.get(
                    "max_buffered_messages", DEFAULT_MAX_BUFFERED_MESSAGES
                ),
            ),
            model=ModelSettings(
                url=model.get("url", DEFAULT_MODEL_URL),
                name=model.get("name", DEFAULT_MODEL_NAME),
                timeout=float(model.get("timeout", DEFAULT_MODEL_TIMEOUT)),
            ),
        )


class ConfigRepository:
    def __init__(self, project_root: Path) -> None:
        self._project_root = project_root
        self._validator = Draft202012Validator(CONFIG_SCHEMA)

    @property
    def config_path(self) -> Path:
        return self._project_root / OPENCODE_DIRNAME / CONFIG_FILENAME

    def load(self) -> AgentContextConfig:
        path = self.config_path
        if not path.exists():
            return AgentContextConfig()
        try:
            payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise InvalidYamlFormatError(path, str(exc).splitlines()[0]) from exc
        if payload is None:
            return AgentContextConfig()

        error = next(iter(self._validator.iter_errors(payload)), None)
        if error is not None:
            raise InvalidConfigSchemaError(path, format_schema_error(error))
        return AgentContextConfig.from_dict(payload)
