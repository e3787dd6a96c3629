"""Model collaborators used by the extraction cycle."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests

from agent_context.constants import (
    DEFAULT_MODEL_NAME,
    DEFAULT_MODEL_TIMEOUT,
    DEFAULT_MODEL_URL,
)
from agent_context.errors import ModelCallError


class IModelClient(ABC):
    @abstractmethod
    def create_session(self) -> str:
        """Open a scratch conversation and return its id."""

    @abstractmethod
    def prompt(self, session_id: str, text: str, system: Optional[str] = None) -> Any:
        """Send ``text`` and return the provider's opaque result."""

    @abstractmethod
    def delete_session(self, session_id: str) -> None:
        """Release a conversation opened by ``create_session``."""


class OllamaModelClient(IModelClient):
    """Chat with a local Ollama server.

    Sessions are chat histories kept in memory; the server itself is
    stateless. Replies are returned in the ``{"parts": [{"text": ...}]}``
    shape so the result reads like a host session message.
    """

    def __init__(
        self,
        url: str = DEFAULT_MODEL_URL,
        model: str = DEFAULT_MODEL_NAME,
        timeout: float = DEFAULT_MODEL_TIMEOUT,
        http: Optional[requests.Session] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._http = http or requests.Session()
        self._sessions: dict[str, list[dict[str, str]]] = {}

    @property
    def chat_url(self) -> str:
        return f"{self.url}/api/chat"

    def create_session(self) -> str:
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = []
        return session_id

    def prompt(self, session_id: str, text: str, system: Optional[str] = None) -> Any:
        history = self._sessions.get(session_id)
        if history is None:
            raise ModelCallError(f"Unknown model session: {session_id}")

        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.extend(history)
        messages.append({"role": "user", "content": text})

        try:
            response = self._http.post(
                self.chat_url,
                json={
                    "model": self.model,
                    "messages": messages,
                    "stream": False,
                    "options": {"temperature": 0.1},
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as exc:
            raise ModelCallError(f"Ollama request failed: {exc}") from exc
        except ValueError as exc:
            raise ModelCallError(f"Ollama returned invalid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise ModelCallError("Ollama returned an unexpected payload")
        message = payload.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise ModelCallError("Ollama reply has no message content")

        history.append({"role": "user", "content": text})
        history.append({"role": "assistant", "content": content})
        info = {key: value for key, value in payload.items() if key != "message"}
        return {"info": info, "parts": [{"type": "text", "text": content}]}

    def delete_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
