"""Remembered coding rules, keyed by language, for coding agents."""

from agent_context.injector import ContextInjector
from agent_context.rules.repository import ContextRepository
from agent_context.session import ActiveLanguageSet, AgentContextSession

__all__ = [
    "ActiveLanguageSet",
    "AgentContextSession",
    "ContextInjector",
    "ContextRepository",
]
