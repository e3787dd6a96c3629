from agent_context.reasoning.clients import IModelClient, OllamaModelClient
from agent_context.reasoning.cycle import RuleExtractionCycle
from agent_context.reasoning.models import CycleOutcome, CycleResult, CycleState, RuleCandidate
from agent_context.reasoning.parser import (
    extract_text_from_result,
    normalize_rule,
    parse_extraction_response,
)
from agent_context.reasoning.prompts import build_extraction_prompt, get_system_prompt

__all__ = [
    "IModelClient",
    "OllamaModelClient",
    "RuleExtractionCycle",
    "CycleOutcome",
    "CycleResult",
    "CycleState",
    "RuleCandidate",
    "extract_text_from_result",
    "normalize_rule",
    "parse_extraction_response",
    "build_extraction_prompt",
    "get_system_prompt",
]
