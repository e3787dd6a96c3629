"""Tests for the extraction cycle and its watermark."""

import logging

from agent_context.errors import ModelCallError
from agent_context.reasoning.cycle import RuleExtractionCycle
from agent_context.reasoning.models import CycleOutcome, CycleState, RuleCandidate
from agent_context.rules.repository import ContextRepository


def _reply(text: str) -> dict:
    return {"parts": [{"type": "text", "text": text}]}


def test_applies_extracted_rules(store: ContextRepository, fake_client) -> None:
    client = fake_client(
        [_reply('[{"rule": "prefer named exports", "language": "TypeScript"}, {"rule": "Use gofmt.", "language": "go"}]')]
    )
    cycle = RuleExtractionCycle(store, client)

    result = cycle.run(["always use named exports", "and gofmt in go"])

    assert result.outcome == CycleOutcome.APPLIED
    assert result.rules == [
        RuleCandidate("Prefer named exports.", "typescript"),
        RuleCandidate("Use gofmt.", "go"),
    ]
    assert result.processed == 2
    assert cycle.watermark == 2
    assert cycle.state == CycleState.IDLE
    assert store.read_rules("typescript") == ["Prefer named exports."]
    assert store.read_rules("go") == ["Use gofmt."]


def test_prompt_includes_new_messages_and_saved_rules(store: ContextRepository, fake_client) -> None:
    store.add_rule("go", "Use gofmt.")
    client = fake_client([_reply("[]"), _reply("[]")])
    cycle = RuleExtractionCycle(store, client)

    cycle.run(["first"])
    cycle.run(["first", "second"])

    first_prompt, system = client.prompts[0]
    second_prompt, _ = client.prompts[1]
    assert "- Use gofmt." in first_prompt
    assert "[1] first" in first_prompt
    assert "[1] second" in second_prompt
    assert "first" not in second_prompt.split("## User messages from this session")[1]
    assert system is not None and "Do NOT extract" in system


def test_unchanged_transcript_skips_model(store: ContextRepository, fake_client) -> None:
    client = fake_client([_reply("[]")])
    cycle = RuleExtractionCycle(store, client)

    cycle.run(["always use tabs"])
    result = cycle.run(["always use tabs"])

    assert result.outcome == CycleOutcome.UNCHANGED
    assert len(client.prompts) == 1


def test_empty_result_advances_watermark(store: ContextRepository, fake_client) -> None:
    client = fake_client([_reply("```json\n[]\n```")])
    cycle = RuleExtractionCycle(store, client)

    result = cycle.run(["hello there", "fix the build"])

    assert result.outcome == CycleOutcome.SKIPPED
    assert result.advanced is True
    assert cycle.watermark == 2
    assert client.deleted == ["session-1"]


def test_failed_call_keeps_watermark(store: ContextRepository, fake_client, caplog) -> None:
    client = fake_client(error=ModelCallError("connection refused"))
    cycle = RuleExtractionCycle(store, client)

    with caplog.at_level(logging.WARNING, logger="agent_context"):
        result = cycle.run(["always use tabs"])

    assert result.outcome == CycleOutcome.FAILED
    assert result.error == "connection refused"
    assert result.advanced is False
    assert cycle.watermark == 0
    assert client.deleted == ["session-1"]
    assert "Rule extraction failed" in caplog.text


def test_failed_call_is_retried(store: ContextRepository, fake_client) -> None:
    client = fake_client(error=RuntimeError("boom"))
    cycle = RuleExtractionCycle(store, client)
    cycle.run(["always use tabs"])

    client.error = None
    client.replies = [_reply('[{"rule": "Use tabs.", "language": "general"}]')]
    result = cycle.run(["always use tabs"])

    assert result.outcome == CycleOutcome.APPLIED
    assert store.read_rules("general") == ["Use tabs."]


def test_result_without_text_is_a_failure(store: ContextRepository, fake_client) -> None:
    client = fake_client([{"status": "ok"}])
    cycle = RuleExtractionCycle(store, client)

    result = cycle.run(["always use tabs"])

    assert result.outcome == CycleOutcome.FAILED
    assert cycle.watermark == 0


def test_deeply_nested_reply_is_skipped(store: ContextRepository, fake_client) -> None:
    client = fake_client([{"text": "[" * 100000 + "]" * 100000}])
    cycle = RuleExtractionCycle(store, client)

    result = cycle.run(["always use tabs"])

    assert result.outcome == CycleOutcome.SKIPPED
    assert cycle.watermark == 1
    assert store.get_all_rules() == {}


def test_result_with_unserializable_keys_is_a_failure(store: ContextRepository, fake_client) -> None:
    client = fake_client([{("a", "b"): 1}])
    cycle = RuleExtractionCycle(store, client)

    result = cycle.run(["always use tabs"])

    assert result.outcome == CycleOutcome.FAILED
    assert cycle.watermark == 0
    assert client.deleted == ["session-1"]


def test_session_release_failure_is_logged(store: ContextRepository, fake_client, caplog) -> None:
    client = fake_client([_reply("[]")])

    def _fail(session_id: str) -> None:
        raise RuntimeError("gone")

    client.delete_session = _fail
    cycle = RuleExtractionCycle(store, client)

    with caplog.at_level(logging.WARNING, logger="agent_context"):
        result = cycle.run(["always use tabs"])

    assert result.outcome == CycleOutcome.SKIPPED
    assert "Could not release model session" in caplog.text


def test_duplicates_are_not_reported(store: ContextRepository, fake_client) -> None:
    store.add_rule("general", "Use tabs.")
    client = fake_client([_reply('[{"rule": "use tabs"}, {"rule": "Use spaces in yaml."}]')])
    cycle = RuleExtractionCycle(store, client)

    result = cycle.run(["a", "b"])

    assert result.rules == [RuleCandidate("Use spaces in yaml.", "general")]
    assert store.read_rules("general") == ["Use tabs.", "Use spaces in yaml."]


def test_rebase_never_goes_negative(store: ContextRepository, fake_client) -> None:
    cycle = RuleExtractionCycle(store, fake_client([_reply("[]")]))
    cycle.run(["a", "b", "c"])
    cycle.rebase(2)
    assert cycle.watermark == 1
    cycle.rebase(5)
    assert cycle.watermark == 0
