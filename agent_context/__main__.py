import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

import click
from rich.console import Console

from agent_context.config import AgentContextConfig, ConfigRepository
from agent_context.constants import GENERAL_LANGUAGE
from agent_context.errors import AgentContextError
from agent_context.languages.detector import (
    frameworks_for_files,
    languages_for_files,
    supported_languages,
)
from agent_context.log import configure_logging
from agent_context.project_files import ProjectFileScanner
from agent_context.reasoning.clients import OllamaModelClient
from agent_context.reasoning.cycle import RuleExtractionCycle
from agent_context.reasoning.models import CycleOutcome
from agent_context.rules.classifier import normalize_rule
from agent_context.session import AgentContextSession
from agent_context.tui import ContextConsoleUI
from agent_context.utils import sanitize_language


def _project_from_obj(obj: Dict[str, Any]) -> Path:
    return obj["project"]


def _load_config(project: Path) -> AgentContextConfig:
    try:
        return ConfigRepository(project).load()
    except AgentContextError as exc:
        raise click.ClickException(str(exc))


def _session_from_obj(obj: Dict[str, Any], **overrides: Any) -> AgentContextSession:
    project = _project_from_obj(obj)
    config = _load_config(project)
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return AgentContextSession(project, config)


def _read_messages(source: TextIO) -> list[str]:
    text = source.read()
    try:
        payload = json.loads(text)
    except ValueError:
        payload = None
    if isinstance(payload, list):
        return [str(item).strip() for item in payload if str(item).strip()]
    return [line.strip() for line in text.splitlines() if line.strip()]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--project",
    "-C",
    "project",
    type=click.Path(path_type=Path, file_okay=False),
    default=Path("."),
    show_default=True,
    help="Project root holding .opencode/context.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log engine activity to stderr.")
@click.pass_context
def cli(ctx: click.Context, project: Path, verbose: bool) -> None:
    """Remember coding rules per language and inject them into agent context."""
    configure_logging(verbose)
    ctx.obj = {"project": project.expanduser().resolve()}


@cli.command(help="Save a rule to a language context (default: general).")
@click.argument("rule")
@click.option("--language", "-l", default=GENERAL_LANGUAGE, show_default=True)
@click.pass_obj
def remember(obj: Dict[str, Any], rule: str, language: str) -> None:
    ui = ContextConsoleUI(Console())
    if not rule.strip():
        raise click.ClickException("No rule provided. Usage: agent-context remember <rule>")

    session = _session_from_obj(obj)
    target = sanitize_language(language)
    cleaned = normalize_rule(rule)
    added = session.store.add_rule(target, cleaned)
    ui.render_rule_saved(target, cleaned, added=added)


@cli.command(help="Save TEXT only if it reads like a coding rule.")
@click.argument("text")
@click.pass_obj
def capture(obj: Dict[str, Any], text: str) -> None:
    ui = ContextConsoleUI(Console())
    session = _session_from_obj(obj, auto_capture=True)
    extracted = session.handle_user_message(text)
    if extracted is None:
        ui.render_capture_skipped(text)
        return
    ui.render_rule_saved(extracted.language, extracted.text, added=extracted.added)


@cli.command(help="Show all saved rules by language.")
@click.pass_obj
def context(obj: Dict[str, Any]) -> None:
    ui = ContextConsoleUI(Console())
    session = _session_from_obj(obj)
    ui.render_rules(session.store.get_all_rules(), str(session.store.context_dir))


@cli.command(help="Print the context block for the active languages.")
@click.option("--language", "-l", "languages", multiple=True, help="Active language (repeatable).")
@click.option("--scan/--no-scan", default=True, show_default=True, help="Detect languages from project files.")
@click.pass_obj
def inject(obj: Dict[str, Any], languages: tuple[str, ...], scan: bool) -> None:
    ui = ContextConsoleUI(Console())
    session = _session_from_obj(obj)
    if scan:
        session.initialize()
    session.languages.update(sanitize_language(item) for item in languages)
    injection = session.injector.build_context_injection(session.languages.as_list())
    ui.render_injection(injection)


@cli.command(help="Detect languages and frameworks used by the project.")
@click.pass_obj
def detect(obj: Dict[str, Any]) -> None:
    ui = ContextConsoleUI(Console())
    project = _project_from_obj(obj)
    files = ProjectFileScanner(project).list_files()
    ui.render_detection(languages_for_files(files), frameworks_for_files(files), len(files))


@cli.command(help="List languages recognized from file extensions.")
def languages() -> None:
    ContextConsoleUI(Console()).render_languages(supported_languages())


@cli.command(help="Extract rules from messages with the configured model.")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--model", "model_name", default=None, help="Override the configured model name.")
@click.option("--url", default=None, help="Override the configured model server URL.")
@click.pass_obj
def learn(obj: Dict[str, Any], source: TextIO, model_name: Optional[str], url: Optional[str]) -> None:
    ui = ContextConsoleUI(Console())
    session = _session_from_obj(obj)
    messages = _read_messages(source)
    if not messages:
        raise click.ClickException("No messages to analyze.")

    settings = session.config.model
    client = OllamaModelClient(
        url=url or settings.url,
        model=model_name or settings.name,
        timeout=settings.timeout,
    )
    result = RuleExtractionCycle(session.store, client).run(messages)
    ui.render_cycle_result(result)

    if result.outcome == CycleOutcome.FAILED:
        raise click.exceptions.Exit(1)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    except click.exceptions.Abort:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
