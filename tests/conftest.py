import logging
import sys
from pathlib import Path
from typing import Any, Optional

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from agent_context.reasoning.clients import IModelClient  # noqa: E402
from agent_context.rules.repository import ContextRepository  # noqa: E402


class FakeModelClient(IModelClient):
    def __init__(self, replies: Optional[list[Any]] = None, error: Optional[Exception] = None) -> None:
        self.replies = list(replies or [])
        self.error = error
        self.prompts: list[tuple[str, Optional[str]]] = []
        self.created: list[str] = []
        self.deleted: list[str] = []

    def create_session(self) -> str:
        session_id = f"session-{len(self.created) + 1}"
        self.created.append(session_id)
        return session_id

    def prompt(self, session_id: str, text: str, system: Optional[str] = None) -> Any:
        self.prompts.append((text, system))
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)

    def delete_session(self, session_id: str) -> None:
        self.deleted.append(session_id)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("agent_context")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def context_dir(project_root: Path) -> Path:
    return project_root / ".opencode" / "context"


@pytest.fixture
def store(project_root: Path) -> ContextRepository:
    return ContextRepository(project_root)


@pytest.fixture
def write_rules(context_dir: Path):
    def _write(language: str, content: str) -> Path:
        context_dir.mkdir(parents=True, exist_ok=True)
        path = context_dir / f"{language}.md"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_client():
    return FakeModelClient


@pytest.fixture
def cli_runner(project_root: Path) -> CliRunner:
    class ProjectCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            args = ["--project", str(project_root), *(args or [])]
            return super().invoke(cli, args=args, **kwargs)

    return ProjectCliRunner()
