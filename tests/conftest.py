# tests/conftest.py
"""
Shared fixtures for the nextstarter suite.

Everything here is hermetic:
- FakeRunner records commands instead of spawning processes.
- FakePrompter returns canned answers instead of reading the terminal.
- Templates and workspaces live under tmp_path.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from nextstarter.command_runner import CommandResult
from nextstarter.config import ScaffoldConfig
from nextstarter.models import Orm
from nextstarter.orchestrator import ScaffoldOrchestrator

_CONFIG_VARS = (
    "NEXTSTARTER_TEMPLATE",
    "NEXTSTARTER_SHALLOW_CLONE",
    "NEXTSTARTER_PACKAGE_MANAGER",
    "NEXTSTARTER_TIMEOUT",
    "NEXTSTARTER_MIN_NODE_VERSION",
    "NEXTSTARTER_CONFIRM_CLEANUP",
    "NEXTSTARTER_LOG_LEVEL",
    "NEXTSTARTER_FORCE_COLOR",
)


# -------------------------
# Fakes
# -------------------------
class FakeRunner:
    """CommandRunner double.

    - ``calls`` holds ``(command, cwd, timeout)`` for every run.
    - ``fail_on(prefix...)`` makes matching commands fail or time out.
    - ``on(prefix..., hook=fn)`` runs ``fn(command, cwd)`` before answering,
      e.g. to create the directory a real ``git clone`` would create.
    - ``missing`` lists executables that ``which`` should not find.
    """

    def __init__(self, node_version: str = "v20.11.1") -> None:
        self.node_version = node_version
        self.calls: List[Tuple[Tuple[str, ...], Optional[Path], Optional[float]]] = []
        self.missing: set = set()
        self._failures: List[Tuple[Tuple[str, ...], CommandResult]] = []
        self._hooks: List[Tuple[Tuple[str, ...], Callable]] = []

    def fail_on(self, *prefix: str, returncode: int = 1, timed_out: bool = False, stderr: str = "") -> None:
        result = CommandResult(
            tuple(prefix), None if timed_out else returncode, stderr=stderr, timed_out=timed_out
        )
        self._failures.append((tuple(prefix), result))

    def on(self, *prefix: str, hook: Callable) -> None:
        self._hooks.append((tuple(prefix), hook))

    def run(self, command: Sequence[str], cwd=None, timeout=None, capture=False) -> CommandResult:
        cmd = tuple(str(c) for c in command)
        self.calls.append((cmd, cwd, timeout))

        for prefix, hook in self._hooks:
            if cmd[: len(prefix)] == prefix:
                hook(cmd, cwd)

        for prefix, failure in self._failures:
            if cmd[: len(prefix)] == prefix:
                return CommandResult(
                    cmd, failure.returncode, stderr=failure.stderr, timed_out=failure.timed_out
                )

        if cmd[:2] == ("node", "--version"):
            return CommandResult(cmd, 0, stdout=self.node_version + "\n")
        return CommandResult(cmd, 0)

    def which(self, executable: str) -> Optional[str]:
        if executable in self.missing:
            return None
        return f"/usr/bin/{executable}"

    @property
    def commands(self) -> List[Tuple[str, ...]]:
        return [c for c, _, _ in self.calls]


class FakePrompter:
    def __init__(self, orm: Optional[Orm] = Orm.PRISMA, confirm: Optional[bool] = True) -> None:
        self.orm = orm
        self.confirm_answer = confirm
        self.asked: List[str] = []

    def select_orm(self) -> Optional[Orm]:
        self.asked.append("select_orm")
        return self.orm

    def confirm(self, message: str, default: bool = False) -> Optional[bool]:
        self.asked.append(message)
        return self.confirm_answer


# -------------------------
# Global guard
# -------------------------
@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep developer NEXTSTARTER_* variables out of the tests."""
    for var in _CONFIG_VARS:
        monkeypatch.delenv(var, raising=False)
    yield


# -------------------------
# Filesystem fixtures
# -------------------------
def build_template(root: Path) -> Path:
    """Create a minimal stand-in for the starter template repository."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "next-auth-prisma-starter",
                "version": "1.4.2",
                "private": True,
                "bin": {"create-next-auth-starter": "bin/cli.js"},
                "scripts": {"dev": "next dev", "build": "next build"},
                "dependencies": {"next": "14.2.3"},
            },
            indent=2,
        ),
        encoding="utf-8",
    )
    (root / "bin").mkdir()
    (root / "bin" / "cli.js").write_text("#!/usr/bin/env node\n", encoding="utf-8")
    (root / ".gitignore").write_text("node_modules\n.next\n", encoding="utf-8")
    (root / ".git").mkdir()
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (root / "src" / "app").mkdir(parents=True)
    (root / "src" / "app" / "page.tsx").write_text("export default function Page() {}\n", encoding="utf-8")
    (root / "node_modules" / "left-pad").mkdir(parents=True)
    (root / "node_modules" / "left-pad" / "index.js").write_text("", encoding="utf-8")
    return root


@pytest.fixture
def template_dir(tmp_path) -> Path:
    return build_template(tmp_path / "template")


@pytest.fixture
def workspace(tmp_path) -> Path:
    ws = tmp_path / "work"
    ws.mkdir()
    return ws


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def config(template_dir) -> ScaffoldConfig:
    return ScaffoldConfig(template_source=str(template_dir))


@pytest.fixture
def make_orchestrator(config, fake_runner, fake_prompter, workspace) -> Callable[..., ScaffoldOrchestrator]:
    """Factory: ``make_orchestrator(**config_changes)``."""

    def _make(**changes) -> ScaffoldOrchestrator:
        cfg = config.replace(**changes) if changes else config
        return ScaffoldOrchestrator(cfg, fake_runner, fake_prompter, cwd=workspace)

    return _make


@pytest.fixture
def clone_creates_template(template_dir) -> Callable:
    """Hook that makes a fake ``git clone`` copy the template into its target."""

    def _hook(cmd, _cwd):
        shutil.copytree(template_dir, cmd[-1])

    return _hook
