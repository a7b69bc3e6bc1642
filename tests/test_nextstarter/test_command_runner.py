"""
Tests for nextstarter.command_runner.

``subprocess.run`` is monkeypatched everywhere; no real process is spawned.
"""

from __future__ import annotations

import subprocess
from types import SimpleNamespace

import pytest

import nextstarter.command_runner as cr


@pytest.fixture(autouse=True)
def _no_path_lookup(monkeypatch):
    """Keep argv[0] as given unless a test installs its own lookup."""
    monkeypatch.setattr(cr.shutil, "which", lambda name: None)


def _fake_run(captured, returncode=0, stdout=None, stderr=None):
    def _run(cmd, **kwargs):
        captured["cmd"] = cmd
        captured.update(kwargs)
        return SimpleNamespace(returncode=returncode, stdout=stdout, stderr=stderr)
    return _run


# -----------------------------
# CommandResult
# -----------------------------

def test_result_ok_and_status():
    ok = cr.CommandResult(("git", "init"), 0)
    bad = cr.CommandResult(("npm", "install"), 1, stderr="ERR! boom\n")
    slow = cr.CommandResult(("npm", "install"), None, timed_out=True)

    assert ok.ok and ok.status == 0
    assert not bad.ok and bad.status == 1
    assert not slow.ok and slow.status == "timeout"

    assert bad.describe() == "npm install exited with code 1: ERR! boom"
    assert slow.describe() == "npm install timed out"
    assert ok.describe() == "git init exited with code 0"


# -----------------------------
# SubprocessRunner.run
# -----------------------------

def test_run_passes_argument_list_without_shell(monkeypatch, tmp_path):
    captured = {}
    monkeypatch.setattr(cr.subprocess, "run", _fake_run(captured))

    result = cr.SubprocessRunner().run(["git", "clone", "url", tmp_path / "x"], cwd=tmp_path, timeout=5)

    assert result.ok
    assert captured["cmd"] == ["git", "clone", "url", str(tmp_path / "x")]
    assert captured["cwd"] == str(tmp_path)
    assert captured["timeout"] == 5
    assert captured["check"] is False
    assert "shell" not in captured
    assert "stdout" not in captured


def test_run_starts_executable_by_resolved_path(monkeypatch):
    captured = {}
    npm_cmd = r"C:\Program Files\nodejs\npm.CMD"
    monkeypatch.setattr(cr.shutil, "which", lambda name: npm_cmd if name == "npm" else None)
    monkeypatch.setattr(cr.subprocess, "run", _fake_run(captured))

    result = cr.SubprocessRunner().run(["npm", "install"])

    assert captured["cmd"] == [npm_cmd, "install"]
    assert result.command == ("npm", "install")
    assert result.describe() == "npm install exited with code 0"


def test_run_uses_default_timeout(monkeypatch):
    captured = {}
    monkeypatch.setattr(cr.subprocess, "run", _fake_run(captured))
    cr.SubprocessRunner(default_timeout=42).run(["npm", "install"])
    assert captured["timeout"] == 42
    assert captured["cwd"] is None


def test_run_capture(monkeypatch):
    captured = {}
    monkeypatch.setattr(cr.subprocess, "run", _fake_run(captured, stdout="v20.11.1\n", stderr=""))

    result = cr.SubprocessRunner().run(["node", "--version"], capture=True)

    assert result.stdout == "v20.11.1\n"
    assert captured["stdout"] is subprocess.PIPE
    assert captured["text"] is True


def test_run_nonzero_exit(monkeypatch):
    monkeypatch.setattr(cr.subprocess, "run", _fake_run({}, returncode=2))
    result = cr.SubprocessRunner().run(["npm", "install"])
    assert not result.ok
    assert result.status == 2


def test_run_timeout(monkeypatch):
    def _boom(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr(cr.subprocess, "run", _boom)
    result = cr.SubprocessRunner(default_timeout=1).run(["npm", "install"])
    assert result.timed_out
    assert result.status == "timeout"
    assert result.returncode is None


def test_run_missing_executable(monkeypatch):
    def _boom(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(cr.subprocess, "run", _boom)
    result = cr.SubprocessRunner().run(["nope", "--version"])
    assert result.returncode == cr.NOT_FOUND_EXIT_CODE
    assert "No such file" in result.stderr


def test_which_delegates_to_shutil(monkeypatch):
    monkeypatch.setattr(cr.shutil, "which", lambda name: f"/opt/bin/{name}" if name == "git" else None)
    runner = cr.SubprocessRunner()
    assert runner.which("git") == "/opt/bin/git"
    assert runner.which("node") is None
