# nextstarter/command_runner.py
"""
External command execution.

The orchestrator never calls :mod:`subprocess` directly; it goes through a
:class:`CommandRunner`. :class:`SubprocessRunner` is the real implementation.
Tests substitute a fake that records commands.

Notes
-----
- Commands are argument lists; no shell is involved, so project names and
  template URLs are never interpreted by a shell.
- The executable is looked up with :func:`shutil.which` first, so Windows
  ``.cmd`` shims (``npm``, ``npx``) are started by their full path.
- A command that cannot be started (missing executable, permission error)
  is reported as exit code 127 instead of raising.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence, Tuple

from nextstarter.log_manager import get_logger

__all__ = ["CommandResult", "CommandRunner", "SubprocessRunner", "NOT_FOUND_EXIT_CODE"]

NOT_FOUND_EXIT_CODE = 127

logger = get_logger()


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    command: Tuple[str, ...]
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return not self.timed_out and self.returncode == 0

    @property
    def status(self) -> "int | str | None":
        """``"timeout"`` for timed-out commands, otherwise the exit code."""
        return "timeout" if self.timed_out else self.returncode

    def describe(self) -> str:
        cmd = " ".join(self.command)
        if self.timed_out:
            return f"{cmd} timed out"
        detail = f": {self.stderr.strip()}" if self.stderr.strip() else ""
        return f"{cmd} exited with code {self.returncode}{detail}"


class CommandRunner(Protocol):
    """Capability to run external commands and locate executables."""

    def run(
        self,
        command: Sequence[str],
        cwd: Optional[Path] = None,
        timeout: Optional[float] = None,
        capture: bool = False,
    ) -> CommandResult:
        ...

    def which(self, executable: str) -> Optional[str]:
        ...


class SubprocessRunner:
    """:class:`CommandRunner` backed by :func:`subprocess.run`.

    Parameters
    ----------
    default_timeout
        Timeout applied when :meth:`run` is called without one. ``None``
        means no limit.
    """

    def __init__(self, default_timeout: Optional[float] = None) -> None:
        self.default_timeout = default_timeout

    def run(
        self,
        command: Sequence[str],
        cwd: Optional[Path] = None,
        timeout: Optional[float] = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run ``command`` and wait for it.

        Output streams to the terminal unless ``capture`` is true, in which
        case stdout/stderr are collected as text on the result.
        """
        cmd = tuple(str(c) for c in command)
        effective_timeout = timeout if timeout is not None else self.default_timeout
        logger.debug("Running: %s (cwd=%s, timeout=%s)", " ".join(cmd), cwd, effective_timeout)

        kwargs = {}
        if capture:
            kwargs.update(stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)

        # Resolve through PATH/PATHEXT so shims such as npm.cmd start without a shell
        argv = list(cmd)
        resolved = self.which(argv[0]) if argv else None
        if resolved:
            argv[0] = resolved

        try:
            proc = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                timeout=effective_timeout,
                check=False,
                **kwargs,
            )
        except subprocess.TimeoutExpired:
            logger.info("Command timed out after %ss: %s", effective_timeout, " ".join(cmd))
            return CommandResult(cmd, None, timed_out=True)
        except OSError as exc:
            logger.debug("Could not start %s: %s", cmd[0] if cmd else "<empty>", exc)
            return CommandResult(cmd, NOT_FOUND_EXIT_CODE, stderr=str(exc))

        result = CommandResult(
            cmd,
            proc.returncode,
            stdout=(proc.stdout or "") if capture else "",
            stderr=(proc.stderr or "") if capture else "",
        )
        logger.debug("Finished: %s -> %s", " ".join(cmd), proc.returncode)
        return result

    def which(self, executable: str) -> Optional[str]:
        return shutil.which(executable)
