# nextstarter/errors.py
"""
Error taxonomy for the scaffolding workflow.

Validation and prerequisite errors are raised before anything touches the
filesystem. ``StepFailed`` is raised by the orchestrator after cleanup has
already been attempted. ``CleanupFailed`` is only ever logged; it never
replaces the error that triggered the cleanup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

__all__ = [
    "ScaffoldError",
    "InvalidName",
    "DirectoryExists",
    "PrerequisiteMissing",
    "StepFailed",
    "CleanupFailed",
    "Aborted",
]


class ScaffoldError(Exception):
    """Base class for every error the scaffolder reports to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidName(ScaffoldError):
    """The project name is empty, malformed, or reserved."""

    def __init__(self, name: Optional[str], reason: str) -> None:
        super().__init__(reason)
        self.name = name
        self.reason = reason


class DirectoryExists(ScaffoldError):
    """Something already occupies the target path."""

    def __init__(self, path: Path) -> None:
        super().__init__(f'Directory "{path.name}" already exists!')
        self.path = path


class PrerequisiteMissing(ScaffoldError):
    """A required external tool is absent or too old."""

    def __init__(self, tool: str, detail: Optional[str] = None) -> None:
        message = f"Required tool not available: {tool}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.tool = tool
        self.detail = detail


class StepFailed(ScaffoldError):
    """A scaffolding step failed.

    Parameters
    ----------
    step
        Human-readable description of the failing step.
    status
        Exit code of the underlying command, ``"timeout"``, or the text of
        the exception raised by the step action.
    """

    def __init__(self, step: str, status: Union[int, str, None]) -> None:
        super().__init__(f"Step failed: {step} ({status})")
        self.step = step
        self.status = status


class CleanupFailed(ScaffoldError):
    """The target directory could not be removed after a failure."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to clean up {path}: {reason}")
        self.path = path
        self.reason = reason


class Aborted(ScaffoldError):
    """The operator cancelled an interactive prompt."""

    def __init__(self, message: str = "Aborted by user.") -> None:
        super().__init__(message)
