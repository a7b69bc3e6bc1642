# nextstarter/models.py
"""Value types shared by the orchestrator, the CLI, and the file writers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Callable

__all__ = ["Orm", "RunState", "ScaffoldRequest", "Step"]


class Orm(str, Enum):
    """Database-access layer written into the generated project."""

    NONE = "none"
    PRISMA = "prisma"
    DRIZZLE = "drizzle"

    @classmethod
    def parse(cls, value: "str | Orm | None") -> "Orm":
        """Map a CLI/config string (case-insensitive) to an ``Orm``."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown ORM '{value}'. Choose one of: {choices}") from exc

    @property
    def label(self) -> str:
        return {
            Orm.NONE: "None",
            Orm.PRISMA: "Prisma (relational models)",
            Orm.DRIZZLE: "Drizzle (query builder)",
        }[self]


class RunState(str, Enum):
    """Lifecycle of a single scaffolding invocation."""

    IDLE = "idle"
    VALIDATING = "validating"
    CHECKING_PREREQUISITES = "checking-prerequisites"
    RUNNING = "running"
    CLEANING_UP = "cleaning-up"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ScaffoldRequest:
    """A validated scaffolding request; lives for one invocation only."""

    project_name: str
    target_dir: Path
    orm: Orm = Orm.NONE

    def with_orm(self, orm: Orm) -> "ScaffoldRequest":
        return replace(self, orm=orm)


@dataclass(frozen=True)
class Step:
    """One ordered unit of work.

    ``action`` raises on failure. Steps with ``fatal=False`` only produce a
    warning when they fail.
    """

    description: str
    action: Callable[[ScaffoldRequest], None]
    fatal: bool = True
