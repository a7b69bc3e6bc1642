from __future__ import annotations

from pathlib import Path

import pytest

from nextstarter.errors import (
    DirectoryExists,
    InvalidName,
    PrerequisiteMissing,
    ScaffoldError,
    StepFailed,
)
from nextstarter.models import Orm, ScaffoldRequest


@pytest.mark.parametrize(
    "value, expected",
    [(None, Orm.NONE), ("none", Orm.NONE), ("PRISMA", Orm.PRISMA), (" drizzle ", Orm.DRIZZLE), (Orm.PRISMA, Orm.PRISMA)],
)
def test_orm_parse(value, expected):
    assert Orm.parse(value) is expected


def test_orm_parse_unknown_lists_choices():
    with pytest.raises(ValueError, match="none, prisma, drizzle"):
        Orm.parse("typeorm")


def test_request_with_orm_is_a_copy():
    request = ScaffoldRequest("my-app", Path("/tmp/my-app"))
    changed = request.with_orm(Orm.DRIZZLE)
    assert request.orm is Orm.NONE
    assert changed.orm is Orm.DRIZZLE
    assert changed.target_dir == request.target_dir


def test_error_messages():
    assert isinstance(InvalidName("x y", "bad"), ScaffoldError)
    assert DirectoryExists(Path("/w/my-app")).message == 'Directory "my-app" already exists!'
    assert PrerequisiteMissing("git").message == "Required tool not available: git"
    failed = StepFailed("📦 Installing dependencies...", "timeout")
    assert failed.status == "timeout"
    assert "timeout" in str(failed)
