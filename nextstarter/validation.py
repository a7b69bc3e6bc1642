# nextstarter/validation.py
"""Project-name validation. Pure checks; nothing is created or modified."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Optional

from nextstarter.errors import DirectoryExists, InvalidName
from nextstarter.models import ScaffoldRequest

__all__ = ["validate_project_name", "NAME_PATTERN"]

NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def _path_occupied(path: Path) -> bool:
    # lexists so that a dangling symlink also counts as occupied
    return os.path.lexists(path)


def validate_project_name(
    name: Optional[str],
    reserved_names: Iterable[str],
    cwd: Path,
) -> ScaffoldRequest:
    """Validate ``name`` and resolve the target directory under ``cwd``.

    Parameters
    ----------
    name
        Raw project name as given on the command line.
    reserved_names
        Names that may not be used (compared case-insensitively).
    cwd
        Directory the project will be created in.

    Returns
    -------
    ScaffoldRequest
        Request with an absolute ``target_dir`` and no ORM selected.

    Raises
    ------
    InvalidName
        Empty name, characters outside ``[A-Za-z0-9_-]``, or a reserved name.
    DirectoryExists
        A file, directory, or symlink already occupies the target path.
    """
    if not name:
        raise InvalidName(name, "Please provide a project name!")

    if NAME_PATTERN.fullmatch(name) is None:
        raise InvalidName(
            name,
            "Project name can only contain letters, numbers, hyphens, and underscores!",
        )

    reserved = {r.lower() for r in reserved_names}
    if name.lower() in reserved:
        raise InvalidName(name, f'"{name}" is a reserved name!')

    target_dir = Path(cwd).resolve() / name
    if _path_occupied(target_dir):
        raise DirectoryExists(target_dir)

    return ScaffoldRequest(project_name=name, target_dir=target_dir)
