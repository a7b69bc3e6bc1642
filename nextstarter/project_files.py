# nextstarter/project_files.py
"""
File-level customizations applied to a freshly fetched template.

Each helper takes the project root and does one thing. They raise
``OSError``/``ValueError`` on failure and leave reporting to the caller.
"""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from nextstarter.models import Orm
from nextstarter.orm_templates import orm_files

__all__ = [
    "ENV_FILES",
    "GITIGNORE_ENTRY",
    "copy_template",
    "remove_paths",
    "rewrite_package_json",
    "write_orm_files",
    "render_env",
    "write_env_files",
    "ensure_gitignore_entry",
    "remove_path",
]

#: Environment files written with identical content.
ENV_FILES: Tuple[str, ...] = (".env", ".env.example")

GITIGNORE_ENTRY = ".env"

_COPY_IGNORE = shutil.ignore_patterns("node_modules")


def remove_path(path: Path) -> None:
    """Remove a file, symlink, or directory tree. Missing paths are ignored."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def copy_template(source: Path, destination: Path) -> None:
    """Copy a local template directory, skipping ``node_modules``."""
    shutil.copytree(source, destination, symlinks=True, ignore=_COPY_IGNORE)


def remove_paths(root: Path, relative_paths: Iterable[str]) -> List[str]:
    """Delete each of ``relative_paths`` under ``root`` if present.

    Returns
    -------
    list of str
        The relative paths that actually existed and were removed.
    """
    removed = []
    for rel in relative_paths:
        target = root / rel
        if os.path.lexists(target):
            remove_path(target)
            removed.append(rel)
    return removed


def rewrite_package_json(root: Path, project_name: str, version: str) -> Dict:
    """Rename the project in ``package.json`` and drop its ``bin`` entry.

    Parameters
    ----------
    root
        Project root containing ``package.json``.
    project_name
        New value for the ``name`` field.
    version
        New value for the ``version`` field.

    Returns
    -------
    dict
        The rewritten manifest.

    Raises
    ------
    FileNotFoundError
        If ``package.json`` is missing.
    ValueError
        If it is not a JSON object.
    """
    manifest_path = root / "package.json"
    data = json.loads(manifest_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("package.json does not contain a JSON object")

    data["name"] = project_name
    data["version"] = version
    data.pop("bin", None)

    manifest_path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return data


def write_orm_files(root: Path, orm: Orm) -> List[str]:
    """Write the schema and database-client files for ``orm``.

    Returns the relative paths written (empty for ``Orm.NONE``).
    """
    written = []
    for rel, content in orm_files(orm).items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        written.append(rel)
    return written


def render_env(entries: Sequence[Tuple[str, str]]) -> str:
    """Render ``KEY="value"`` lines for an env file."""
    lines = [f'{key}="{value}"' for key, value in entries]
    return "\n".join(lines) + "\n"


def write_env_files(root: Path, entries: Sequence[Tuple[str, str]]) -> str:
    """Write ``.env`` and ``.env.example`` with the same placeholder content."""
    content = render_env(entries)
    for name in ENV_FILES:
        (root / name).write_text(content, encoding="utf-8")
    return content


def ensure_gitignore_entry(root: Path, entry: str = GITIGNORE_ENTRY) -> bool:
    """Make ``.gitignore`` contain ``entry`` exactly once.

    The file is created if missing, the entry appended if absent, and
    duplicate lines of the entry collapsed to the first occurrence.

    Returns
    -------
    bool
        True if the file was changed.
    """
    path = root / ".gitignore"
    if not path.exists():
        path.write_text(f"{entry}\n", encoding="utf-8")
        return True

    original = path.read_text(encoding="utf-8")
    lines = original.splitlines()
    kept = []
    seen = False
    for line in lines:
        if line.strip() == entry:
            if seen:
                continue
            seen = True
        kept.append(line)

    if not seen:
        kept.append(entry)

    updated = "\n".join(kept) + "\n"
    if updated == original:
        return False
    path.write_text(updated, encoding="utf-8")
    return True
