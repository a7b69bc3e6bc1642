# nextstarter/prerequisites.py
"""
Toolchain checks run before any file is created.

Nothing here installs anything; a missing or outdated tool is reported with
:class:`~nextstarter.errors.PrerequisiteMissing` and the run stops.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from packaging.version import InvalidVersion, Version

from nextstarter.command_runner import CommandRunner
from nextstarter.errors import PrerequisiteMissing
from nextstarter.log_manager import get_logger

__all__ = ["check_executables", "check_node_version", "parse_tool_version"]

logger = get_logger()

_VERSION_RE = re.compile(r"v?(\d+(?:\.\d+)+)")


def parse_tool_version(output: str) -> Optional[Version]:
    """Extract the first dotted version number from a ``--version`` output.

    ``"v20.11.1"`` and ``"node v18.17.0 (lts)"`` both parse; anything without
    a dotted number returns ``None``.
    """
    match = _VERSION_RE.search(output or "")
    if not match:
        return None
    try:
        return Version(match.group(1))
    except InvalidVersion:
        return None


def check_executables(runner: CommandRunner, tools: Iterable[str]) -> None:
    """Raise for the first tool in ``tools`` that is not on PATH."""
    for tool in tools:
        path = runner.which(tool)
        if not path:
            raise PrerequisiteMissing(tool, "not found on PATH")
        logger.debug("Found %s at %s", tool, path)


def check_node_version(runner: CommandRunner, min_version: str, timeout: float = 30) -> Version:
    """Ensure ``node --version`` reports at least ``min_version``.

    Returns
    -------
    Version
        The detected Node.js version.

    Raises
    ------
    PrerequisiteMissing
        If node cannot be run, its version cannot be read, or it is too old.
    """
    result = runner.run(["node", "--version"], timeout=timeout, capture=True)
    if not result.ok:
        raise PrerequisiteMissing("node", result.describe())

    found = parse_tool_version(result.stdout)
    if found is None:
        raise PrerequisiteMissing("node", f"could not parse version from {result.stdout.strip()!r}")

    if found < Version(min_version):
        raise PrerequisiteMissing("node", f"found {found}, need >= {min_version}")

    logger.debug("Node.js %s satisfies >= %s", found, min_version)
    return found
