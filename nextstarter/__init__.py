"""
nextstarter: scaffold a Next.js authentication starter project.

Clones the starter template, customizes package.json, environment files and
.gitignore, installs dependencies, and starts a fresh git history.
"""

__version__ = "1.0.0"
__license__ = "Apache-2.0"

from .cli import cli

__all__ = ["cli"]
