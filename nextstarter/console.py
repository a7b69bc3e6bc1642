# nextstarter/console.py
"""User-facing status lines and the final summary panel."""

from __future__ import annotations

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

__all__ = [
    "log_step",
    "log_ok",
    "log_warn",
    "log_fail",
    "log_tip",
    "print_next_steps",
]


def log_step(msg: str) -> None:
    click.secho(msg, fg="cyan")


def log_ok(msg: str) -> None:
    click.secho(f"✅ {msg}", fg="green")


def log_warn(msg: str) -> None:
    click.secho(f"⚠️ {msg}", fg="yellow", err=True)


def log_fail(msg: str) -> None:
    click.secho(f"❌ {msg}", fg="red", err=True)


def log_tip(msg: str) -> None:
    click.secho(f"💡 {msg}", fg="blue")


def print_next_steps(project_name: str, orm_label: Optional[str] = None,
                     console: Optional[Console] = None) -> None:
    """Print the success banner and the follow-up instructions.

    Parameters
    ----------
    project_name
        Directory name of the generated project.
    orm_label
        Human-readable ORM name, shown when one was configured.
    console
        Rich console to print to. A fresh one is created when omitted so the
        output follows whatever ``sys.stdout`` is at call time.
    """
    console = console or Console()

    body = Text()
    body.append(f"1️⃣  cd {project_name}\n", style="yellow")
    body.append("2️⃣  Fill in the placeholders in .env\n", style="yellow")
    body.append("3️⃣  Generate an AUTH_SECRET using: npx auth secret\n", style="yellow")
    body.append("4️⃣  Set up your database and update DATABASE_URL\n", style="yellow")
    body.append("5️⃣  Run the project with: npm run dev", style="yellow")
    if orm_label:
        body.append(f"\n\nORM: {orm_label}", style="dim")

    click.secho(f'\n✅ Project "{project_name}" created successfully!\n', fg="green", bold=True)
    console.print(Panel(body, title="🚀 Next Steps", border_style="cyan", expand=False))
    click.secho("\n🎉 Happy coding!\n", fg="green")
