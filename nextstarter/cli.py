# nextstarter/cli.py
"""
nextstarter command-line interface.

``nextstarter <project-name>`` creates a new Next.js + auth starter project in
the current directory. Exit status is 0 on success and 1 on any failure
(validation, prerequisites, a failed step, a cancelled prompt, or Ctrl-C).

The command only wires things together: it loads ``.env`` overrides, builds
a :class:`~nextstarter.config.ScaffoldConfig` from the environment and the
flags, and hands off to :class:`~nextstarter.orchestrator.ScaffoldOrchestrator`.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from nextstarter import __version__
from nextstarter.command_runner import SubprocessRunner
from nextstarter.config import ScaffoldConfig
from nextstarter.console import log_fail, log_warn
from nextstarter.log_manager import get_logger, resolve_level
from nextstarter.models import Orm
from nextstarter.orchestrator import ScaffoldOrchestrator
from nextstarter.prompts import QuestionaryPrompter

__all__ = ["cli", "main"]


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("project_name", required=False)
@click.option(
    "--orm",
    type=click.Choice([o.value for o in Orm], case_sensitive=False),
    default=None,
    help="Write ORM schema/client files and install its packages.",
)
@click.option(
    "--select-orm",
    is_flag=True,
    help="Choose the ORM interactively (ignored when --orm is given).",
)
@click.option("--template", default=None, help="Template git URL or local directory.")
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=None,
    help="Per-command timeout in seconds (default 300).",
)
@click.option(
    "--confirm-cleanup",
    is_flag=True,
    help="Ask before deleting the project directory after a failure.",
)
@click.option("--skip-prereq-check", is_flag=True, help="Do not check for git/node/npm first.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Also write diagnostic logs to this file.",
)
@click.version_option(__version__, prog_name="nextstarter")
def cli(
    project_name: Optional[str],
    orm: Optional[str],
    select_orm: bool,
    template: Optional[str],
    timeout: Optional[int],
    confirm_cleanup: bool,
    skip_prereq_check: bool,
    verbose: bool,
    log_file: Optional[str],
) -> None:
    """🚀 Create a new Next.js auth starter project named PROJECT_NAME.

    Clones the starter template, renames it, writes placeholder .env files,
    installs dependencies and starts a fresh git history.
    """
    logger = get_logger(level=resolve_level(verbose), log_to_file=log_file)

    # Shell exports win over values in .env
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    try:
        config = ScaffoldConfig.from_env(
            template_source=template,
            command_timeout=timeout,
            confirm_cleanup=confirm_cleanup or None,
        )
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    orchestrator = ScaffoldOrchestrator(
        config=config,
        runner=SubprocessRunner(default_timeout=config.command_timeout),
        prompter=QuestionaryPrompter(),
        logger=logger,
    )

    if select_orm and orm is not None:
        log_warn("--select-orm ignored because --orm was given.")

    try:
        status = orchestrator.scaffold(
            project_name,
            orm=orm,
            prompt_orm=select_orm,
            check_prerequisites=not skip_prereq_check,
        )
    except KeyboardInterrupt:
        click.secho("\nProcess terminated by user.", fg="yellow", err=True)
        sys.exit(1)

    if status != 0:
        sys.exit(status)


def main() -> None:
    """Console-script entry point."""
    try:
        cli()
    except Exception as exc:  # last-resort guard
        log_fail(f"An unexpected error occurred: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
