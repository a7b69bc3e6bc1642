# nextstarter/orchestrator.py
"""
Scaffold orchestration: validate, check prerequisites, run ordered steps,
roll back on failure.

Lifecycle of one invocation::

    IDLE -> VALIDATING -> CHECKING_PREREQUISITES -> RUNNING
         -> SUCCEEDED
         -> CLEANING_UP -> FAILED

Steps run strictly in order. The first fatal step failure triggers a single
cleanup of the target directory, after which :class:`StepFailed` is raised.
The git-history step is non-fatal: its failure is reported as a warning and
the project is still considered created.

Collaborators (configuration, command runner, prompter) are injected so the
whole workflow can run against fakes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from nextstarter import console
from nextstarter.command_runner import CommandRunner
from nextstarter.config import ScaffoldConfig
from nextstarter.errors import (
    Aborted,
    CleanupFailed,
    PrerequisiteMissing,
    ScaffoldError,
    StepFailed,
)
from nextstarter.log_manager import get_logger
from nextstarter.models import Orm, RunState, ScaffoldRequest, Step
from nextstarter.prerequisites import check_executables, check_node_version
from nextstarter.project_files import (
    copy_template,
    ensure_gitignore_entry,
    remove_path,
    remove_paths,
    rewrite_package_json,
    write_env_files,
    write_orm_files,
)
from nextstarter.prompts import Prompter
from nextstarter.validation import validate_project_name

__all__ = ["ScaffoldOrchestrator"]


class ScaffoldOrchestrator:
    """Turn a project name into a ready-to-run project directory.

    Parameters
    ----------
    config
        Immutable run configuration.
    runner
        Executes git / package-manager commands.
    prompter
        Answers the ORM selection and cleanup confirmation questions.
    cwd
        Directory in which projects are created. Defaults to the process
        working directory at the time of each call.
    logger
        Diagnostic logger. Defaults to the package logger.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        runner: CommandRunner,
        prompter: Prompter,
        cwd: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.runner = runner
        self.prompter = prompter
        self._cwd = cwd
        self.logger = logger or get_logger()
        self.state = RunState.IDLE
        self.step_index: Optional[int] = None

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    # ------------------------------------------------------------------
    # Pre-flight
    # ------------------------------------------------------------------

    def validate(self, name: Optional[str]) -> ScaffoldRequest:
        """Validate ``name``; see :func:`validate_project_name`."""
        return validate_project_name(name, self.config.reserved_names, self.cwd)

    def check_prerequisites(self) -> None:
        """Raise :class:`PrerequisiteMissing` unless git, node and the package manager are usable."""
        check_executables(self.runner, self.config.all_required_tools)
        check_node_version(self.runner, self.config.min_node_version)

    def choose_orm(
        self,
        request: ScaffoldRequest,
        orm: Union[Orm, str, None] = None,
        prompt: bool = False,
    ) -> ScaffoldRequest:
        """Attach the ORM choice to ``request``.

        An explicit ``orm`` wins. Otherwise, when ``prompt`` is set, the
        prompter is asked; a cancelled prompt raises :class:`Aborted`.
        """
        if orm is not None:
            return request.with_orm(Orm.parse(orm))
        if not prompt:
            return request

        answer = self.prompter.select_orm()
        if answer is None:
            raise Aborted()
        return request.with_orm(answer)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def build_steps(self, request: ScaffoldRequest) -> List[Step]:
        """Return the ordered step list for ``request``."""
        steps = [
            Step("📥 Fetching template...", self._fetch_template),
            Step("🗑  Removing CLI bootstrap files...", self._remove_bootstrap_files),
            Step("📝 Updating package.json...", self._rewrite_manifest),
        ]
        if request.orm is not Orm.NONE:
            steps.append(Step(f"🗄  Writing {request.orm.value} ORM files...", self._write_orm_files))
        steps.extend([
            Step("🔐 Writing environment files...", self._write_env_files),
            Step("🙈 Updating .gitignore...", self._ensure_gitignore),
            Step("📦 Installing dependencies...", self._install_dependencies),
            Step("🌱 Initializing fresh Git repository...", self._reinit_git, fatal=False),
        ])
        return steps

    def _run_command(self, command: Sequence[str], description: str, cwd: Optional[Path]) -> None:
        result = self.runner.run(command, cwd=cwd, timeout=self.config.command_timeout)
        if not result.ok:
            self.logger.debug("%s", result.describe())
            raise StepFailed(description, result.status)

    def _local_template(self) -> Optional[Path]:
        """The template directory when the source is a local path, else None.

        Relative paths are taken relative to :attr:`cwd`.
        """
        path = Path(self.config.template_source).expanduser()
        if not path.is_absolute():
            path = self.cwd / path
        return path if path.is_dir() else None

    def _fetch_template(self, request: ScaffoldRequest) -> None:
        source = self.config.template_source
        local = self._local_template()
        if local is not None:
            self.logger.debug("Copying local template %s -> %s", local, request.target_dir)
            copy_template(local, request.target_dir)
            return

        command = ["git", "clone"]
        if self.config.shallow_clone:
            command += ["--depth", "1"]
        command += [source, str(request.target_dir)]
        self._run_command(command, "git clone", cwd=self.cwd)
        if not request.target_dir.is_dir():
            raise StepFailed("git clone", "target directory was not created")

    def _remove_bootstrap_files(self, request: ScaffoldRequest) -> None:
        removed = remove_paths(request.target_dir, self.config.bootstrap_paths)
        self.logger.debug("Removed bootstrap paths: %s", removed or "none")

    def _rewrite_manifest(self, request: ScaffoldRequest) -> None:
        rewrite_package_json(request.target_dir, request.project_name, self.config.initial_version)

    def _write_orm_files(self, request: ScaffoldRequest) -> None:
        written = write_orm_files(request.target_dir, request.orm)
        self.logger.debug("Wrote ORM files: %s", written)

    def _write_env_files(self, request: ScaffoldRequest) -> None:
        write_env_files(request.target_dir, self.config.env_entries(request.orm))

    def _ensure_gitignore(self, request: ScaffoldRequest) -> None:
        changed = ensure_gitignore_entry(request.target_dir)
        self.logger.debug(".gitignore %s", "updated" if changed else "already up to date")

    def _install_commands(self, orm: Orm) -> List[List[str]]:
        pm = self.config.package_manager
        commands = [[pm, "install"]]
        if orm is Orm.NONE:
            return commands

        packages = list(self.config.orm_packages.get(orm, ()))
        if packages:
            commands.append([pm, "install", *packages])
        dev_packages = list(self.config.orm_dev_packages.get(orm, ()))
        if dev_packages:
            commands.append([pm, "install", "-D", *dev_packages])
        if self.config.common_packages:
            commands.append([pm, "install", *self.config.common_packages])
        commands.extend(list(c) for c in self.config.orm_post_install.get(orm, ()))
        if self.config.ui_init_command:
            commands.append(list(self.config.ui_init_command))
        return commands

    def _install_dependencies(self, request: ScaffoldRequest) -> None:
        for command in self._install_commands(request.orm):
            self._run_command(command, " ".join(command), cwd=request.target_dir)

    def _reinit_git(self, request: ScaffoldRequest) -> None:
        git_dir = request.target_dir / ".git"
        if os.path.lexists(git_dir):
            remove_path(git_dir)

        for command in (
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", self.config.commit_message],
        ):
            self._run_command(command, " ".join(command), cwd=request.target_dir)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, request: ScaffoldRequest) -> None:
        """Execute every step for ``request``.

        Raises
        ------
        StepFailed
            On the first fatal step failure, after cleanup has been attempted.
        """
        self.state = RunState.RUNNING
        console.log_step("\n🚀 Initializing project setup...\n")

        for index, step in enumerate(self.build_steps(request)):
            self.step_index = index
            console.log_step(step.description)
            self.logger.info("Step %d: %s", index + 1, step.description)
            try:
                step.action(request)
            except Exception as exc:
                status = exc.status if isinstance(exc, StepFailed) else str(exc)
                if not step.fatal:
                    self.logger.info("Non-fatal step failed: %s (%s)", step.description, status)
                    console.log_warn(f"{step.description.strip(' .')} failed ({status}); continuing.")
                    continue

                self.logger.info("Step failed: %s (%s)", step.description, status)
                console.log_fail(f"Step failed: {step.description.strip(' .')} ({status})")
                self.state = RunState.CLEANING_UP
                self.cleanup(request.target_dir)
                self.state = RunState.FAILED
                raise StepFailed(step.description, status) from exc

        self.step_index = None

    def cleanup(self, target_dir: Path) -> bool:
        """Best-effort removal of ``target_dir``.

        Never raises. Returns True when the directory no longer exists.
        """
        if not os.path.lexists(target_dir):
            return True

        if self.config.confirm_cleanup:
            answer = self.prompter.confirm(f"🧹 Delete partially created project at {target_dir}?")
            if not answer:
                console.log_warn(f"Leaving partially created project in place: {target_dir}")
                self.logger.info("Cleanup declined; leftover path %s", target_dir)
                return False

        try:
            remove_path(target_dir)
        except OSError as exc:
            failure = CleanupFailed(target_dir, str(exc))
            self.logger.info("%s", failure.message)
            console.log_warn(f"Failed to clean up: {exc}. Leftover directory: {target_dir}")
            return False

        console.log_step("\n🧹 Cleaned up project directory due to error.")
        self.logger.info("Removed %s", target_dir)
        return True

    def scaffold(
        self,
        name: Optional[str],
        orm: Union[Orm, str, None] = None,
        prompt_orm: bool = False,
        check_prerequisites: bool = True,
    ) -> int:
        """Run the whole workflow and return the process exit status.

        Returns
        -------
        int
            0 on success, 1 on any failure.
        """
        self.state = RunState.VALIDATING
        try:
            request = self.validate(name)
            request = self.choose_orm(request, orm=orm, prompt=prompt_orm)
        except ValueError as exc:
            self.state = RunState.FAILED
            console.log_fail(str(exc))
            return 1
        except ScaffoldError as exc:
            self.state = RunState.FAILED
            console.log_fail(exc.message)
            return 1

        if check_prerequisites:
            self.state = RunState.CHECKING_PREREQUISITES
            try:
                self.check_prerequisites()
            except PrerequisiteMissing as exc:
                self.state = RunState.FAILED
                console.log_fail(exc.message)
                return 1

        try:
            self.run(request)
        except StepFailed:
            return 1
        except Exception as exc:  # unexpected: still roll back
            self.logger.debug("Unexpected error while scaffolding %s", request.project_name, exc_info=True)
            console.log_fail(f"An unexpected error occurred: {exc}")
            self.state = RunState.CLEANING_UP
            self.cleanup(request.target_dir)
            self.state = RunState.FAILED
            return 1

        self.state = RunState.SUCCEEDED
        orm_label = request.orm.label if request.orm is not Orm.NONE else None
        console.print_next_steps(request.project_name, orm_label)
        return 0
