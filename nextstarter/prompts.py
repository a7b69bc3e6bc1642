# nextstarter/prompts.py
"""
Interactive prompts.

The orchestrator asks questions through a :class:`Prompter` so that tests can
supply canned answers. :class:`QuestionaryPrompter` is the terminal
implementation. Both methods return ``None`` when the operator cancels
(Ctrl-C / Esc), matching questionary's ``ask()`` contract.
"""

from __future__ import annotations

from typing import Optional, Protocol

import questionary

from nextstarter.models import Orm

__all__ = ["Prompter", "QuestionaryPrompter", "ORM_CHOICES"]

#: ORMs offered by the interactive prompt, in display order.
ORM_CHOICES = (Orm.PRISMA, Orm.DRIZZLE)


class Prompter(Protocol):
    def select_orm(self) -> Optional[Orm]:
        ...

    def confirm(self, message: str, default: bool = False) -> Optional[bool]:
        ...


class QuestionaryPrompter:
    """:class:`Prompter` backed by questionary."""

    def select_orm(self) -> Optional[Orm]:
        """Ask for one ORM; ``None`` if the prompt was cancelled."""
        choices = [questionary.Choice(title=orm.label, value=orm.value) for orm in ORM_CHOICES]
        answer = questionary.select("🗄  Select ORM:", choices=choices).ask()
        if answer is None:
            return None
        return Orm.parse(answer)

    def confirm(self, message: str, default: bool = False) -> Optional[bool]:
        return questionary.confirm(message, default=default).ask()
