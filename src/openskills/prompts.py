"""Interactive prompts behind a small protocol so flows can run without a terminal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import click

from openskills.errors import SelectionCancelled

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class Choice:
    value: str
    label: str
    checked: bool = False


class Prompter(Protocol):
    def confirm(self, message: str, default: bool = False) -> bool: ...

    def select(self, title: str, choices: Sequence[Choice]) -> list[str]:
        """Multi-select. Returns the chosen values in choice order."""
        ...


class InteractivePrompter:
    """click confirmations plus questionary checkboxes."""

    def confirm(self, message: str, default: bool = False) -> bool:
        return click.confirm(message, default=default)

    def select(self, title: str, choices: Sequence[Choice]) -> list[str]:
        import questionary

        answer = questionary.checkbox(
            title,
            choices=[questionary.Choice(title=c.label, value=c.value, checked=c.checked) for c in choices],
        ).ask()
        if answer is None:
            raise SelectionCancelled("Selection cancelled")
        return [c.value for c in choices if c.value in answer]


class AutoPrompter:
    """Non-interactive answers for --yes: confirm everything, keep every choice."""

    def confirm(self, message: str, default: bool = False) -> bool:
        return True

    def select(self, title: str, choices: Sequence[Choice]) -> list[str]:
        return [c.value for c in choices]
