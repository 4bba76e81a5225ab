"""A command name paired with its arguments."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """A program to run together with the arguments to pass to it."""

    command: str
    args: tuple[str, ...] = ()

    @classmethod
    def build(cls, command: str, args: Iterable[str]) -> Command:
        """Create a command from its name and a sequence of arguments."""
        return cls(command, tuple(args))

    def full(self) -> str:
        """Return the full command line as a single string."""
        return f"{self.command} {' '.join(self.args)}"

    def __str__(self) -> str:
        return self.full()