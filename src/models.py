"""Data models for the terminal task list.

Exposes the Task dataclass plus the single-line text codec used by the
file backend. A task has no id: its identity is its position in the store.
"""
from __future__ import annotations
from dataclasses import dataclass

SEPARATOR = ","
DONE_MARKER = "[X] "
TODO_MARKER = "[ ] "
_TRUE = "true"
_FALSE = "false"

@dataclass
class Task:
    """A single task record.

    Fields:
        description: Free text. Empty is allowed.
        completed: Set once the task is marked done; never cleared.
    """
    description: str
    completed: bool = False

    @property
    def marker(self) -> str:
        return DONE_MARKER if self.completed else TODO_MARKER

    def display(self) -> str:
        """Return the user-facing form, e.g. "[X] Buy milk"."""
        return self.marker + self.description

    def to_line(self) -> str:
        """Encode as "<description>,<true|false>" (no trailing newline)."""
        return f"{self.description}{SEPARATOR}{_TRUE if self.completed else _FALSE}"

    @classmethod
    def from_line(cls, line: str) -> "Task":
        """Decode one stored line.

        Splits at the first separator; only the literal "true" after it counts
        as completed. A line without a separator is all description.
        """
        line = line.rstrip("\r\n")
        description, sep, flag = line.partition(SEPARATOR)
        if not sep:
            return cls(description=line)
        return cls(description=description, completed=flag == _TRUE)

def completed_line(line: str) -> str:
    """Rewrite a stored line so its flag reads "true", keeping the description."""
    line = line.rstrip("\r\n")
    description, sep, _ = line.partition(SEPARATOR)
    if not sep:
        return line + SEPARATOR + _TRUE
    return description + SEPARATOR + _TRUE
