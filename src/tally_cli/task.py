"""Task data model for the Tally CLI application."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from .utils.datetime import format_datetime, to_storage_string, from_storage_string


class TaskKind(Enum):
    """Kinds of trackable task."""
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"

    @property
    def symbol(self) -> str:
        return self.name[0]


@dataclass
class Task:
    """Base task with a description and a completion flag.

    The description is fixed at creation; only ``done`` changes afterwards,
    and only through ``complete()``.
    """

    kind: ClassVar[TaskKind]

    description: str
    done: bool = False

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "description" and "description" in self.__dict__:
            raise AttributeError("Task description cannot be changed")
        super().__setattr__(name, value)

    def complete(self) -> None:
        """Mark the task as done."""
        self.done = True

    @property
    def when(self) -> Optional[datetime]:
        """Point in time attached to the task, if any."""
        return None

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def __str__(self) -> str:
        return f"[{self.kind.symbol}][{self.status_icon}] {self.description}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert the task to a plain dictionary."""
        return {
            "kind": self.kind.value,
            "description": self.description,
            "done": self.done,
            "when": to_storage_string(self.when),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create the right task variant from a dictionary.

        Raises:
            ValueError: If the kind is unknown or a timed task has no time
        """
        kind = TaskKind(data.get("kind", "todo"))
        description = data.get("description", "")
        done = bool(data.get("done", False))
        if kind is TaskKind.TODO:
            return Todo(description, done=done)

        when = from_storage_string(data.get("when"))
        if when is None:
            raise ValueError(f"A {kind.value} task needs a date and time")
        if kind is TaskKind.DEADLINE:
            return Deadline(description, by=when, done=done)
        return Event(description, at=when, done=done)


@dataclass
class Todo(Task):
    """A task with only a description."""

    kind: ClassVar[TaskKind] = TaskKind.TODO


@dataclass
class Deadline(Task):
    """A task that has to be done by a certain time."""

    kind: ClassVar[TaskKind] = TaskKind.DEADLINE
    BREAK: ClassVar[str] = "/by"

    by: datetime = field(default_factory=datetime.now)

    @property
    def when(self) -> Optional[datetime]:
        return self.by

    def __str__(self) -> str:
        return f"{super().__str__()} (by: {format_datetime(self.by)})"


@dataclass
class Event(Task):
    """A task that happens at a certain time."""

    kind: ClassVar[TaskKind] = TaskKind.EVENT
    BREAK: ClassVar[str] = "/at"

    at: datetime = field(default_factory=datetime.now)

    @property
    def when(self) -> Optional[datetime]:
        return self.at

    def __str__(self) -> str:
        return f"{super().__str__()} (at: {format_datetime(self.at)})"
