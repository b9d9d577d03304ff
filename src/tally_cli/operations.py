"""Executable operations produced by the command parser.

Each operation is bound at construction time to everything it needs and is
run once through ``execute()``. Mutating operations save the full task list
after changing it.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from .expense import Expense, ExpenseLedger, Payable, Receivable
from .storage import TaskStorage
from .task import Deadline, Event, Task, Todo
from .task_list import TaskList
from .utils.money import format_money

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Text to show the user, and whether the session should end."""
    message: str
    terminate: bool = False
    is_error: bool = False
    suggestions: List[str] = field(default_factory=list)


def _count_line(task_list: TaskList) -> str:
    size = task_list.size()
    noun = "task" if size == 1 else "tasks"
    return f"Now you have {size} {noun} in the list."


class Operation(ABC):
    """A fully bound, one-shot command."""

    @abstractmethod
    def execute(self) -> OperationResult:
        """Run the operation and describe the outcome."""


class ExitOperation(Operation):
    """Save the list one last time and end the session."""

    def __init__(self, task_list: TaskList, storage: TaskStorage):
        self.task_list = task_list
        self.storage = storage

    def execute(self) -> OperationResult:
        self.storage.save(self.task_list.iterate())
        return OperationResult("Bye. Hope to see you again soon!", terminate=True)


class ListOperation(Operation):
    def __init__(self, task_list: TaskList):
        self.task_list = task_list

    def execute(self) -> OperationResult:
        if not self.task_list.size():
            return OperationResult("Your list is empty.")
        lines = ["Here are the tasks in your list:"]
        lines.extend(f"{i}. {task}" for i, task in self.task_list.numbered())
        return OperationResult("\n".join(lines))


class DoneOperation(Operation):
    def __init__(self, task_list: TaskList, storage: TaskStorage, position: int):
        self.task_list = task_list
        self.storage = storage
        self.position = position

    def execute(self) -> OperationResult:
        task = self.task_list.complete(self.position)
        self.storage.save(self.task_list.iterate())
        return OperationResult(f"Nice! I've marked this task as done:\n  {task}")


class DeleteOperation(Operation):
    def __init__(self, task_list: TaskList, storage: TaskStorage, position: int):
        self.task_list = task_list
        self.storage = storage
        self.position = position

    def execute(self) -> OperationResult:
        task = self.task_list.remove(self.position)
        self.storage.save(self.task_list.iterate())
        return OperationResult(
            f"Noted. I've removed this task:\n  {task}\n{_count_line(self.task_list)}"
        )


class AddTaskOperation(Operation):
    """Shared behaviour of the AddTodo/AddDeadline/AddEvent operations."""

    def __init__(self, task_list: TaskList, storage: TaskStorage, description: str):
        self.task_list = task_list
        self.storage = storage
        self.description = description

    @abstractmethod
    def build_task(self) -> Task:
        """Construct the task this operation adds."""

    def execute(self) -> OperationResult:
        task = self.task_list.add(self.build_task())
        logger.debug("Added %s task at position %d", task.kind.value, self.task_list.size())
        self.storage.save(self.task_list.iterate())
        return OperationResult(
            f"Got it. I've added this task:\n  {task}\n{_count_line(self.task_list)}"
        )


class AddTodoOperation(AddTaskOperation):
    def build_task(self) -> Task:
        return Todo(self.description)


class AddDeadlineOperation(AddTaskOperation):
    def __init__(self, task_list: TaskList, storage: TaskStorage, description: str, by: datetime):
        super().__init__(task_list, storage, description)
        self.by = by

    def build_task(self) -> Task:
        return Deadline(self.description, by=self.by)


class AddEventOperation(AddTaskOperation):
    def __init__(self, task_list: TaskList, storage: TaskStorage, description: str, at: datetime):
        super().__init__(task_list, storage, description)
        self.at = at

    def build_task(self) -> Task:
        return Event(self.description, at=self.at)


class FindOperation(Operation):
    """Case-sensitive substring search over task descriptions."""

    def __init__(self, task_list: TaskList, keyword: str):
        self.task_list = task_list
        self.keyword = keyword

    def matches(self) -> List[Tuple[int, Task]]:
        return self.task_list.find(self.keyword)

    def execute(self) -> OperationResult:
        found = self.matches()
        if not found:
            return OperationResult(f"There are no tasks matching '{self.keyword}' in your list.")
        lines = ["Here are the matching tasks in your list:"]
        lines.extend(f"{i}. {task}" for i, task in found)
        return OperationResult("\n".join(lines))


class AddExpenseOperation(Operation):
    """Shared behaviour of the AddPayable/AddReceivable operations.

    Expenses are recorded in the session ledger when one is bound; they are
    never written to the task file.
    """

    expense_class = Expense

    def __init__(self, description: str, value: Decimal, date: datetime,
                 ledger: Optional[ExpenseLedger] = None):
        self.description = description
        self.value = value
        self.date = date
        self.ledger = ledger

    def build_expense(self) -> Expense:
        return self.expense_class(self.description, self.value, self.date)

    def execute(self) -> OperationResult:
        expense = self.build_expense()
        lines = [f"Got it. I've recorded this expense:\n  {expense}"]
        if self.ledger is not None:
            self.ledger.add(expense)
            lines.append(f"Your balance is now {format_money(self.ledger.balance())}.")
        return OperationResult("\n".join(lines))


class AddPayableOperation(AddExpenseOperation):
    expense_class = Payable


class AddReceivableOperation(AddExpenseOperation):
    expense_class = Receivable
