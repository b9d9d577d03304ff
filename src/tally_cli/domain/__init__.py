"""Domain models and the command parser for Tally CLI."""

from ..task import Task, TaskKind, Todo, Deadline, Event
from ..task_list import TaskList
from ..expense import Expense, ExpenseKind, ExpenseLedger, Payable, Receivable
from ..errors import ParseError, TaskIndexError
from ..parser import CommandParser, CommandType

__all__ = [
    "Task",
    "TaskKind",
    "Todo",
    "Deadline",
    "Event",
    "TaskList",
    "Expense",
    "ExpenseKind",
    "ExpenseLedger",
    "Payable",
    "Receivable",
    "ParseError",
    "TaskIndexError",
    "CommandParser",
    "CommandType",
]
