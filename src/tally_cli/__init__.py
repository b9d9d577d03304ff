"""Tally CLI - track tasks and expenses from single-line commands."""

__version__ = "0.1.0"

from .domain import (
    Task,
    Todo,
    Deadline,
    Event,
    TaskList,
    Expense,
    Payable,
    Receivable,
    CommandParser,
    ParseError,
)

__all__ = [
    "Task",
    "Todo",
    "Deadline",
    "Event",
    "TaskList",
    "Expense",
    "Payable",
    "Receivable",
    "CommandParser",
    "ParseError",
    "__version__",
]
