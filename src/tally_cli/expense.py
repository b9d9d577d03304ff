"""Expense data model: money owed (payable) and money due (receivable)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Iterator, List

from .utils.datetime import DATE_FORMAT_OUTPUT, format_datetime
from .utils.money import CENTS, format_money


class ExpenseKind(Enum):
    """Direction of an expense."""
    PAYABLE = "payable"
    RECEIVABLE = "receivable"


@dataclass(frozen=True)
class Expense:
    """A dated monetary record."""

    kind: ClassVar[ExpenseKind]
    BREAK: ClassVar[str] = "/by"

    description: str
    value: Decimal
    date: datetime

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("Expense value cannot be negative")
        object.__setattr__(self, "value", Decimal(self.value).quantize(CENTS))

    @property
    def signed_value(self) -> Decimal:
        """Value as it affects the balance: receivables add, payables subtract."""
        return self.value if self.kind is ExpenseKind.RECEIVABLE else -self.value

    def __str__(self) -> str:
        tag = "P" if self.kind is ExpenseKind.PAYABLE else "R"
        return (
            f"[{tag}] {self.description} {format_money(self.value)} "
            f"(on: {format_datetime(self.date, DATE_FORMAT_OUTPUT)})"
        )


@dataclass(frozen=True)
class Payable(Expense):
    """Money the user owes."""

    kind: ClassVar[ExpenseKind] = ExpenseKind.PAYABLE


@dataclass(frozen=True)
class Receivable(Expense):
    """Money owed to the user."""

    kind: ClassVar[ExpenseKind] = ExpenseKind.RECEIVABLE


class ExpenseLedger:
    """In-memory record of the expenses entered during a session."""

    def __init__(self):
        self._entries: List[Expense] = []

    def __iter__(self) -> Iterator[Expense]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, expense: Expense) -> Expense:
        self._entries.append(expense)
        return expense

    def balance(self) -> Decimal:
        """Receivables minus payables."""
        return sum((e.signed_value for e in self._entries), Decimal("0.00"))
