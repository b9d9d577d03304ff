"""Command parser for Tally CLI.

Turns one line of user input into a bound Operation. The parser never
touches the task list or storage itself; it only hands them to the
operation it builds.
"""

import logging
import re
from enum import Enum
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Sequence

from fuzzywuzzy import fuzz, process

from .errors import ParseError
from .expense import Expense, ExpenseLedger
from .operations import (
    AddDeadlineOperation,
    AddEventOperation,
    AddPayableOperation,
    AddReceivableOperation,
    AddTodoOperation,
    DeleteOperation,
    DoneOperation,
    ExitOperation,
    FindOperation,
    ListOperation,
    Operation,
)
from .storage import TaskStorage
from .task import Deadline, Event
from .task_list import TaskList
from .utils.datetime import (
    DATE_FORMAT_INPUT,
    DATETIME_FORMAT_INPUT,
    parse_date_string,
    parse_datetime_string,
)
from .utils.money import is_money, money_to_value

logger = logging.getLogger(__name__)

INDEX_NOT_FOUND = -1
# Digits only, with at least one non-zero digit
POSITION_RE = re.compile(r"^[0-9]*[1-9][0-9]*$")


class CommandType(Enum):
    """Command keywords and the minimum number of tokens each needs."""
    BYE = ("bye", 1)
    LIST = ("list", 1)
    DONE = ("done", 2)
    TODO = ("todo", 2)
    DEADLINE = ("deadline", 4)
    EVENT = ("event", 4)
    DELETE = ("delete", 2)
    FIND = ("find", 2)
    PAY = ("pay", 5)
    RECEIVE = ("receive", 5)

    def __init__(self, keyword: str, min_length: int):
        self.keyword = keyword
        self.min_length = min_length

    def is_valid_length(self, length: int) -> bool:
        return length >= self.min_length

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional["CommandType"]:
        return _KEYWORDS.get(keyword)


_KEYWORDS: Mapping[str, CommandType] = MappingProxyType({c.keyword: c for c in CommandType})


def join_tokens(tokens: Sequence[str], start: int, end: Optional[int] = None) -> str:
    """Join tokens[start:end] with single spaces."""
    return " ".join(tokens[start:end])


def index_of(tokens: Sequence[str], marker: str, start: int = 1) -> int:
    """First position of marker at or after start, or INDEX_NOT_FOUND."""
    for i in range(start, len(tokens)):
        if tokens[i] == marker:
            return i
    return INDEX_NOT_FOUND


class ParseContext:
    """Everything a command builder may bind into its operation."""

    def __init__(self, tokens: List[str], task_list: TaskList, storage: TaskStorage,
                 ledger: Optional[ExpenseLedger] = None):
        self.tokens = tokens
        self.task_list = task_list
        self.storage = storage
        self.ledger = ledger


Builder = Callable[[ParseContext], Operation]

ARITY_MESSAGES = {
    CommandType.DONE: "Ensure a number is passed after a done command.",
    CommandType.DELETE: "Ensure a number is passed after a delete command.",
    CommandType.TODO: "Ensure there is a description for a todo item.",
    CommandType.DEADLINE: "Ensure there is a description and a datetime for a deadline command.",
    CommandType.EVENT: "Ensure there is a description and a time for an event command.",
    CommandType.FIND: "Ensure a keyword is entered so that I can perform a search with it.",
    CommandType.PAY: "Ensure a description, value and date are input.",
    CommandType.RECEIVE: "Ensure a description, value and date are input.",
}

MONEY_FORMAT_MESSAGE = "Ensure money passed in is of the format: $30 or $30.00"


def _position(ctx: ParseContext, command: CommandType) -> int:
    token = ctx.tokens[1]
    if not POSITION_RE.match(token):
        raise ParseError(ARITY_MESSAGES[command])
    return int(token)


def _text_after_keyword(ctx: ParseContext, command: CommandType) -> str:
    text = join_tokens(ctx.tokens, 1)
    if not text.strip():
        raise ParseError(ARITY_MESSAGES[command])
    return text


def _split_timed(ctx: ParseContext, command: CommandType, marker: str):
    """Split '<desc> <marker> <datetime>' into description and datetime."""
    split = index_of(ctx.tokens, marker)
    if split == INDEX_NOT_FOUND:
        raise ParseError(f"Ensure an indication of '{marker}' after a {command.keyword} command.")

    description = join_tokens(ctx.tokens, 1, split)
    if not description.strip():
        raise ParseError(ARITY_MESSAGES[command])

    raw = join_tokens(ctx.tokens, split + 1)
    try:
        when = parse_datetime_string(raw, DATETIME_FORMAT_INPUT)
    except ValueError as e:
        raise ParseError(
            f"Could not read '{raw}' as a date and time; use the format yyyy-mm-dd HHMM, "
            f"e.g. 2019-12-01 1800."
        ) from e
    return description, when


def _split_expense(ctx: ParseContext, command: CommandType):
    """Split '<desc> $<amount> /by <date>' into description, value and date."""
    split = index_of(ctx.tokens, Expense.BREAK)
    if split == INDEX_NOT_FOUND:
        raise ParseError(f"Ensure an indication of '{Expense.BREAK}' after a {command.keyword} command.")

    money_index = split - 1
    if not is_money(ctx.tokens[money_index]):
        raise ParseError(MONEY_FORMAT_MESSAGE)

    description = join_tokens(ctx.tokens, 1, money_index)
    if not description.strip():
        raise ParseError(ARITY_MESSAGES[command])

    value = money_to_value(ctx.tokens[money_index])
    raw = join_tokens(ctx.tokens, split + 1)
    try:
        date = parse_date_string(raw, DATE_FORMAT_INPUT)
    except ValueError as e:
        raise ParseError(
            f"Could not read '{raw}' as a date; use the format dd-mm-yyyy, e.g. 01-01-2020."
        ) from e
    return description, value, date


def _build_exit(ctx: ParseContext) -> Operation:
    return ExitOperation(ctx.task_list, ctx.storage)


def _build_list(ctx: ParseContext) -> Operation:
    return ListOperation(ctx.task_list)


def _build_done(ctx: ParseContext) -> Operation:
    return DoneOperation(ctx.task_list, ctx.storage, _position(ctx, CommandType.DONE))


def _build_delete(ctx: ParseContext) -> Operation:
    return DeleteOperation(ctx.task_list, ctx.storage, _position(ctx, CommandType.DELETE))


def _build_todo(ctx: ParseContext) -> Operation:
    return AddTodoOperation(ctx.task_list, ctx.storage, _text_after_keyword(ctx, CommandType.TODO))


def _build_deadline(ctx: ParseContext) -> Operation:
    description, by = _split_timed(ctx, CommandType.DEADLINE, Deadline.BREAK)
    return AddDeadlineOperation(ctx.task_list, ctx.storage, description, by)


def _build_event(ctx: ParseContext) -> Operation:
    description, at = _split_timed(ctx, CommandType.EVENT, Event.BREAK)
    return AddEventOperation(ctx.task_list, ctx.storage, description, at)


def _build_find(ctx: ParseContext) -> Operation:
    return FindOperation(ctx.task_list, _text_after_keyword(ctx, CommandType.FIND))


def _build_pay(ctx: ParseContext) -> Operation:
    description, value, date = _split_expense(ctx, CommandType.PAY)
    return AddPayableOperation(description, value, date, ledger=ctx.ledger)


def _build_receive(ctx: ParseContext) -> Operation:
    description, value, date = _split_expense(ctx, CommandType.RECEIVE)
    return AddReceivableOperation(description, value, date, ledger=ctx.ledger)


BUILDERS: Mapping[CommandType, Builder] = MappingProxyType({
    CommandType.BYE: _build_exit,
    CommandType.LIST: _build_list,
    CommandType.DONE: _build_done,
    CommandType.TODO: _build_todo,
    CommandType.DEADLINE: _build_deadline,
    CommandType.EVENT: _build_event,
    CommandType.DELETE: _build_delete,
    CommandType.FIND: _build_find,
    CommandType.PAY: _build_pay,
    CommandType.RECEIVE: _build_receive,
})


def suggest_commands(keyword: str, limit: int = 2) -> List[str]:
    """Close command keywords for a mistyped one."""
    if not keyword:
        return []
    matches = process.extractBests(keyword, list(_KEYWORDS), scorer=fuzz.ratio,
                                   score_cutoff=60, limit=limit)
    return [match[0] for match in matches]


class CommandParser:
    """Parses raw command lines into operations."""

    def __init__(self, ledger: Optional[ExpenseLedger] = None):
        self.ledger = ledger

    def parse(self, line: str, task_list: TaskList, storage: TaskStorage) -> Operation:
        """Parse a command line into an Operation.

        Args:
            line: Raw text typed by the user
            task_list: The list the operation will act on
            storage: Where mutating operations save the list

        Returns:
            The bound, not yet executed, operation

        Raises:
            ParseError: If the command is not recognised or is malformed
        """
        tokens = line.split(" ")
        keyword = tokens[0] if tokens else ""
        command = CommandType.from_keyword(keyword)
        if command is None:
            suggestions = [f"Did you mean '{s}'?" for s in suggest_commands(keyword)]
            raise ParseError("This command is not recognised", suggestions=suggestions)

        if not command.is_valid_length(len(tokens)):
            raise ParseError(ARITY_MESSAGES[command])

        logger.debug("Parsing %s command with %d tokens", command.keyword, len(tokens))
        ctx = ParseContext(tokens, task_list, storage, self.ledger)
        return BUILDERS[command](ctx)


def parse(line: str, task_list: TaskList, storage: TaskStorage,
          ledger: Optional[ExpenseLedger] = None) -> Operation:
    """Parse a line with a one-off CommandParser."""
    return CommandParser(ledger).parse(line, task_list, storage)
