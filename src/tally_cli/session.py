"""A running Tally session: one task list, one storage handle, one ledger."""

import logging
from typing import Optional

from .errors import ParseError, StorageError, TaskIndexError
from .expense import ExpenseLedger
from .operations import OperationResult
from .parser import CommandParser
from .storage import TaskStorage
from .task_list import TaskList

logger = logging.getLogger(__name__)


class Session:
    """Parses and executes command lines one at a time.

    Every command-level error is turned into an error result here, so a bad
    command never affects the ones after it.
    """

    def __init__(self, storage: TaskStorage, task_list: Optional[TaskList] = None,
                 ledger: Optional[ExpenseLedger] = None):
        self.storage = storage
        self.ledger = ledger if ledger is not None else ExpenseLedger()
        self.parser = CommandParser(self.ledger)
        self.task_list = task_list if task_list is not None else TaskList()
        self.finished = False

    @classmethod
    def start(cls, storage: TaskStorage) -> "Session":
        """Load the saved list and open a session over it.

        Raises:
            StorageError: If the task file exists but cannot be read
        """
        return cls(storage, TaskList(storage.load()))

    def handle(self, line: str) -> OperationResult:
        """Parse and run one command line."""
        try:
            operation = self.parser.parse(line, self.task_list, self.storage)
            result = operation.execute()
        except ParseError as e:
            logger.debug("Rejected %r: %s", line, e)
            return OperationResult(e.message, is_error=True, suggestions=e.suggestions)
        except TaskIndexError as e:
            logger.debug("Bad position in %r: %s", line, e)
            return OperationResult(str(e), is_error=True)
        except StorageError as e:
            logger.warning("%s", e)
            return OperationResult(f"Your change was kept in memory but not saved: {e}",
                                   is_error=True)

        if result.terminate:
            self.finished = True
        return result

    def close(self) -> Optional[str]:
        """Save the list when leaving without 'bye'. Returns an error message on failure."""
        try:
            self.storage.save(self.task_list.iterate())
        except StorageError as e:
            logger.warning("%s", e)
            return str(e)
        return None
