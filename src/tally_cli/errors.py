"""Exceptions raised by Tally CLI."""

from typing import List, Optional


class TallyError(Exception):
    """Base exception for Tally CLI."""
    pass


class ParseError(TallyError):
    """A command line could not be turned into an operation."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)


class TaskIndexError(TallyError, IndexError):
    """A task position fell outside the current list."""

    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        if size == 0:
            message = f"There is no task {position}, your list is empty."
        else:
            message = f"There is no task {position}, pick a number from 1 to {size}."
        super().__init__(message)


class StorageError(TallyError):
    """Reading or writing the task file failed."""
    pass
