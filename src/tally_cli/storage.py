"""Storage layer for Tally CLI using a markdown file with YAML frontmatter."""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

import frontmatter
import yaml

from .errors import StorageError
from .task import Task
from .utils.datetime import from_storage_string, to_storage_string

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

AT_COMMENT_RE = re.compile(r"\s*(?<!\\)<!--\s*at\s*:\s*(\S+)\s*-->\s*$")
TASK_LINE_RE = re.compile(r"^- \[( |x)\] \((todo|deadline|event)\) (.*)$")
ESCAPE_RE = re.compile(r"\\(.)|\\\Z")

_UNESCAPES = {"n": "\n", "r": "\r"}


def escape_description(text: str) -> str:
    """Make a description safe to write on one task line.

    Backslashes, "<" and line breaks are escaped. A description that ends in
    whitespace gets a closing backslash so the whitespace is kept on reload.
    """
    text = (text.replace("\\", "\\\\").replace("<", "\\<")
            .replace("\n", "\\n").replace("\r", "\\r"))
    if text != text.rstrip():
        text += "\\"
    return text


def _unescape(match: "re.Match") -> str:
    char = match.group(1)
    if char is None:
        return ""
    return _UNESCAPES.get(char, char)


def unescape_description(text: str) -> str:
    """Reverse escape_description."""
    return ESCAPE_RE.sub(_unescape, text)


class TaskMarkdownFormat:
    """Handles conversion between Task objects and markdown lines."""

    @staticmethod
    def to_markdown(task: Task) -> str:
        """Convert a task to a single checkbox line."""
        checkbox = "- [x]" if task.done else "- [ ]"
        line = f"{checkbox} ({task.kind.value}) {escape_description(task.description)}"
        when = to_storage_string(task.when)
        if when:
            line += f" <!-- at:{when} -->"
        return line

    @staticmethod
    def from_markdown(line: str) -> Optional[Task]:
        """Parse a checkbox line back to a Task.

        Returns None for lines that are not task lines.

        Raises:
            ValueError: If a task line carries a malformed or missing time
        """
        line = line.rstrip()
        m = TASK_LINE_RE.match(line)
        if not m:
            return None

        mark, kind, rest = m.groups()
        when = None
        at_match = AT_COMMENT_RE.search(rest)
        if at_match:
            when = at_match.group(1)
            rest = rest[:at_match.start()]

        data = {
            "kind": kind,
            "description": unescape_description(rest),
            "done": mark == "x",
            "when": when,
        }
        return Task.from_dict(data)


class TaskFileFormat:
    """Whole-file conversion: frontmatter header plus one task per line."""

    @staticmethod
    def dumps(tasks: List[Task]) -> str:
        lines = ["# Tasks", ""]
        lines.extend(TaskMarkdownFormat.to_markdown(t) for t in tasks)
        post = frontmatter.Post(
            "\n".join(lines),
            format_version=FORMAT_VERSION,
            updated=datetime.now().isoformat(timespec="seconds"),
            count=len(tasks),
        )
        return frontmatter.dumps(post) + "\n"

    @staticmethod
    def loads(content: str) -> List[Task]:
        post = frontmatter.loads(content)
        version = post.metadata.get("format_version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            logger.warning("Task file format version %s, expected %s", version, FORMAT_VERSION)

        tasks = []
        for lineno, line in enumerate(post.content.split("\n"), start=1):
            try:
                task = TaskMarkdownFormat.from_markdown(line)
            except ValueError as e:
                logger.warning("Skipping task line %d: %s", lineno, e)
                continue
            if task is not None:
                tasks.append(task)
        return tasks


class TaskStorage:
    """File-based storage for the task list. Every save rewrites the file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> List[Task]:
        """Load tasks in saved order; a missing file is an empty list.

        Raises:
            StorageError: If the file exists but cannot be read
        """
        if not self.path.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
            tasks = TaskFileFormat.loads(content)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read tasks from {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise StorageError(f"Task file {self.path} is malformed: {e}") from e

        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the file with the given tasks.

        Raises:
            StorageError: If the file cannot be written
        """
        tasks = list(tasks)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(TaskFileFormat.dumps(tasks))
        except OSError as e:
            raise StorageError(f"Could not save tasks to {self.path}: {e}") from e

        logger.debug("Saved %d tasks to %s", len(tasks), self.path)
