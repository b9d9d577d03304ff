"""Tests for the markdown task file."""

import pytest
from datetime import datetime

from tally_cli.errors import StorageError
from tally_cli.session import Session
from tally_cli.storage import (
    TaskFileFormat,
    TaskMarkdownFormat,
    TaskStorage,
    escape_description,
    unescape_description,
)
from tally_cli.task import Deadline, Event, Todo


class TestTaskMarkdownFormat:

    def test_todo_line(self):
        assert TaskMarkdownFormat.to_markdown(Todo("read book")) == "- [ ] (todo) read book"

    def test_deadline_line(self):
        deadline = Deadline("submit report", by=datetime(2019, 12, 1, 18, 0), done=True)

        line = TaskMarkdownFormat.to_markdown(deadline)

        assert line == "- [x] (deadline) submit report <!-- at:2019-12-01T18:00:00 -->"

    def test_parse_event_line(self):
        task = TaskMarkdownFormat.from_markdown(
            "- [ ] (event) team dinner <!-- at:2020-01-05T19:30:00 -->"
        )

        assert isinstance(task, Event)
        assert task.description == "team dinner"
        assert task.at == datetime(2020, 1, 5, 19, 30)
        assert not task.done

    def test_non_task_lines(self):
        assert TaskMarkdownFormat.from_markdown("# Tasks") is None
        assert TaskMarkdownFormat.from_markdown("") is None
        assert TaskMarkdownFormat.from_markdown("- [ ] no kind here") is None

    def test_timed_task_without_time(self):
        with pytest.raises(ValueError):
            TaskMarkdownFormat.from_markdown("- [ ] (deadline) submit report")

    def test_render_parse_render(self):
        event = Event("talk /at the cafe", at=datetime(2020, 1, 5, 19, 30))

        rendered = TaskMarkdownFormat.to_markdown(event)
        parsed = TaskMarkdownFormat.from_markdown(rendered)

        assert parsed == event
        assert TaskMarkdownFormat.to_markdown(parsed) == rendered

    def test_year_before_1000(self):
        deadline = Deadline("old thing", by=datetime(999, 12, 1, 18, 0))

        line = TaskMarkdownFormat.to_markdown(deadline)

        assert "<!-- at:0999-12-01T18:00:00 -->" in line
        assert TaskMarkdownFormat.from_markdown(line) == deadline

    @pytest.mark.parametrize("description", [
        "fix <!-- at:x -->",
        "read book ",
        "  spaced out  ",
        "path C:\\temp\\",
        "a \\< b",
        "two\nlines",
    ])
    def test_description_is_kept_exactly(self, description):
        for task in (Todo(description), Deadline(description, by=datetime(2019, 12, 1, 18, 0))):
            parsed = TaskMarkdownFormat.from_markdown(TaskMarkdownFormat.to_markdown(task))

            assert parsed.description == description
            assert parsed == task

    def test_escaped_line(self):
        assert TaskMarkdownFormat.to_markdown(Todo("fix <!-- at:x -->")) == "- [ ] (todo) fix \\<!-- at:x -->"
        assert TaskMarkdownFormat.to_markdown(Todo("read book ")) == "- [ ] (todo) read book \\"

    def test_unescape(self):
        assert unescape_description(escape_description("a\\b <c> ")) == "a\\b <c> "
        assert unescape_description("plain text") == "plain text"


class TestTaskFileFormat:

    def test_frontmatter_header(self):
        content = TaskFileFormat.dumps([Todo("read book")])

        assert content.startswith("---\n")
        assert "format_version: 1" in content
        assert "count: 1" in content
        assert "updated:" in content

    def test_bad_lines_are_skipped(self):
        content = "\n".join([
            "---",
            "format_version: 1",
            "---",
            "- [ ] (todo) read book",
            "- [ ] (deadline) no time",
            "- [x] (event) bad time <!-- at:yesterday -->",
            "some note",
            "- [x] (todo) buy milk",
        ])

        tasks = TaskFileFormat.loads(content)

        assert [(t.description, t.done) for t in tasks] == [("read book", False), ("buy milk", True)]


class TestTaskStorage:

    def test_missing_file_is_empty(self, file_storage):
        assert file_storage.load() == []

    def test_save_and_load_keeps_order(self, file_storage):
        tasks = [
            Todo("read book", done=True),
            Deadline("submit report", by=datetime(2019, 12, 1, 18, 0)),
            Event("team dinner", at=datetime(2020, 1, 5, 19, 30)),
        ]

        file_storage.save(tasks)

        assert file_storage.load() == tasks

    def test_save_overwrites(self, file_storage):
        file_storage.save([Todo("a"), Todo("b")])
        file_storage.save([Todo("c")])

        assert [t.description for t in file_storage.load()] == ["c"]

    def test_save_creates_directories(self, tmp_path):
        storage = TaskStorage(tmp_path / "nested" / "dir" / "tasks.md")

        storage.save([Todo("read book")])

        assert storage.path.exists()

    def test_save_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        storage = TaskStorage(blocker / "tasks.md")

        with pytest.raises(StorageError):
            storage.save([Todo("read book")])

    def test_malformed_header(self, file_storage):
        file_storage.path.write_text("---\nformat_version: [1\n---\n- [ ] (todo) a\n", encoding="utf-8")

        with pytest.raises(StorageError):
            file_storage.load()

    def test_session_round_trip(self, file_storage):
        session = Session(file_storage)
        for line in [
            "deadline old thing /by 0999-12-01 1800",
            "todo fix <!-- at:x -->",
            "todo read book ",
        ]:
            assert not session.handle(line).is_error

        reloaded = Session.start(file_storage)

        assert reloaded.task_list.iterate() == session.task_list.iterate()
        assert [str(t) for t in reloaded.task_list] == [str(t) for t in session.task_list]
        assert len(reloaded.task_list.find("book ")) == 1
