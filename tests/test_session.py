"""Tests for the command session loop core."""

from datetime import datetime

from tally_cli.session import Session
from tally_cli.task import Deadline, Todo


class TestSession:

    def test_commands_in_sequence(self, storage):
        session = Session(storage)

        session.handle("todo read book")
        session.handle("deadline submit report /by 2019-12-01 1800")
        session.handle("done 1")
        result = session.handle("list")

        assert result.message.splitlines()[1] == "1. [T][X] read book"
        assert isinstance(session.task_list.get(2), Deadline)
        assert len(storage.saves) == 3

    def test_errors_do_not_end_session(self, storage):
        session = Session(storage)

        bad_command = session.handle("fly away")
        bad_position = session.handle("done 1")
        result = session.handle("todo read book")

        assert bad_command.is_error
        assert bad_command.message == "This command is not recognised"
        assert bad_position.is_error
        assert "empty" in bad_position.message
        assert not result.is_error
        assert session.task_list.size() == 1
        assert not session.finished

    def test_save_failure_keeps_memory(self, failing_storage):
        session = Session(failing_storage)

        result = session.handle("todo read book")

        assert result.is_error
        assert "not saved" in result.message
        assert session.task_list.size() == 1

    def test_bye_finishes(self, storage):
        session = Session(storage)

        result = session.handle("bye")

        assert result.terminate
        assert session.finished

    def test_start_loads_saved_tasks(self, file_storage):
        file_storage.save([Todo("read book"), Deadline("submit report", by=datetime(2019, 12, 1, 18, 0))])

        session = Session.start(file_storage)

        assert session.task_list.size() == 2
        assert session.handle("find report").message.splitlines()[1].startswith("2. [D]")

    def test_expenses_go_to_ledger(self, storage):
        session = Session(storage)

        session.handle("receive salary $100 /by 01-01-2020")
        result = session.handle("pay lunch $30 /by 01-01-2020")

        assert "Your balance is now $70.00." in result.message
        assert session.task_list.size() == 0

    def test_close_saves(self, storage):
        session = Session(storage)
        session.handle("todo read book")

        assert session.close() is None
        assert [t.description for t in storage.tasks] == ["read book"]

    def test_close_reports_failure(self, failing_storage):
        assert Session(failing_storage).close() == "disk full"
