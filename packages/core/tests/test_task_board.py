"""TaskBoard 与领域模型测试"""

import pytest
from helperkust.core.board import TaskBoard
from helperkust.core.models import Task, TaskStatus, next_toggle_status
from pydantic import ValidationError


class TestToggleRule:
    @pytest.mark.parametrize(
        ("current", "expected"),
        [
            (TaskStatus.PENDING, TaskStatus.COMPLETED),
            (TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED),
            (TaskStatus.COMPLETED, TaskStatus.PENDING),
        ],
    )
    def test_next_toggle_status(self, current, expected):
        assert next_toggle_status(current) == expected


class TestTaskModel:
    def test_defaults(self):
        task = Task(task_id="t1", title="Homework")

        assert task.status == TaskStatus.PENDING
        assert task.description is None
        assert task.created_at.tzinfo is not None

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Task(task_id="t1", title="")


class TestTaskBoard:
    def test_add_inserts_at_head(self):
        board = TaskBoard()

        first = board.add_task("Math")
        second = board.add_task("Physics", "chapter 3")

        assert [t.task_id for t in board.list_tasks()] == [second.task_id, first.task_id]
        assert second.description == "chapter 3"
        assert len(board) == 2

    def test_title_stripped(self):
        board = TaskBoard()

        task = board.add_task("  Math  ")

        assert task.title == "Math"

    def test_blank_title_rejected(self):
        board = TaskBoard()

        with pytest.raises(ValueError):
            board.add_task("   ")
        assert len(board) == 0

    def test_unique_ids(self):
        board = TaskBoard()
        ids = {board.add_task(f"task {i}").task_id for i in range(20)}

        assert len(ids) == 20

    def test_duplicate_ids_skipped_on_load(self):
        board = TaskBoard(
            [Task(task_id="t1", title="a"), Task(task_id="t1", title="b")]
        )

        assert len(board) == 1
        assert board.get_task("t1").title == "a"

    def test_set_status(self):
        board = TaskBoard()
        task = board.add_task("Math")

        updated = board.set_status(task.task_id, TaskStatus.IN_PROGRESS)

        assert updated.status == TaskStatus.IN_PROGRESS
        assert board.get_task(task.task_id).status == TaskStatus.IN_PROGRESS
        # 只改状态，身份与位置不变
        assert updated.task_id == task.task_id
        assert updated.created_at == task.created_at

    def test_toggle(self):
        board = TaskBoard()
        task = board.add_task("Math")

        assert board.toggle_status(task.task_id).status == TaskStatus.COMPLETED
        assert board.toggle_status(task.task_id).status == TaskStatus.PENDING

    def test_unknown_task(self):
        board = TaskBoard()

        assert board.set_status("missing", TaskStatus.COMPLETED) is None
        assert board.toggle_status("missing") is None
        assert board.delete_task("missing") is False

    def test_delete(self):
        board = TaskBoard()
        task = board.add_task("Math")

        assert board.delete_task(task.task_id) is True
        assert board.get_task(task.task_id) is None

    def test_filter_by_status(self):
        board = TaskBoard()
        a = board.add_task("a")
        board.add_task("b")
        board.set_status(a.task_id, TaskStatus.COMPLETED)

        completed = board.list_tasks(TaskStatus.COMPLETED)

        assert [t.task_id for t in completed] == [a.task_id]
