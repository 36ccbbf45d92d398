"""Workspace 测试 -- 看板操作与会话联动、偏好"""

from helperkust.core.models import AssistanceMode, SessionState, TaskStatus, Theme


class TestTaskLifecycle:
    async def test_add_task_opens_it(self, make_workspace):
        workspace = make_workspace()

        task = await workspace.add_task("  Math  ", "chapter 1")

        assert task.title == "Math"
        assert workspace.session.task_id == task.task_id
        assert workspace.active_task == task
        assert workspace.session.state == SessionState.MODE_UNSELECTED

    async def test_reopen_same_task_keeps_session(self, make_workspace, scripted):
        workspace = make_workspace(scripted("4"))
        task = await workspace.add_task("Math")
        await workspace.submit_turn("2+2?", mode=AssistanceMode.SOLVE)
        session_id = workspace.session.session_id

        workspace.open_task(task.task_id)

        assert workspace.session.session_id == session_id
        assert len(workspace.session.messages) == 2

    async def test_open_other_task_discards_session(self, make_workspace, scripted):
        workspace = make_workspace(scripted("4"))
        first = await workspace.add_task("Math")
        await workspace.submit_turn("2+2?", mode=AssistanceMode.SOLVE)
        second = await workspace.add_task("Physics")

        workspace.open_task(first.task_id)

        assert second.task_id != first.task_id
        assert workspace.session.messages == []
        assert workspace.session.mode is None

    async def test_open_unknown_task(self, make_workspace):
        workspace = make_workspace()

        assert workspace.open_task("missing") is None
        assert workspace.session.state == SessionState.NO_TASK

    async def test_delete_active_task_clears_session(self, make_workspace):
        workspace = make_workspace()
        task = await workspace.add_task("Math")

        assert await workspace.delete_task(task.task_id) is True

        assert workspace.session.state == SessionState.NO_TASK
        assert workspace.active_task is None
        assert len(workspace.board) == 0

    async def test_delete_other_task_keeps_session(self, make_workspace):
        workspace = make_workspace()
        other = await workspace.add_task("Math")
        active = await workspace.add_task("Physics")

        await workspace.delete_task(other.task_id)

        assert workspace.session.task_id == active.task_id

    async def test_toggle_does_not_touch_session(self, make_workspace, scripted):
        workspace = make_workspace(scripted("4"))
        task = await workspace.add_task("Math")
        await workspace.submit_turn("2+2?", mode=AssistanceMode.SOLVE)

        toggled = await workspace.toggle_task(task.task_id)

        assert toggled.status == TaskStatus.COMPLETED
        assert len(workspace.session.messages) == 2

    async def test_changes_mirrored_to_store(self, make_workspace, memory_stores):
        workspace = make_workspace()
        task = await workspace.add_task("Math")
        await workspace.set_task_status(task.task_id, TaskStatus.COMPLETED)

        board = await memory_stores.load_board()

        assert board.get_task(task.task_id).status == TaskStatus.COMPLETED


class TestPreferences:
    async def test_theme_persisted(self, make_workspace, memory_stores):
        workspace = make_workspace()

        await workspace.set_theme(Theme.DARK)

        assert workspace.theme == Theme.DARK
        assert await memory_stores.load_theme() == Theme.DARK
