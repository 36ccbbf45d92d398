"""TaskBoard -- 内存中的有序任务列表

列表是权威数据源，持久化层只做 best-effort 镜像。
新任务插入表头（最新在前）；task_id 在列表内唯一。
"""

from collections.abc import Iterable

import structlog
from ulid import ULID

from .models.enums import TaskStatus, next_toggle_status
from .models.task import Task

log = structlog.get_logger()


class TaskBoard:
    """有序任务集合"""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = []
        for task in tasks:
            if self.get_task(task.task_id) is not None:
                log.warning("duplicate_task_id_skipped", task_id=task.task_id)
                continue
            self._tasks.append(task)

    def __len__(self) -> int:
        return len(self._tasks)

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        """查询任务列表（最新在前），支持按状态筛选"""
        if status is None:
            return list(self._tasks)
        return [t for t in self._tasks if t.status == status]

    def get_task(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.task_id == task_id:
                return task
        return None

    def add_task(self, title: str, description: str | None = None) -> Task:
        """创建任务并插入表头

        Raises:
            ValueError: 标题为空
        """
        title = title.strip()
        if not title:
            raise ValueError("任务标题不能为空")
        task = Task(
            task_id=str(ULID()),
            title=title,
            description=description or None,
        )
        self._tasks.insert(0, task)
        return task

    def set_status(self, task_id: str, status: TaskStatus) -> Task | None:
        """显式设置状态，任务不存在时返回 None"""
        for index, task in enumerate(self._tasks):
            if task.task_id == task_id:
                updated = task.model_copy(update={"status": status})
                self._tasks[index] = updated
                return updated
        return None

    def toggle_status(self, task_id: str) -> Task | None:
        """勾选切换：COMPLETED <-> PENDING"""
        task = self.get_task(task_id)
        if task is None:
            return None
        return self.set_status(task_id, next_toggle_status(task.status))

    def delete_task(self, task_id: str) -> bool:
        """删除任务，返回是否存在"""
        for index, task in enumerate(self._tasks):
            if task.task_id == task_id:
                del self._tasks[index]
                return True
        return False
