"""TaskStore SQLite 实现

TaskBoard 的持久化镜像：每次看板变更后写入，启动时整体读回。
"""

from datetime import datetime

import aiosqlite

from ..models.task import Task


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def save_task(self, task: Task) -> None:
        """写入或更新任务记录（task_id 冲突时更新，保留原插入顺序）"""
        await self._conn.execute(
            """
            INSERT INTO tasks (task_id, title, description, status, created_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(task_id) DO UPDATE SET
                title = excluded.title,
                description = excluded.description,
                status = excluded.status
            """,
            (
                task.task_id,
                task.title,
                task.description,
                task.status.value,
                task.created_at.isoformat(),
            ),
        )
        await self._conn.commit()

    async def delete_task(self, task_id: str) -> None:
        await self._conn.execute("DELETE FROM tasks WHERE task_id = ?", (task_id,))
        await self._conn.commit()

    async def list_tasks(self) -> list[Task]:
        """读取全部任务，按 created_at 倒序

        Raises:
            aiosqlite.Error: 数据库不可读
            ValueError: 行数据损坏（含 pydantic ValidationError）
        """
        cursor = await self._conn.execute(
            "SELECT task_id, title, description, status, created_at FROM tasks "
            "ORDER BY created_at DESC, rowid DESC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    @staticmethod
    def _row_to_task(row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            title=row[1],
            description=row[2],
            status=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )
