"""Helper-Kust Core Store -- SQLite best-effort 持久化

任务列表与主题偏好各自独立序列化。存储不可用（文件无法打开、数据库损坏、
读写失败）时回落到内存默认值，只记录 warning，绝不阻塞启动或界面操作。
"""

from pathlib import Path

import aiosqlite
import structlog

from ..board import TaskBoard
from ..config import DEFAULT_THEME
from ..models.enums import Theme
from ..models.task import Task
from .preference_store import THEME_KEY, SqlitePreferenceStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore

log = structlog.get_logger()

# 视为"持久化不可用"的异常类型
_PERSISTENCE_ERRORS = (aiosqlite.Error, OSError, ValueError)

IN_MEMORY_DB = ":memory:"


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接

    所有公开方法均不抛出持久化异常。
    """

    def __init__(self, conn: aiosqlite.Connection, persistent: bool = True) -> None:
        self.conn = conn
        self.persistent = persistent
        self.task_store = SqliteTaskStore(conn)
        self.preference_store = SqlitePreferenceStore(conn)

    async def load_board(self) -> TaskBoard:
        """读取任务列表；不可读或损坏时返回空看板"""
        try:
            tasks = await self.task_store.list_tasks()
        except _PERSISTENCE_ERRORS as e:
            log.warning(
                "persistence_unavailable",
                operation="load_tasks",
                error_type=type(e).__name__,
                error=str(e),
            )
            return TaskBoard()
        return TaskBoard(tasks)

    async def load_theme(self) -> Theme:
        """读取主题偏好；缺失、非法或不可读时返回默认主题"""
        try:
            value = await self.preference_store.get(THEME_KEY)
        except _PERSISTENCE_ERRORS as e:
            log.warning(
                "persistence_unavailable",
                operation="load_theme",
                error_type=type(e).__name__,
            )
            return Theme(DEFAULT_THEME)
        try:
            return Theme(value) if value is not None else Theme(DEFAULT_THEME)
        except ValueError:
            log.warning("invalid_theme_preference", value=value)
            return Theme(DEFAULT_THEME)

    async def save_task(self, task: Task) -> bool:
        """镜像写入任务，返回是否成功"""
        return await self._best_effort(
            "save_task", self.task_store.save_task(task), task_id=task.task_id
        )

    async def delete_task(self, task_id: str) -> bool:
        return await self._best_effort(
            "delete_task", self.task_store.delete_task(task_id), task_id=task_id
        )

    async def save_theme(self, theme: Theme) -> bool:
        return await self._best_effort(
            "save_theme", self.preference_store.set(THEME_KEY, theme.value)
        )

    async def close(self) -> None:
        try:
            await self.conn.close()
        except _PERSISTENCE_ERRORS as e:
            log.warning("store_close_failed", error_type=type(e).__name__)

    @staticmethod
    async def _best_effort(operation: str, awaitable, **context) -> bool:
        try:
            await awaitable
        except _PERSISTENCE_ERRORS as e:
            log.warning(
                "persistence_write_failed",
                operation=operation,
                error_type=type(e).__name__,
                error=str(e),
                **context,
            )
            return False
        return True


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    数据库文件无法打开或初始化（如文件损坏）时，降级为内存数据库。

    Args:
        db_path: SQLite 数据库文件路径（":memory:" 表示纯内存）

    Returns:
        StoreGroup 实例
    """
    if db_path != IN_MEMORY_DB:
        conn = None
        try:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = await aiosqlite.connect(db_path)
            await init_db(conn)
            return StoreGroup(conn, persistent=True)
        except _PERSISTENCE_ERRORS as e:
            log.warning(
                "persistence_unavailable",
                operation="open_db",
                db_path=db_path,
                error_type=type(e).__name__,
                error=str(e),
                fallback="memory",
            )
            if conn is not None:
                await StoreGroup(conn).close()

    conn = await aiosqlite.connect(IN_MEMORY_DB)
    await init_db(conn)
    return StoreGroup(conn, persistent=False)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteTaskStore",
    "SqlitePreferenceStore",
    "init_db",
]
