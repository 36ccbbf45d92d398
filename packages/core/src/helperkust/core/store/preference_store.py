"""PreferenceStore SQLite 实现 -- 主题等界面偏好"""

import aiosqlite

THEME_KEY = "theme"


class SqlitePreferenceStore:
    """key/value 偏好存储"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get(self, key: str) -> str | None:
        cursor = await self._conn.execute(
            "SELECT value FROM preferences WHERE key = ?",
            (key,),
        )
        row = await cursor.fetchone()
        return None if row is None else row[0]

    async def set(self, key: str, value: str) -> None:
        await self._conn.execute(
            """
            INSERT INTO preferences (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
            (key, value),
        )
        await self._conn.commit()
