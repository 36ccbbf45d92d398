"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest_asyncio


@pytest_asyncio.fixture
async def core_db_path(tmp_path: Path) -> Path:
    """核心层临时数据库路径（父目录尚不存在）"""
    return tmp_path / "sqlite" / "core_test.db"


@pytest_asyncio.fixture
async def core_db(tmp_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """核心层已初始化数据库连接"""
    from helperkust.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_path / "core_conn.db"))
    await init_db(conn)
    yield conn
    await conn.close()
