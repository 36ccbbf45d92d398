"""集成测试共享 fixture -- 真实 create_app() + lifespan（Echo 模式 + 临时 SQLite）"""

from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient


@pytest.fixture
def integration_env(monkeypatch, tmp_db_path: Path) -> Path:
    """指向临时数据库的环境变量"""
    monkeypatch.setenv("HELPERKUST_DB_PATH", str(tmp_db_path))
    monkeypatch.setenv("HELPERKUST_LLM_MODE", "echo")
    monkeypatch.setenv("HELPERKUST_LANGUAGE", "en")
    monkeypatch.delenv("HELPERKUST_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    return tmp_db_path


@pytest.fixture
def run_app(integration_env) -> Callable[[], AbstractAsyncContextManager[AsyncClient]]:
    """启动一次应用（执行 lifespan），退出时模拟进程关闭"""
    from helperkust.gateway.main import create_app

    @asynccontextmanager
    async def _run() -> AsyncGenerator[AsyncClient, None]:
        app: FastAPI = create_app()
        async with app.router.lifespan_context(app):
            async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as ac:
                yield ac

    return _run
