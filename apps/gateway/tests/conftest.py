"""apps/gateway 测试配置 -- Workspace / 测试 app / httpx AsyncClient fixture"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from helperkust.core.board import TaskBoard
from helperkust.core.models import GenerationRequest, Language
from helperkust.core.store import IN_MEMORY_DB, StoreGroup, create_store_group
from helperkust.gateway.middleware.logging_mw import LoggingMiddleware
from helperkust.gateway.routes import health, preferences, session, tasks
from helperkust.gateway.services.workspace import Workspace
from helperkust.provider import EchoGenerationAdapter, ModelCallResult, ProviderConfig
from httpx import ASGITransport, AsyncClient


class ScriptedGenerator:
    """可编排的生成服务替身

    replies 中的元素依次使用：str 作为回复文本，Exception 实例直接抛出。
    gate 被设置时，generate() 会等待 gate 放行后再返回。
    """

    def __init__(self, *replies: str | Exception) -> None:
        self.replies = list(replies)
        self.requests: list[GenerationRequest] = []
        self.gate: asyncio.Event | None = None
        self.started = asyncio.Event()

    async def generate(self, request: GenerationRequest) -> ModelCallResult:
        self.requests.append(request)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            raise reply
        return ModelCallResult(content=reply, model_name="scripted", duration_ms=0)


@pytest.fixture
def scripted():
    """ScriptedGenerator 构造器"""
    return ScriptedGenerator


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(api_key="test-key")


@pytest_asyncio.fixture
async def memory_stores() -> AsyncGenerator[StoreGroup, None]:
    """纯内存 StoreGroup"""
    stores = await create_store_group(IN_MEMORY_DB)
    yield stores
    await stores.close()


@pytest.fixture
def make_workspace(memory_stores, provider_config):
    """按需构造 Workspace（可注入生成服务与语言）"""

    def _make(generator=None, language: Language = Language.RU) -> Workspace:
        return Workspace(
            board=TaskBoard(),
            stores=memory_stores,
            generator=generator or ScriptedGenerator(),
            provider_config=provider_config,
            language=language,
        )

    return _make


@pytest.fixture
def test_app(memory_stores, provider_config) -> FastAPI:
    """挂载全部路由的测试 app（Echo 生成服务 + 内存存储）"""
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
    app.include_router(tasks.router)
    app.include_router(session.router)
    app.include_router(preferences.router)
    app.include_router(health.router)

    app.state.stores = memory_stores
    app.state.provider_config = provider_config
    app.state.workspace = Workspace(
        board=TaskBoard(),
        stores=memory_stores,
        generator=EchoGenerationAdapter(),
        provider_config=provider_config,
        language=Language.EN,
    )
    return app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
