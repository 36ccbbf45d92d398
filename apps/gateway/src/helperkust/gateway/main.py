"""FastAPI 应用主文件

app 创建 + lifespan 管理：存储初始化/关闭 + 生成服务初始化 + Workspace 装配 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from helperkust.core.config import get_db_path, get_default_language
from helperkust.core.models import Language
from helperkust.core.store import create_store_group
from helperkust.provider import (
    EchoGenerationAdapter,
    GenerationClient,
    ProviderConfig,
    load_provider_config,
)

from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import health, preferences, session, tasks
from .services.turn_executor import Generator
from .services.workspace import Workspace

log = structlog.get_logger()


def build_generator(provider_config: ProviderConfig) -> Generator:
    """根据 llm_mode 选择生成服务实现"""
    if provider_config.llm_mode == "litellm":
        if not provider_config.has_credential:
            # 不阻塞启动：首轮调用时返回本地化的缺少凭据提示
            log.warning("generation_credential_missing", model=provider_config.model)
        log.info(
            "generator_initialized",
            mode="litellm",
            model=provider_config.model,
            timeout_s=provider_config.timeout_s,
        )
        return GenerationClient(
            api_key=provider_config.api_key.get_secret_value(),
            timeout_s=provider_config.timeout_s,
        )

    log.info("generator_initialized", mode="echo")
    return EchoGenerationAdapter()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时加载看板与偏好，关闭时释放数据库连接"""
    stores = await create_store_group(get_db_path())
    app.state.stores = stores

    board = await stores.load_board()
    theme = await stores.load_theme()

    provider_config = load_provider_config()
    app.state.provider_config = provider_config

    app.state.workspace = Workspace(
        board=board,
        stores=stores,
        generator=build_generator(provider_config),
        provider_config=provider_config,
        language=Language(get_default_language()),
        theme=theme,
    )
    log.info(
        "workspace_ready",
        task_count=len(board),
        persistent=stores.persistent,
        theme=theme,
    )

    yield

    await stores.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Helper-Kust Gateway",
        version="0.1.0",
        description="Helper-Kust 任务看板 + AI 学习助手 API",
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)

    setup_logging()

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(session.router, tags=["session"])
    app.include_router(preferences.router, tags=["preferences"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
