"""健康检查路由

GET /health: 进程存活 + 存储是否持久化 + 生成服务模式。
"""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """始终返回 200；persistence=memory 表示存储已降级为内存"""
    stores = getattr(request.app.state, "stores", None)
    provider_config = getattr(request.app.state, "provider_config", None)
    return {
        "status": "ok",
        "persistence": "sqlite" if stores is not None and stores.persistent else "memory",
        "llm_mode": provider_config.llm_mode if provider_config is not None else "unknown",
        "credential_configured": (
            provider_config.has_credential if provider_config is not None else False
        ),
    }
