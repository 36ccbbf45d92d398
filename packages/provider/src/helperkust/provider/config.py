"""ProviderConfig -- Provider 配置加载

从环境变量加载配置，不硬编码凭据。
"""

import os
from typing import Literal

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_MODEL = "gemini/gemini-3-flash-preview"


class ProviderConfig(BaseModel):
    """Provider 包配置 -- 从环境变量加载

    环境变量:
        HELPERKUST_LLM_MODEL: litellm 模型标识（默认 gemini/gemini-3-flash-preview）
        HELPERKUST_API_KEY / GEMINI_API_KEY: 生成服务 API key
        HELPERKUST_LLM_MODE: 运行模式（litellm/echo）
        HELPERKUST_LLM_TIMEOUT_S: 调用超时（秒，默认 60）
        HELPERKUST_HELP_TEMPERATURE: HELP 模式采样温度（默认 0.7）
        HELPERKUST_SOLVE_TEMPERATURE: SOLVE 模式采样温度（默认 0.3）
    """

    model: str = Field(default=DEFAULT_MODEL, description="litellm 模型标识")
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="生成服务 API key",
    )
    llm_mode: Literal["litellm", "echo"] = Field(
        default="litellm",
        description="LLM 运行模式：litellm / echo",
    )
    timeout_s: int = Field(default=60, ge=1, description="调用超时（秒）")
    help_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="HELP 模式温度（偏探索）",
    )
    solve_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="SOLVE 模式温度（偏确定）",
    )

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key.get_secret_value().strip())


def _read_number(env_var: str, cast, default):
    """读取数值型环境变量，非法值记录 warning 并使用默认值（不阻塞启动）"""
    raw = os.environ.get(env_var)
    if not raw:
        return None
    try:
        return cast(raw)
    except ValueError:
        log.warning(
            "invalid_provider_config",
            env_var=env_var,
            value=raw,
            fallback=default,
        )
        return None


def load_provider_config() -> ProviderConfig:
    """从环境变量加载 Provider 配置

    Returns:
        ProviderConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("HELPERKUST_LLM_MODEL"):
        kwargs["model"] = val

    if val := os.environ.get("HELPERKUST_API_KEY") or os.environ.get("GEMINI_API_KEY"):
        kwargs["api_key"] = SecretStr(val)

    if val := os.environ.get("HELPERKUST_LLM_MODE"):
        kwargs["llm_mode"] = val

    if (val := _read_number("HELPERKUST_LLM_TIMEOUT_S", int, 60)) is not None:
        kwargs["timeout_s"] = val

    if (val := _read_number("HELPERKUST_HELP_TEMPERATURE", float, 0.7)) is not None:
        kwargs["help_temperature"] = val

    if (val := _read_number("HELPERKUST_SOLVE_TEMPERATURE", float, 0.3)) is not None:
        kwargs["solve_temperature"] = val

    return ProviderConfig(**kwargs)
