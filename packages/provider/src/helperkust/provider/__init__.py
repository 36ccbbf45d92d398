"""Helper-Kust Provider -- 生成服务调用抽象层

packages/provider 的公开接口导出。
"""

# 核心组件
from .client import GenerationClient
from .echo_adapter import EchoGenerationAdapter

# 配置
from .config import ProviderConfig, load_provider_config

# 异常
from .exceptions import (
    GatewayTransportError,
    MissingCredentialError,
    PolicyRejectedError,
    ProviderError,
)
from .instructions import sampling_temperature, system_instruction

# 数据模型
from .models import ModelCallResult, TokenUsage

__all__ = [
    "ModelCallResult",
    "TokenUsage",
    "GenerationClient",
    "EchoGenerationAdapter",
    "ProviderConfig",
    "load_provider_config",
    "system_instruction",
    "sampling_temperature",
    "ProviderError",
    "MissingCredentialError",
    "PolicyRejectedError",
    "GatewayTransportError",
]
