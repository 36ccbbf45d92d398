"""Provider 异常体系

调用方（Turn Executor）按异常类型选择本地化的错误提示：
缺少凭据 / 地区或策略拒绝 / 传输错误 / 其他。
"""


class ProviderError(Exception):
    """Provider 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 用户重新提交后是否可能成功
        """
        super().__init__(message)
        self.recoverable = recoverable


class MissingCredentialError(ProviderError):
    """未配置 API key，或 key 被生成服务拒绝"""

    def __init__(self, message: str = "未配置生成服务 API key") -> None:
        super().__init__(message, recoverable=False)


class PolicyRejectedError(ProviderError):
    """生成服务因地区或使用策略拒绝请求"""

    def __init__(self, message: str) -> None:
        super().__init__(message, recoverable=False)


class GatewayTransportError(ProviderError):
    """生成服务不可达（连接失败、超时、DNS 解析失败等）"""

    def __init__(self, model: str, original_error: Exception) -> None:
        """
        Args:
            model: 请求的模型标识
            original_error: 原始异常
        """
        super().__init__(
            f"生成服务不可达: {model} -- {original_error}",
            recoverable=True,
        )
        self.model = model
        self.original_error = original_error
