"""GenerationClient -- 多模态生成服务调用封装

通过 litellm.acompletion() 调用生成服务（默认 Gemini）。
GenerationRequest 中的 ProtocolTurn 转换为 litellm chat messages：
- 系统指令作为首条 system 消息
- role "model" -> "assistant"
- TextPart -> {"type": "text"}，InlineDataPart -> {"type": "image_url"}（data URL）

不做重试与降级：失败时抛出分类后的 ProviderError，由调用方转为会话内提示。
"""

import time
from typing import Any

import httpx
import structlog
from helperkust.core.models import (
    GenerationRequest,
    InlineDataPart,
    MessageRole,
    ProtocolTurn,
)
from litellm import acompletion

from .exceptions import (
    GatewayTransportError,
    MissingCredentialError,
    PolicyRejectedError,
    ProviderError,
)
from .models import ModelCallResult, TokenUsage

log = structlog.get_logger()

# 连接类异常类型集合（触发 GatewayTransportError）
_CONNECTION_ERROR_TYPES = (
    ConnectionError,
    OSError,
    TimeoutError,
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.TimeoutException,
)

# litellm 异常类名（不同版本的导出路径不同，按名称判断）
_CONNECTION_ERROR_NAMES = {
    "APIConnectionError",
    "APITimeoutError",
    "Timeout",
    "ServiceUnavailableError",
}
_AUTH_ERROR_NAMES = {"AuthenticationError"}
_POLICY_ERROR_NAMES = {"PermissionDeniedError"}

# 地区限制时服务返回的错误文本片段
_POLICY_MARKERS = ("location is not supported", "user location", "unsupported_country")


def _is_connection_error(e: Exception) -> bool:
    """判断异常是否为连接类错误"""
    if isinstance(e, _CONNECTION_ERROR_TYPES):
        return True
    return type(e).__name__ in _CONNECTION_ERROR_NAMES


def _is_policy_rejection(e: Exception) -> bool:
    if type(e).__name__ in _POLICY_ERROR_NAMES:
        return True
    text = str(e).lower()
    return any(marker in text for marker in _POLICY_MARKERS)


def _classify_error(e: Exception, model: str) -> ProviderError:
    """把 litellm/传输层异常映射为 Provider 异常"""
    if _is_policy_rejection(e):
        return PolicyRejectedError(f"生成服务拒绝请求: {e}")
    if type(e).__name__ in _AUTH_ERROR_NAMES:
        return MissingCredentialError(f"API key 无效或被拒绝: {e}")
    if _is_connection_error(e):
        return GatewayTransportError(model=model, original_error=e)
    return ProviderError(f"生成调用失败: {e}", recoverable=True)


def to_litellm_messages(request: GenerationRequest) -> list[dict[str, Any]]:
    """GenerationRequest -> litellm messages（system 指令在最前）"""
    messages: list[dict[str, Any]] = [
        {"role": "system", "content": request.config.system_instruction}
    ]
    messages.extend(_turn_to_message(turn) for turn in request.contents)
    return messages


def _turn_to_message(turn: ProtocolTurn) -> dict[str, Any]:
    content: list[dict[str, Any]] = []
    for part in turn.parts:
        if isinstance(part, InlineDataPart):
            content.append(
                {"type": "image_url", "image_url": {"url": part.to_data_url()}}
            )
        else:
            content.append({"type": "text", "text": part.text})
    role = "assistant" if turn.role == MessageRole.MODEL else "user"
    return {"role": role, "content": content}


def _parse_usage(response) -> TokenUsage:
    """从 litellm 响应解析 token 使用数据，失败时返回全零"""
    usage = getattr(response, "usage", None)
    if usage is None:
        return TokenUsage()
    try:
        return TokenUsage(
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )
    except (TypeError, ValueError) as e:
        log.debug("parse_usage_failed", error=str(e))
        return TokenUsage()


def _extract_provider(response) -> str:
    hidden = getattr(response, "_hidden_params", None)
    if isinstance(hidden, dict):
        return hidden.get("custom_llm_provider", "") or ""
    return ""


class GenerationClient:
    """生成服务客户端

    封装 litellm.acompletion() 调用。
    """

    def __init__(
        self,
        api_key: str = "",
        timeout_s: int = 60,
    ) -> None:
        """初始化客户端

        Args:
            api_key: 生成服务 API key，为空时每次调用直接抛 MissingCredentialError
            timeout_s: 请求超时（秒）
        """
        self._api_key = api_key
        self._timeout_s = timeout_s

    async def generate(self, request: GenerationRequest) -> ModelCallResult:
        """发送一次多模态生成请求

        Args:
            request: 模型 + 完整对话历史 + 系统指令/温度

        Returns:
            ModelCallResult，服务未返回文本时 content 为 ""

        Raises:
            MissingCredentialError: 未配置 API key 或 key 被拒绝
            PolicyRejectedError: 地区/策略拒绝
            GatewayTransportError: 连接失败或超时
            ProviderError: 其他服务端错误
        """
        if not self._api_key.strip():
            log.warning("generation_credential_missing", model=request.model)
            raise MissingCredentialError()

        start_time = time.monotonic()
        messages = to_litellm_messages(request)

        log.debug(
            "generation_call_start",
            model=request.model,
            turn_count=len(request.contents),
            temperature=request.config.temperature,
        )

        try:
            response = await acompletion(
                model=request.model,
                messages=messages,
                api_key=self._api_key,
                temperature=request.config.temperature,
                timeout=self._timeout_s,
            )
        except Exception as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            log.error(
                "generation_call_failed",
                model=request.model,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=duration_ms,
            )
            raise _classify_error(e, request.model) from e

        duration_ms = int((time.monotonic() - start_time) * 1000)

        content = ""
        choices = getattr(response, "choices", None) or []
        if choices:
            content = choices[0].message.content or ""

        result = ModelCallResult(
            content=content,
            model_name=getattr(response, "model", "") or request.model,
            provider=_extract_provider(response),
            duration_ms=duration_ms,
            token_usage=_parse_usage(response),
        )

        log.info(
            "generation_call_completed",
            model=result.model_name,
            provider=result.provider,
            duration_ms=duration_ms,
            total_tokens=result.token_usage.total_tokens,
            empty=not content,
        )
        return result
