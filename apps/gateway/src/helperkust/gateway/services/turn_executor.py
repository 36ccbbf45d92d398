"""TurnExecutor -- 一次请求/响应周期

流程：
1. session.submit_turn(): 前置条件校验 + 乐观追加 user 消息 + pending=True
2. build_history(): 本轮之前的记录 + 本轮消息 -> 协议历史
3. 生成服务调用（唯一的挂起点），系统指令与温度由模式 + 语言决定
4. 成功: 追加 model 回复；失败: 追加本地化错误提示（不回滚 user 消息）
5. 调用期间会话被切换/重置时丢弃响应
6. 会话首轮落定后上报 IN_PROGRESS（在生成调用之后，不增加调用前的挂起点）
7. 调用被取消时结束 pending，会话仍可继续提交

任何失败都不会以异常形式抛到路由层。
"""

import asyncio
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Protocol

import structlog
from helperkust.core.history import build_history
from helperkust.core.models import (
    AssistanceMode,
    ChatMessage,
    GenerationConfig,
    GenerationRequest,
    Language,
    TaskStatus,
)
from helperkust.core.session import ChatSession, PendingTurn
from helperkust.provider import (
    GatewayTransportError,
    MissingCredentialError,
    ModelCallResult,
    PolicyRejectedError,
    ProviderConfig,
    ProviderError,
    sampling_temperature,
    system_instruction,
)
from pydantic import BaseModel, Field

from .localization import ErrorKind, error_message

log = structlog.get_logger()

StatusCallback = Callable[[str, TaskStatus], Awaitable[None]]


class Generator(Protocol):
    """生成服务接口（GenerationClient / EchoGenerationAdapter / Mock）"""

    async def generate(self, request: GenerationRequest) -> ModelCallResult: ...


class TurnStatus(StrEnum):
    """一轮的结果"""

    REJECTED = "REJECTED"  # 前置条件不满足，无状态变化
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"  # 已追加本地化错误提示
    DISCARDED = "DISCARDED"  # 响应到达时会话已切换/重置


class TurnOutcome(BaseModel):
    """一轮的结果；失败时 reply 也是可展示的 model 消息"""

    status: TurnStatus
    user_message: ChatMessage | None = Field(default=None)
    reply: ChatMessage | None = Field(default=None)
    error_kind: ErrorKind | None = Field(default=None)


class TurnExecutor:
    """编排一次用户提交到 model 回复的完整周期"""

    def __init__(
        self,
        generator: Generator,
        provider_config: ProviderConfig,
        on_status_change: StatusCallback | None = None,
    ) -> None:
        """
        Args:
            generator: 生成服务适配器
            provider_config: 模型标识与温度配置
            on_status_change: 任务状态变更信号（会话层不直接修改任务存储）
        """
        self._generator = generator
        self._config = provider_config
        self._on_status_change = on_status_change

    async def execute(
        self,
        session: ChatSession,
        text: str,
        image: str | None = None,
        mode: AssistanceMode | None = None,
        *,
        language: Language = Language.RU,
    ) -> TurnOutcome:
        """执行一轮

        Args:
            session: 当前会话
            text: 用户文本
            image: 图片 data URL
            mode: 会话尚未锁定模式时使用的模式
            language: 回复与错误提示语言

        Returns:
            TurnOutcome
        """
        turn = session.submit_turn(text, image=image, mode=mode)
        if turn is None:
            return TurnOutcome(status=TurnStatus.REJECTED)

        request = self._build_request(turn, language)
        try:
            reply_text, error_kind = await self._generate(turn, request, language)
        except asyncio.CancelledError:
            session.abandon_turn(turn)
            raise

        reply = session.complete_turn(turn, reply_text)
        if reply is None:
            return TurnOutcome(status=TurnStatus.DISCARDED, user_message=turn.message)

        # 会话首轮已落定，任务进入 IN_PROGRESS
        if not turn.prior_log:
            await self._signal_status(turn.task_id, TaskStatus.IN_PROGRESS)

        return TurnOutcome(
            status=TurnStatus.FAILED if error_kind else TurnStatus.COMPLETED,
            user_message=turn.message,
            reply=reply,
            error_kind=error_kind,
        )

    def _build_request(self, turn: PendingTurn, language: Language) -> GenerationRequest:
        return GenerationRequest(
            model=self._config.model,
            contents=build_history(turn.prior_log, turn.message),
            config=GenerationConfig(
                system_instruction=system_instruction(turn.mode, language),
                temperature=sampling_temperature(turn.mode, self._config),
            ),
        )

    async def _generate(
        self,
        turn: PendingTurn,
        request: GenerationRequest,
        language: Language,
    ) -> tuple[str, ErrorKind | None]:
        """调用生成服务，失败时返回本地化提示与错误类别"""
        try:
            result = await self._generator.generate(request)
        except MissingCredentialError:
            error_kind = ErrorKind.MISSING_CREDENTIAL
        except PolicyRejectedError:
            error_kind = ErrorKind.POLICY_REJECTED
        except GatewayTransportError:
            error_kind = ErrorKind.TRANSPORT
        except ProviderError:
            error_kind = ErrorKind.UNKNOWN
        except Exception as e:
            log.error(
                "generation_unexpected_error",
                session_id=turn.session_id,
                task_id=turn.task_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            error_kind = ErrorKind.UNKNOWN
        else:
            if result.content.strip():
                log.info(
                    "turn_completed",
                    session_id=turn.session_id,
                    task_id=turn.task_id,
                    mode=turn.mode,
                    turn_count=len(request.contents),
                    duration_ms=result.duration_ms,
                )
                return result.content, None
            error_kind = ErrorKind.EMPTY_RESPONSE

        log.warning(
            "turn_failed",
            session_id=turn.session_id,
            task_id=turn.task_id,
            mode=turn.mode,
            error_kind=error_kind,
        )
        return error_message(error_kind, language), error_kind

    async def _signal_status(self, task_id: str, status: TaskStatus) -> None:
        if self._on_status_change is None:
            return
        try:
            await self._on_status_change(task_id, status)
        except Exception as e:
            log.warning(
                "status_signal_failed",
                task_id=task_id,
                status=status,
                error_type=type(e).__name__,
            )
