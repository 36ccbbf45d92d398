"""Session State Machine -- 当前查看任务的会话状态

状态流转:
    NO_TASK -> MODE_UNSELECTED -> MODE_LOCKED (pending 在调用期间为 True)
    reset():          MODE_LOCKED | MODE_UNSELECTED -> MODE_UNSELECTED（留在当前任务）
    switch_task(id):  任意状态 -> NO_TASK | MODE_UNSELECTED，无条件清空

会话不持久化，也不属于 Task。每次丢弃上下文（切换任务 / 重置）都会生成新的
session_id，Turn Executor 以此判断迟到的响应是否仍属于当前会话。

所有前置条件不满足的操作都是静默 no-op（返回 None / False），不抛异常。
"""

import structlog
from pydantic import BaseModel, Field
from ulid import ULID

from .attachment import MalformedAttachmentError, parse_attachment
from .config import MESSAGE_PREVIEW_LENGTH
from .models.enums import AssistanceMode, MessageRole, SessionState
from .models.message import ChatMessage

log = structlog.get_logger()


class SessionDraft(BaseModel):
    """输入框中尚未发送的内容"""

    text: str = Field(default="", description="草稿文本")
    image: str | None = Field(default=None, description="草稿图片（data URL）")


class PendingTurn(BaseModel):
    """已被接受、等待生成结果的一轮

    prior_log 是追加本条 user 消息之前的会话记录快照。
    """

    session_id: str = Field(description="发起时的会话标识")
    task_id: str = Field(description="发起时的任务 ID")
    mode: AssistanceMode = Field(description="本轮生效的模式")
    prior_log: list[ChatMessage] = Field(default_factory=list)
    message: ChatMessage = Field(description="本轮 user 消息")


class ChatSession:
    """会话状态机

    独占当前任务的消息记录与模式；不直接修改任务存储。
    """

    def __init__(self, task_id: str | None = None) -> None:
        self._session_id = str(ULID())
        self._task_id = task_id
        self._mode: AssistanceMode | None = None
        self._messages: list[ChatMessage] = []
        self._pending = False
        self._draft = SessionDraft()

    # ============================================================
    # 只读视图
    # ============================================================

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def task_id(self) -> str | None:
        return self._task_id

    @property
    def mode(self) -> AssistanceMode | None:
        return self._mode

    @property
    def messages(self) -> list[ChatMessage]:
        """消息记录副本"""
        return list(self._messages)

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def draft(self) -> SessionDraft:
        return self._draft

    @property
    def is_mode_locked(self) -> bool:
        """已发送过消息后模式锁定，直到 reset()"""
        return self._mode is not None and bool(self._messages)

    @property
    def state(self) -> SessionState:
        if self._task_id is None:
            return SessionState.NO_TASK
        if self.is_mode_locked:
            return SessionState.MODE_LOCKED
        return SessionState.MODE_UNSELECTED

    def is_current(self, turn: PendingTurn) -> bool:
        """判断 turn 是否由当前会话发起"""
        return turn.session_id == self._session_id

    # ============================================================
    # 状态流转
    # ============================================================

    def select_mode(self, mode: AssistanceMode) -> bool:
        """选择模式（不发送任何内容）

        仅在模式未设置或消息记录为空时生效，否则为 no-op。

        Returns:
            True 如果模式被设置
        """
        if self._task_id is None or self.is_mode_locked:
            log.debug(
                "select_mode_ignored",
                session_id=self._session_id,
                requested=mode,
                current=self._mode,
            )
            return False
        self._mode = mode
        return True

    def submit_turn(
        self,
        text: str,
        image: str | None = None,
        mode: AssistanceMode | None = None,
    ) -> PendingTurn | None:
        """接受一轮用户输入：乐观追加 user 消息并进入 pending

        Args:
            text: 文本（可为空，但此时必须有图片）
            image: 图片 data URL；解析失败时降级为纯文本
            mode: 会话尚无模式时使用此模式并锁定（首轮便捷参数）

        Returns:
            PendingTurn，前置条件不满足时返回 None（无任何状态变化）
        """
        reason = self._rejection_reason(text, image, mode)
        if reason is not None:
            log.debug("turn_rejected", session_id=self._session_id, reason=reason)
            return None

        image = self._usable_image(image)
        if not text.strip() and image is None:
            log.debug("turn_rejected", session_id=self._session_id, reason="empty")
            return None

        if self._mode is None:
            self._mode = mode

        message = ChatMessage(
            message_id=str(ULID()),
            role=MessageRole.USER,
            text=text,
            image=image,
        )
        turn = PendingTurn(
            session_id=self._session_id,
            task_id=self._task_id,
            mode=self._mode,
            prior_log=list(self._messages),
            message=message,
        )

        self._messages.append(message)
        self._pending = True
        self._draft = SessionDraft()

        log.info(
            "turn_submitted",
            session_id=self._session_id,
            task_id=self._task_id,
            mode=self._mode,
            text_preview=text[:MESSAGE_PREVIEW_LENGTH],
            has_image=image is not None,
        )
        return turn

    def complete_turn(self, turn: PendingTurn, reply_text: str) -> ChatMessage | None:
        """追加 model 回复并结束 pending

        Returns:
            追加的消息；turn 已不属于当前会话时返回 None（丢弃）
        """
        if not self.is_current(turn):
            log.info(
                "stale_reply_discarded",
                turn_session_id=turn.session_id,
                session_id=self._session_id,
                task_id=turn.task_id,
            )
            return None

        reply = ChatMessage(
            message_id=str(ULID()),
            role=MessageRole.MODEL,
            text=reply_text,
        )
        self._messages.append(reply)
        self._pending = False
        return reply

    def abandon_turn(self, turn: PendingTurn) -> None:
        """放弃在途的一轮（调用被取消）：结束 pending，保留已追加的 user 消息

        turn 已不属于当前会话时为 no-op。
        """
        if not self.is_current(turn):
            return
        log.info(
            "turn_abandoned",
            session_id=self._session_id,
            task_id=turn.task_id,
            message_id=turn.message.message_id,
        )
        self._pending = False

    def reset(self) -> None:
        """清空消息与模式，留在当前任务；任何时候均可调用"""
        log.info("session_reset", session_id=self._session_id, task_id=self._task_id)
        self._discard(self._task_id)

    def switch_task(self, task_id: str | None) -> None:
        """切换查看的任务：无条件清空消息、模式、pending 与草稿"""
        log.info(
            "session_task_switched",
            from_task_id=self._task_id,
            to_task_id=task_id,
            discarded_messages=len(self._messages),
            was_pending=self._pending,
        )
        self._discard(task_id)

    def update_draft(self, text: str = "", image: str | None = None) -> None:
        """更新输入框草稿（无任务时忽略）"""
        if self._task_id is None:
            return
        self._draft = SessionDraft(text=text, image=image)

    def clear_draft(self) -> None:
        self._draft = SessionDraft()

    # ============================================================
    # 内部方法
    # ============================================================

    def _rejection_reason(
        self,
        text: str,
        image: str | None,
        mode: AssistanceMode | None,
    ) -> str | None:
        if self._task_id is None:
            return "no_task"
        if self._pending:
            return "pending"
        if self._mode is None and mode is None:
            return "no_mode"
        if not text.strip() and not image:
            return "empty"
        return None

    def _usable_image(self, image: str | None) -> str | None:
        """校验图片字符串，不合法时丢弃（降级为纯文本）"""
        if not image:
            return None
        try:
            attachment = parse_attachment(image)
        except MalformedAttachmentError as e:
            log.warning(
                "attachment_malformed_dropped",
                session_id=self._session_id,
                error=str(e),
            )
            return None
        if not attachment.payload:
            log.warning("attachment_empty_dropped", session_id=self._session_id)
            return None
        return image

    def _discard(self, task_id: str | None) -> None:
        self._session_id = str(ULID())
        self._task_id = task_id
        self._mode = None
        self._messages = []
        self._pending = False
        self._draft = SessionDraft()
