"""Helper-Kust Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    AssistanceMode,
    Language,
    MessageRole,
    SessionState,
    TaskStatus,
    Theme,
    next_toggle_status,
)
from .message import Attachment, ChatMessage
from .protocol import (
    GenerationConfig,
    GenerationRequest,
    InlineDataPart,
    ProtocolPart,
    ProtocolTurn,
    TextPart,
)
from .task import Task

__all__ = [
    # 枚举
    "TaskStatus",
    "AssistanceMode",
    "MessageRole",
    "Language",
    "Theme",
    "SessionState",
    "next_toggle_status",
    # Task
    "Task",
    # Message
    "ChatMessage",
    "Attachment",
    # 协议
    "TextPart",
    "InlineDataPart",
    "ProtocolPart",
    "ProtocolTurn",
    "GenerationConfig",
    "GenerationRequest",
]
