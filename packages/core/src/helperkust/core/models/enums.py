"""枚举定义 -- 任务状态、辅导模式、消息角色、语言、主题

包含 TaskStatus 的切换规则 next_toggle_status()。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态"""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class AssistanceMode(StrEnum):
    """辅导模式 -- 会话发送第一条消息后锁定"""

    # 引导式（苏格拉底式）辅导，不直接给出答案
    HELP = "HELP"
    # 直接给出答案与推导步骤
    SOLVE = "SOLVE"


class MessageRole(StrEnum):
    """消息角色，取值与生成接口的 role 字段一致"""

    USER = "user"
    MODEL = "model"


class Language(StrEnum):
    """回复语言"""

    EN = "en"
    RU = "ru"
    ES = "es"


class Theme(StrEnum):
    """界面主题偏好"""

    LIGHT = "light"
    DARK = "dark"


class SessionState(StrEnum):
    """会话状态机状态"""

    NO_TASK = "NO_TASK"
    MODE_UNSELECTED = "MODE_UNSELECTED"
    MODE_LOCKED = "MODE_LOCKED"


def next_toggle_status(status: TaskStatus) -> TaskStatus:
    """勾选切换：COMPLETED -> PENDING，其余状态 -> COMPLETED

    Args:
        status: 当前状态

    Returns:
        切换后的状态
    """
    if status == TaskStatus.COMPLETED:
        return TaskStatus.PENDING
    return TaskStatus.COMPLETED
