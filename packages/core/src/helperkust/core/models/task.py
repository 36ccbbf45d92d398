"""Task Domain Model

任务只保存身份与状态；会话（消息记录、模式）不属于 Task，
切换任务时即被丢弃。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from .enums import TaskStatus


class Task(BaseModel):
    """Task 数据模型

    task_id 在创建时生成（ULID），之后不可变。
    """

    task_id: str = Field(description="唯一标识，ULID 格式")
    title: str = Field(min_length=1, description="任务标题")
    description: str | None = Field(default=None, description="任务描述")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="创建时间",
    )
