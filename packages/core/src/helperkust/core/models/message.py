"""ChatMessage / Attachment Domain Model

ChatMessage.image 保存自描述的 data URL 字符串（媒体类型 + base64 负载），
Attachment 是其解码后的视图，由 helperkust.core.attachment 负责互转。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from .enums import MessageRole


class Attachment(BaseModel):
    """图片附件（解码视图）

    media_type 与 payload 必须同时存在。
    """

    media_type: str = Field(min_length=3, description="MIME 类型，如 image/png")
    payload: str = Field(description="base64 编码的字节内容")

    def to_data_url(self) -> str:
        """重新编码为自描述字符串"""
        return f"data:{self.media_type};base64,{self.payload}"


class ChatMessage(BaseModel):
    """会话消息 -- 仅追加，不修改、不重排"""

    message_id: str = Field(description="唯一标识，ULID 格式")
    role: MessageRole = Field(description="消息角色")
    text: str = Field(default="", description="文本内容，有图片时可为空")
    image: str | None = Field(default=None, description="图片附件（data URL）")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="时间戳",
    )

    @property
    def has_content(self) -> bool:
        """文本非空或带有图片"""
        return bool(self.text.strip()) or bool(self.image)
