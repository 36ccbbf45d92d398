"""生成接口协议模型 -- ProtocolTurn / GenerationRequest

parts 元素为封闭的 tagged union（TextPart | InlineDataPart），
按 type 字段区分，避免结构不合法的 payload 发送到生成服务。
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from .enums import MessageRole


class TextPart(BaseModel):
    """文本 part"""

    type: Literal["text"] = "text"
    text: str = Field(description="文本内容")

    def to_wire(self) -> dict[str, Any]:
        return {"text": self.text}


class InlineDataPart(BaseModel):
    """内联二进制 part（图片）"""

    type: Literal["inline_data"] = "inline_data"
    mime_type: str = Field(description="MIME 类型")
    data: str = Field(description="base64 文本")

    def to_wire(self) -> dict[str, Any]:
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


ProtocolPart = Annotated[TextPart | InlineDataPart, Field(discriminator="type")]


class ProtocolTurn(BaseModel):
    """一轮带角色的多 part 消息"""

    role: MessageRole = Field(description="user / model")
    parts: list[ProtocolPart] = Field(default_factory=list, description="有序 parts")

    def to_wire(self) -> dict[str, Any]:
        return {
            "role": self.role.value,
            "parts": [part.to_wire() for part in self.parts],
        }


class GenerationConfig(BaseModel):
    """生成参数"""

    system_instruction: str = Field(description="系统指令（由模式 + 语言决定）")
    temperature: float = Field(ge=0.0, le=2.0, description="采样温度")


class GenerationRequest(BaseModel):
    """对生成服务的一次请求"""

    model: str = Field(description="模型标识")
    contents: list[ProtocolTurn] = Field(description="完整的有序对话历史")
    config: GenerationConfig

    def to_wire(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "contents": [turn.to_wire() for turn in self.contents],
            "config": {
                "systemInstruction": self.config.system_instruction,
                "temperature": self.config.temperature,
            },
        }
