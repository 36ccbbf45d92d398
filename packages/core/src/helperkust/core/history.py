"""History Reconstructor -- 消息记录 -> 生成接口的有序多 part 历史

纯函数：build_history(prior_log, pending) -> list[ProtocolTurn]

规则：
1. 逐条按原顺序映射，每条消息一个 ProtocolTurn，最后追加待发送消息
2. parts 顺序：图片 inline part 在前（媒体类型由 codec 从字符串中恢复），
   非空文本 part 在后
3. parts 为空的消息整轮跳过
4. 不重排、不合并、不去重；历史中的每张图片都会在后续每次调用中重放
"""

from collections.abc import Sequence

import structlog

from .attachment import MalformedAttachmentError, parse_attachment
from .models.message import ChatMessage
from .models.protocol import InlineDataPart, ProtocolPart, ProtocolTurn, TextPart

log = structlog.get_logger()


def message_parts(message: ChatMessage) -> list[ProtocolPart]:
    """构建单条消息的 parts

    图片解析失败或负载为空时降级为纯文本，不中断本轮。
    """
    parts: list[ProtocolPart] = []

    if message.image:
        try:
            attachment = parse_attachment(message.image)
        except MalformedAttachmentError as e:
            log.warning(
                "attachment_malformed_degraded_to_text",
                message_id=message.message_id,
                error=str(e),
            )
        else:
            if attachment.payload:
                parts.append(
                    InlineDataPart(mime_type=attachment.media_type, data=attachment.payload)
                )
            else:
                log.warning("attachment_empty_skipped", message_id=message.message_id)

    if message.text.strip():
        parts.append(TextPart(text=message.text))

    return parts


def build_history(
    prior_log: Sequence[ChatMessage],
    pending: ChatMessage,
) -> list[ProtocolTurn]:
    """将已有消息记录 + 待发送消息转换为协议历史

    Args:
        prior_log: 本条消息之前的会话记录（按插入顺序）
        pending: 本轮新的 user 消息

    Returns:
        有序的 ProtocolTurn 列表（空 parts 的消息被跳过）
    """
    turns: list[ProtocolTurn] = []
    for message in [*prior_log, pending]:
        parts = message_parts(message)
        if not parts:
            log.debug("empty_turn_skipped", message_id=message.message_id)
            continue
        turns.append(ProtocolTurn(role=message.role, parts=parts))
    return turns
