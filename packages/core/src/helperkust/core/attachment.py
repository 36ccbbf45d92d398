"""Attachment Codec -- 图片 <-> 自描述字符串

格式: data:<type>/<subtype>[;name=value]*;base64,<payload>

解析使用整串锚定、长度受限的正则，不做"按第一个逗号切分"：
多余的逗号、缺少 ;base64 标记、非法 base64 字符或 padding 都视为格式错误，
而不是被静默截断。调用方应把 MalformedAttachmentError 当作"没有附件"处理。
"""

import base64
import binascii
import re

from .models.message import Attachment

_TOKEN = r"[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]{0,126}"
_PARAM = r";[A-Za-z0-9!#$&^_.+-]{1,127}=[^;,\s]{1,127}"
_MEDIA_TYPE = rf"{_TOKEN}/{_TOKEN}(?:{_PARAM}){{0,8}}"

_MEDIA_TYPE_RE = re.compile(_MEDIA_TYPE)
_DATA_URL_RE = re.compile(
    rf"data:(?P<media_type>{_MEDIA_TYPE});base64,(?P<payload>[A-Za-z0-9+/]*={{0,2}})"
)


class MalformedAttachmentError(ValueError):
    """附件字符串无法解析（或媒体类型非法）"""


def encode_attachment(raw: bytes, media_type: str) -> str:
    """将原始字节编码为自描述字符串

    Args:
        raw: 图片字节
        media_type: MIME 类型，如 image/png

    Returns:
        data URL 字符串

    Raises:
        MalformedAttachmentError: media_type 语法不合法
    """
    if not _MEDIA_TYPE_RE.fullmatch(media_type):
        raise MalformedAttachmentError(f"非法媒体类型: {media_type!r}")
    payload = base64.b64encode(raw).decode("ascii")
    return f"data:{media_type};base64,{payload}"


def parse_attachment(value: str) -> Attachment:
    """拆分自描述字符串为 Attachment（媒体类型 + 已校验的 base64 文本）

    Raises:
        MalformedAttachmentError: 结构不合法或 base64 无法解码
    """
    match = _DATA_URL_RE.fullmatch(value)
    if match is None:
        raise MalformedAttachmentError("附件字符串结构不合法")

    payload = match.group("payload")
    try:
        base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise MalformedAttachmentError(f"附件 base64 负载不合法: {e}") from e

    return Attachment(media_type=match.group("media_type"), payload=payload)


def decode_attachment(value: str) -> tuple[str, bytes]:
    """encode_attachment 的逆运算

    Returns:
        (media_type, raw_bytes)

    Raises:
        MalformedAttachmentError: 结构不合法
    """
    attachment = parse_attachment(value)
    return attachment.media_type, base64.b64decode(attachment.payload)
