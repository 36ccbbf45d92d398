"""附件编解码测试

覆盖：encode/decode 往返、媒体类型参数、空字节、
以及朴素"按逗号切分"会误解析的各种畸形字符串。
"""

import pytest
from helperkust.core.attachment import (
    MalformedAttachmentError,
    decode_attachment,
    encode_attachment,
    parse_attachment,
)


class TestRoundTrip:
    """encode -> decode 恢复原始媒体类型与字节"""

    def test_png_round_trip(self):
        raw = bytes(range(256))
        value = encode_attachment(raw, "image/png")

        assert value.startswith("data:image/png;base64,")
        assert decode_attachment(value) == ("image/png", raw)

    def test_media_type_with_parameters(self):
        """带参数的媒体类型原样保留"""
        value = encode_attachment(b"\x00\x01", "image/svg+xml;charset=utf-8")

        media_type, raw = decode_attachment(value)
        assert media_type == "image/svg+xml;charset=utf-8"
        assert raw == b"\x00\x01"

    def test_empty_bytes(self):
        value = encode_attachment(b"", "image/jpeg")

        assert value == "data:image/jpeg;base64,"
        assert decode_attachment(value) == ("image/jpeg", b"")

    def test_parse_returns_attachment_view(self, png_data_url):
        attachment = parse_attachment(png_data_url)

        assert attachment.media_type == "image/png"
        assert attachment.to_data_url() == png_data_url


class TestMalformed:
    """结构不合法的字符串一律报错，不静默截断"""

    @pytest.mark.parametrize(
        "value",
        [
            # 多余的逗号：按第一个逗号切分会得到 "AAA"
            "data:image/png;base64,AAA,BBB",
            # 缺少 ;base64 标记
            "data:image/png,AAAA",
            # 非 data URL
            "https://example.com/cat.png",
            # 缺少子类型
            "data:image;base64,AAAA",
            # 非法 base64 字符
            "data:image/png;base64,AA!A",
            # padding 不正确
            "data:image/png;base64,AAA",
            "data:image/png;base64,A===",
            "",
        ],
    )
    def test_rejected(self, value):
        with pytest.raises(MalformedAttachmentError):
            parse_attachment(value)

    def test_malformed_is_value_error(self):
        """调用方可以按 ValueError 统一处理"""
        with pytest.raises(ValueError):
            decode_attachment("data:image/png;base64,AAA,BBB")

    def test_invalid_media_type_on_encode(self):
        with pytest.raises(MalformedAttachmentError):
            encode_attachment(b"x", "not a media type")

    def test_overlong_input_rejected(self):
        """超长媒体类型不会被接受"""
        value = f"data:image/{'x' * 500};base64,AAAA"
        with pytest.raises(MalformedAttachmentError):
            parse_attachment(value)
