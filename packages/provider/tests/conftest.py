"""Provider 包测试 fixtures"""

import pytest
from helperkust.core.models import (
    GenerationConfig,
    GenerationRequest,
    InlineDataPart,
    MessageRole,
    ProtocolTurn,
    TextPart,
)


@pytest.fixture
def single_turn_request() -> GenerationRequest:
    """单轮纯文本请求"""
    return GenerationRequest(
        model="gemini/gemini-3-flash-preview",
        contents=[ProtocolTurn(role=MessageRole.USER, parts=[TextPart(text="2+2?")])],
        config=GenerationConfig(system_instruction="solve it", temperature=0.3),
    )


@pytest.fixture
def multimodal_request() -> GenerationRequest:
    """多轮 + 图片请求"""
    return GenerationRequest(
        model="gemini/gemini-3-flash-preview",
        contents=[
            ProtocolTurn(
                role=MessageRole.USER,
                parts=[
                    InlineDataPart(mime_type="image/png", data="AAAA"),
                    TextPart(text="what is this?"),
                ],
            ),
            ProtocolTurn(role=MessageRole.MODEL, parts=[TextPart(text="A triangle.")]),
            ProtocolTurn(
                role=MessageRole.USER,
                parts=[InlineDataPart(mime_type="image/jpeg", data="BBBB")],
            ),
        ],
        config=GenerationConfig(system_instruction="guide me", temperature=0.7),
    )
