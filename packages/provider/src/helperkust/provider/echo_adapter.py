"""EchoGenerationAdapter -- 离线 Echo 模式

与 GenerationClient 相同的 generate(request) -> ModelCallResult 接口，
用于本地开发与无 API key 的演示（HELPERKUST_LLM_MODE=echo）。
"""

import asyncio
import time

from helperkust.core.models import (
    GenerationRequest,
    InlineDataPart,
    MessageRole,
    TextPart,
)

from .models import ModelCallResult, TokenUsage


class EchoGenerationAdapter:
    """回声生成适配器"""

    async def generate(self, request: GenerationRequest) -> ModelCallResult:
        """回声最后一轮 user 的文本，并注明其中的图片数量

        Args:
            request: 生成请求

        Returns:
            ModelCallResult，provider="echo"
        """
        start_time = time.monotonic()

        user_text, image_count = self._extract_last_user_turn(request)

        # 模拟少量延迟
        await asyncio.sleep(0.01)

        response_text = f"Echo: {user_text}"
        if image_count:
            response_text += f" [images: {image_count}]"

        prompt_tokens = len(user_text.split())
        completion_tokens = len(response_text.split())
        duration_ms = int((time.monotonic() - start_time) * 1000)

        return ModelCallResult(
            content=response_text,
            model_name="echo",
            provider="echo",
            duration_ms=duration_ms,
            token_usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )

    @staticmethod
    def _extract_last_user_turn(request: GenerationRequest) -> tuple[str, int]:
        """提取最后一轮 user 的文本与图片数；无 user 轮时返回 "(empty)" """
        for turn in reversed(request.contents):
            if turn.role != MessageRole.USER:
                continue
            texts = [p.text for p in turn.parts if isinstance(p, TextPart)]
            images = sum(1 for p in turn.parts if isinstance(p, InlineDataPart))
            return " ".join(texts) or "(image)", images
        return "(empty)", 0
