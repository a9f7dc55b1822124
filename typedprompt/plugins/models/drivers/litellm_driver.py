# typedprompt/plugins/models/drivers/litellm_driver.py
"""
LiteLLM 驱动

- 通过 litellm 访问任意 OpenAI 兼容的服务
- 统一异常映射 (ProviderError 体系)
- 响应适配 (LiteLLMAdapter) 清洗数据

不做重试与限流，这些由调用方或上游服务负责。
"""
from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List

import litellm

from typedprompt.core.exceptions import TypedPromptError
from typedprompt.core.logging import get_logger
from typedprompt.core.protocols import CompletionResponse, StreamChunk
from typedprompt.plugins.models.adapter import LiteLLMAdapter
from typedprompt.plugins.models.base import BaseChatModel
from typedprompt.plugins.models.registry import register_driver
from typedprompt.plugins.models.exceptions import (
    AuthenticationError,
    RateLimitError,
    ContextWindowExceededError,
    ServiceUnavailableError,
    ProviderError,
)

logger = get_logger(__name__)

_ERROR_MAP = (
    ("AuthenticationError", AuthenticationError, "Authentication failed"),
    ("RateLimitError", RateLimitError, "Rate limit exceeded"),
    ("ContextWindowExceededError", ContextWindowExceededError, "Context window exceeded"),
    ("ServiceUnavailableError", ServiceUnavailableError, "Service unavailable"),
    ("APIConnectionError", ServiceUnavailableError, "Connection failed"),
    ("Timeout", ServiceUnavailableError, "Request timed out"),
)


@register_driver("litellm")
class LiteLLMDriver(BaseChatModel):
    """
    LiteLLM 通用驱动实现
    """

    def _get_params(self, messages: List[Dict[str, Any]], stream: bool, **kwargs: Any) -> Dict[str, Any]:
        """构造 LiteLLM 调用参数"""
        params = {
            "model": self.config.model_name,
            "messages": messages,
            "timeout": self.config.timeout,
            "stream": stream,
            **self.config.extra_kwargs,
            **kwargs,
        }
        if self.config.api_key:
            params["api_key"] = self.config.api_key
        if self.config.base_url:
            params["api_base"] = self.config.base_url
        return params

    async def acompletion(self, messages: List[Dict[str, Any]], **kwargs: Any) -> CompletionResponse:
        """单次生成"""
        call_kwargs = kwargs.copy()
        call_kwargs.pop("stream", None)
        params = self._get_params(messages, stream=False, **call_kwargs)

        try:
            resp = await litellm.acompletion(**params)
        except Exception as e:
            self._handle_error(e)
            raise

        return LiteLLMAdapter.to_response(resp)

    async def astream(self, messages: List[Dict[str, Any]], **kwargs: Any) -> AsyncIterator[StreamChunk]:  # type: ignore[override]
        """流式生成"""
        call_kwargs = kwargs.copy()
        call_kwargs.pop("stream", None)
        params = self._get_params(messages, stream=True, **call_kwargs)

        try:
            response_iterator = await litellm.acompletion(**params)
            async for chunk in response_iterator:  # type: ignore
                mapped = LiteLLMAdapter.to_chunk(chunk)
                if mapped:
                    yield mapped
        except Exception as e:
            self._handle_error(e)
            raise

    def _handle_error(self, e: Exception) -> None:
        """把 litellm / provider SDK 的异常映射为 ProviderError 体系（总是抛出）"""
        if isinstance(e, TypedPromptError):
            raise e

        err_name = type(e).__name__
        logger.warning("LiteLLM call failed", model=self.config.model_name, error_type=err_name, error=str(e))

        # 按异常类型名匹配，避免依赖各版本 litellm 的具体异常类
        for marker, error_cls, label in _ERROR_MAP:
            if marker in err_name:
                raise error_cls(f"{label}: {e}", provider="litellm") from e

        raise ProviderError(f"Provider error ({err_name}): {e}", provider="litellm") from e
