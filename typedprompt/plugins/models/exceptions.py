# typedprompt/plugins/models/exceptions.py
"""
模型服务商异常

驱动把各家 SDK 的异常统一映射到这里，错误码由类上的 default_code 决定。
全部继承 ModelError，调用方捕获 ModelError 即可覆盖所有上游失败。
"""
from __future__ import annotations

from typing import Any

from typedprompt.core.error_codes import ErrorCode
from typedprompt.core.exceptions import ModelError


class ProviderError(ModelError):
    """无法归类的上游错误"""

    def __init__(self, message: str, provider: str = "unknown", **kwargs: Any):
        super().__init__(message, **kwargs)
        self.provider = provider
        self.context["provider"] = provider


class AuthenticationError(ProviderError):
    default_code = ErrorCode.MODEL_AUTH_FAILED


class RateLimitError(ProviderError):
    default_code = ErrorCode.MODEL_RATE_LIMITED


class ContextWindowExceededError(ProviderError):
    default_code = ErrorCode.MODEL_CONTEXT_EXCEEDED


class ServiceUnavailableError(ProviderError):
    """5xx、连接失败与超时"""
