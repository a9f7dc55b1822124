# typedprompt/core/exceptions.py
"""
异常体系

只有两类错误会从 run / stream 传播给调用方：
- 构造期的配置错误（ConfigurationError）
- 上游模型调用失败（ModelError 及 plugins.models.exceptions 中的子类）

无法解析、校验失败、响应无文本都不是异常，结果降级为 None 或不输出。
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from typedprompt.core.error_codes import (
    ErrorCategory,
    ErrorCode,
    ErrorInfo,
    get_error_info,
    get_message,
    is_retryable,
)


class TypedPromptError(Exception):
    """
    所有框架异常的基类

    子类通过 default_code 声明错误码，也可在抛出时用 code= 覆盖；
    context 保存便于排查的键值对，会原样写入日志。
    """

    default_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        code: Optional[ErrorCode] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code: ErrorCode = code or self.default_code
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        return f"{self.args[0]} (code={self.code.value})"

    @property
    def category(self) -> ErrorCategory:
        return get_error_info(self.code).category

    @property
    def retryable(self) -> bool:
        return is_retryable(self.code)


class ConfigurationError(TypedPromptError):
    """缺少模型或连接参数、模板不可调用、驱动未注册"""
    default_code = ErrorCode.INVALID_CONFIG


class ModelError(TypedPromptError):
    default_code = ErrorCode.MODEL_UNAVAILABLE


class StreamClosedError(TypedPromptError):
    """向已经 close() 的流式管线继续喂入片段"""
    default_code = ErrorCode.STREAM_CLOSED


__all__ = [
    "TypedPromptError",
    "ConfigurationError",
    "ModelError",
    "StreamClosedError",
    "ErrorCode",
    "ErrorCategory",
    "ErrorInfo",
    "get_error_info",
    "is_retryable",
    "get_message",
]
