# typedprompt/core/error_codes.py
"""
错误码

每个 ErrorCode 对应一条元数据（类别、默认提示、是否值得重试），
异常类通过 default_code 绑定错误码，调用方可以按码而不是按类型做分支。
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, NamedTuple


class ErrorCategory(str, Enum):
    GENERAL = "general"
    CONFIG = "config"
    MODEL = "model"
    STRUCTURE = "structure"


class ErrorCode(str, Enum):
    UNKNOWN = "UNKNOWN"
    TIMEOUT = "TIMEOUT"

    # 构造期
    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_INPUT = "INVALID_INPUT"

    # 上游模型
    MODEL_AUTH_FAILED = "MODEL_AUTH_FAILED"
    MODEL_RATE_LIMITED = "MODEL_RATE_LIMITED"
    MODEL_CONTEXT_EXCEEDED = "MODEL_CONTEXT_EXCEEDED"
    MODEL_UNAVAILABLE = "MODEL_UNAVAILABLE"

    # 结构化输出
    STRUCTURE_PARSE_FAILED = "STRUCTURE_PARSE_FAILED"
    STREAM_CLOSED = "STREAM_CLOSED"


class ErrorInfo(NamedTuple):
    category: ErrorCategory
    message: str
    retryable: bool


_C = ErrorCategory

_ERROR_INFO: Dict[ErrorCode, ErrorInfo] = {
    ErrorCode.UNKNOWN: ErrorInfo(_C.GENERAL, "Unexpected failure", False),
    ErrorCode.TIMEOUT: ErrorInfo(_C.GENERAL, "Request timed out", True),
    ErrorCode.INVALID_CONFIG: ErrorInfo(_C.CONFIG, "Client or prompt is misconfigured", False),
    ErrorCode.INVALID_INPUT: ErrorInfo(_C.CONFIG, "Template produced unusable input", False),
    ErrorCode.MODEL_AUTH_FAILED: ErrorInfo(_C.MODEL, "Provider rejected the credentials", False),
    ErrorCode.MODEL_RATE_LIMITED: ErrorInfo(_C.MODEL, "Provider rate limit hit", True),
    ErrorCode.MODEL_CONTEXT_EXCEEDED: ErrorInfo(_C.MODEL, "Prompt exceeds the model context window", False),
    ErrorCode.MODEL_UNAVAILABLE: ErrorInfo(_C.MODEL, "Provider unreachable or failing", True),
    ErrorCode.STRUCTURE_PARSE_FAILED: ErrorInfo(_C.STRUCTURE, "Output does not match the schema", False),
    ErrorCode.STREAM_CLOSED: ErrorInfo(_C.STRUCTURE, "Streaming pipeline already closed", False),
}


def get_error_info(code: ErrorCode) -> ErrorInfo:
    try:
        return _ERROR_INFO[code]
    except KeyError:
        return ErrorInfo(ErrorCategory.GENERAL, str(code), False)


def is_retryable(code: ErrorCode) -> bool:
    """上游临时故障（限流、超时、服务不可用）可由调用方自行重试"""
    return get_error_info(code).retryable


def get_message(code: ErrorCode) -> str:
    return get_error_info(code).message


__all__ = [
    "ErrorCode",
    "ErrorCategory",
    "ErrorInfo",
    "get_error_info",
    "is_retryable",
    "get_message",
]
