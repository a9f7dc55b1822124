"""
协议模块入口
"""
from typedprompt.core.protocols.base import get_missing_methods
from typedprompt.core.protocols.model import (
    ModelProtocol, StreamableModelProtocol,
    CompletionResponse, CompletionChoice, CompletionUsage, StreamChunk,
    supports_streaming, validate_model,
)

__all__ = [
    "ModelProtocol", "StreamableModelProtocol",
    "CompletionResponse", "CompletionChoice", "CompletionUsage", "StreamChunk",
    "get_missing_methods", "validate_model", "supports_streaming",
]
