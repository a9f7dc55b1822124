# typedprompt/core/protocols/model.py
"""
模型协议与响应结构

管线对模型只有两点要求：
- acompletion(messages, **kw) -> CompletionResponse
- astream(messages, **kw) -> AsyncIterator[StreamChunk]（仅 stream 需要）

任何满足鸭子类型的对象都可以接入，不必继承 BaseChatModel。
"""
from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from typedprompt.core.protocols.base import get_missing_methods


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


class CompletionChoice(BaseModel):
    index: int = 0
    message: Dict[str, Any]
    finish_reason: Optional[str] = None


class CompletionUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class CompletionResponse(BaseModel):
    """一次完整补全（OpenAI chat.completion 结构的子集）"""
    id: str = ""
    object: str = "chat.completion"
    created: int = 0
    model: str = ""
    choices: List[CompletionChoice] = Field(default_factory=list)
    usage: Optional[CompletionUsage] = None

    @property
    def content(self) -> Optional[str]:
        """
        第一个 choice 的文本。

        无 choice 或内容不是字符串（如纯工具调用）时为 None。
        None 表示“没有文本”，空字符串仍然是文本。
        """
        if not self.choices:
            return None
        return _text_or_none(self.choices[0].message.get("content"))


class StreamChunk(BaseModel):
    """流式补全中的一个增量块"""
    id: str = ""
    object: str = "chat.completion.chunk"
    created: int = 0
    model: str = ""
    choices: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def delta(self) -> Dict[str, Any]:
        if not self.choices:
            return {}
        return self.choices[0].get("delta") or {}

    @property
    def content(self) -> Optional[str]:
        return _text_or_none(self.delta.get("content"))


@runtime_checkable
class ModelProtocol(Protocol):
    async def acompletion(self, messages: List[Dict[str, Any]], **kwargs: Any) -> CompletionResponse:
        ...


@runtime_checkable
class StreamableModelProtocol(ModelProtocol, Protocol):
    def astream(self, messages: List[Dict[str, Any]], **kwargs: Any) -> AsyncIterator[StreamChunk]:
        ...


def supports_streaming(model: Any) -> bool:
    return callable(getattr(model, "astream", None))


def validate_model(model: Any) -> None:
    """检查对象是否提供 ModelProtocol 要求的方法，缺失时抛出 TypeError"""
    missing = get_missing_methods(model, ModelProtocol)
    if missing:
        raise TypeError(
            f"{type(model).__name__} cannot be used as a model, "
            f"missing methods: {', '.join(missing)}"
        )
