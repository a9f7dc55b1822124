# typedprompt/plugins/models/adapter.py
"""
LiteLLM 响应适配

litellm 返回的对象在不同 provider 下可能是 dict、pydantic 对象或 SimpleNamespace，
这里逐字段读取并构造协议模型，不调用 model_dump()（会触发 pydantic 序列化警告）。
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from typedprompt.core.protocols import (
    CompletionChoice,
    CompletionResponse,
    CompletionUsage,
    StreamChunk,
)


def safe_access(obj: Any, key: str, default: Any = None) -> Any:
    """按 key 读取字典项或属性，缺失或为 None 时返回 default"""
    if obj is None:
        return default

    if isinstance(obj, dict):
        value = obj.get(key)
    else:
        try:
            value = obj[key]
        except (TypeError, KeyError, IndexError, AttributeError):
            # 某些动态代理对象上 hasattr 会误判，直接 getattr
            value = getattr(obj, key, None)

    return default if value is None else value


def _text(value: Any) -> Optional[str]:
    # 非字符串内容（content parts、工具调用）对管线而言等同于没有文本
    return value if isinstance(value, str) else None


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class LiteLLMAdapter:
    """把 litellm 的原始返回值转换为 CompletionResponse / StreamChunk"""

    @staticmethod
    def _choice(raw: Any) -> CompletionChoice:
        message = safe_access(raw, "message", {})
        return CompletionChoice(
            index=safe_access(raw, "index", 0),
            finish_reason=safe_access(raw, "finish_reason"),
            message={
                "role": safe_access(message, "role", "assistant"),
                "content": _text(safe_access(message, "content")),
            },
        )

    @staticmethod
    def _usage(raw: Any) -> Optional[CompletionUsage]:
        if not raw:
            return None
        return CompletionUsage(
            prompt_tokens=safe_access(raw, "prompt_tokens", 0),
            completion_tokens=safe_access(raw, "completion_tokens", 0),
            total_tokens=safe_access(raw, "total_tokens", 0),
        )

    @staticmethod
    def _delta_choice(raw: Any) -> Dict[str, Any]:
        delta = safe_access(raw, "delta", {})
        return {
            "index": safe_access(raw, "index", 0),
            "delta": {
                "role": safe_access(delta, "role"),
                "content": _text(safe_access(delta, "content")),
            },
            "finish_reason": safe_access(raw, "finish_reason"),
        }

    @classmethod
    def to_response(cls, resp: Any) -> CompletionResponse:
        return CompletionResponse(
            id=safe_access(resp, "id", ""),
            object=safe_access(resp, "object", "chat.completion"),
            created=safe_access(resp, "created", 0),
            model=safe_access(resp, "model", ""),
            choices=[cls._choice(c) for c in _as_list(safe_access(resp, "choices", []))],
            usage=cls._usage(safe_access(resp, "usage")),
        )

    @classmethod
    def to_chunk(cls, chunk: Any) -> Optional[StreamChunk]:
        """心跳包（既无 id 也无 choices）返回 None"""
        raw_choices = _as_list(safe_access(chunk, "choices", []))
        if not raw_choices and not safe_access(chunk, "id"):
            return None

        return StreamChunk(
            id=safe_access(chunk, "id", ""),
            created=safe_access(chunk, "created", 0),
            model=safe_access(chunk, "model", ""),
            choices=[cls._delta_choice(c) for c in raw_choices],
        )
