# typedprompt/plugins/models/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, List

from typedprompt.core.protocols import CompletionResponse, StreamChunk
from typedprompt.plugins.models.config import ModelConfig


class BaseChatModel(ABC):
    """
    Chat 模型驱动基类

    所有具体的驱动器 (Driver) 都必须继承此类并实现 `acompletion` 和 `astream`。
    """

    def __init__(self, config: ModelConfig):
        self.config = config

    @property
    def model_name(self) -> str:
        return self.config.model_name

    @abstractmethod
    async def acompletion(self, messages: List[Dict[str, Any]], **kwargs: Any) -> CompletionResponse:
        """单次生成"""
        ...

    @abstractmethod
    def astream(self, messages: List[Dict[str, Any]], **kwargs: Any) -> AsyncIterator[StreamChunk]:
        """流式生成"""
        ...
