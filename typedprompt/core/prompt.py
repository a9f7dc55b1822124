# typedprompt/core/prompt.py
"""
类型化 Prompt

把“模板函数 + Schema + 模型”组合为一个可反复调用的对象：

    prompt = client.prompt(lambda topic: f"List three facts about {topic}", schema=list[str])
    facts = await prompt.run("otters")          # 批处理：完整结果或 None
    async for fact in prompt.stream("otters"):  # 流式：逐个输出已完成的元素
        ...

模板函数每次调用只执行一次，返回字符串或 OpenAI 风格的 content parts 列表，
作为唯一一条 user 消息发送给模型。
"""
from __future__ import annotations

from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Union

from typedprompt.core.exceptions import ConfigurationError
from typedprompt.core.logging import get_context_logger, trace_context
from typedprompt.core.protocols import ModelProtocol, supports_streaming
from typedprompt.core.structure.pipeline import run_batch
from typedprompt.core.structure.schema import SchemaInfo, describe
from typedprompt.core.structure.stream import StreamingPipeline
from typedprompt.core.structure.sync import run_sync

logger = get_context_logger(__name__)

PromptContent = Union[str, List[Dict[str, Any]]]
Template = Callable[..., PromptContent]


def _chunk_text(chunk: Any) -> Optional[str]:
    """从流式数据块中取出文本增量；不是字符串时视为无内容"""
    if isinstance(chunk, dict):
        choices = chunk.get("choices") or []
        delta = (choices[0].get("delta") or {}) if choices else {}
        content = delta.get("content")
    else:
        content = getattr(chunk, "content", None)
    return content if isinstance(content, str) else None


class Prompt:
    """
    可运行、可流式输出的类型化 Prompt

    属性:
        template:        模板函数
        model:           满足 ModelProtocol 的模型对象
        model_name:      本 Prompt 使用的模型名称
        schema_info:     Schema 的一次性描述结果
        request_kwargs:  每次请求都透传给模型的额外参数（如 temperature）
    """

    def __init__(
        self,
        template: Template,
        *,
        model: ModelProtocol,
        model_name: str,
        schema: Any = str,
        request_kwargs: Optional[Dict[str, Any]] = None,
    ):
        if not callable(template):
            raise ConfigurationError(
                "Prompt template must be callable",
                context={"template_type": type(template).__name__},
            )
        if not model_name:
            raise ConfigurationError("A model name is required to build a prompt")

        self.template = template
        self.model = model
        self.model_name = model_name
        self.schema_info: SchemaInfo = describe(schema)
        self.request_kwargs: Dict[str, Any] = dict(request_kwargs or {})

    @property
    def schema(self) -> Any:
        return self.schema_info.schema

    def build_messages(self, *args: Any, **kwargs: Any) -> List[Dict[str, Any]]:
        """调用模板函数，构造请求消息"""
        content = self.template(*args, **kwargs)
        if not isinstance(content, (str, list)):
            raise TypeError(
                f"Prompt template must return a string or a list of content parts, "
                f"got {type(content).__name__}"
            )
        return [{"role": "user", "content": content}]

    def _call_kwargs(self) -> Dict[str, Any]:
        return {"model": self.model_name, **self.request_kwargs}

    async def run(self, *args: Any, **kwargs: Any) -> Optional[Any]:
        """
        执行一次请求并校验完整结果。

        Returns:
            校验通过的值；响应无文本、无法解析或校验失败时返回 None
        """
        messages = self.build_messages(*args, **kwargs)

        with trace_context(mode="run", model=self.model_name, shape=self.schema_info.shape.value):
            response = await self.model.acompletion(messages, **self._call_kwargs())
            result = run_batch(response.content, self.schema_info)
            logger.debug("Prompt run finished", valid=result is not None)
            return result

    def run_sync(self, *args: Any, **kwargs: Any) -> Optional[Any]:
        """run 的同步版本，不能在已有事件循环中调用"""
        return run_sync(self.run(*args, **kwargs))

    async def stream(self, *args: Any, **kwargs: Any) -> AsyncIterator[Any]:
        """
        流式执行请求。

        - TEXT 形态：逐个输出原始文本增量
        - SEQUENCE 形态：逐个输出新完成且校验通过的元素
        - OBJECT / SCALAR 形态：流结束时输出一次完整校验通过的值

        每次调用都会重新执行模板并打开新的上游流。
        """
        if not supports_streaming(self.model):
            raise ConfigurationError(
                "Model does not support streaming",
                context={"model": self.model_name},
            )

        messages = self.build_messages(*args, **kwargs)
        pipeline = StreamingPipeline(self.schema_info)
        logger.debug("Prompt stream opened", model=self.model_name, shape=self.schema_info.shape.value)

        async def fragments() -> AsyncIterator[Optional[str]]:
            async for chunk in self.model.astream(messages, **self._call_kwargs()):  # type: ignore[attr-defined]
                yield _chunk_text(chunk)

        async for item in pipeline.run(fragments()):
            yield item
