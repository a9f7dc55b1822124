# typedprompt/core/structure/stream.py
"""
流式管线

状态机：IDLE -> ACCUMULATING -> DRAINING -> DONE，一次调用一个实例，不可复用。

- TEXT 形态：片段原样透传，零缓冲
- SEQUENCE 形态：每个片段到达后基于“完整缓冲区”重新提取+解析，
  只输出游标之后、且不是当前最后一个的元素（最后一个元素可能仍在增长）；
  流结束时再输出剩余的全部元素
- OBJECT / SCALAR 形态：累积期间不输出，流结束时整体校验一次，通过则输出一次

元素校验失败时游标照常前进，该元素被永久跳过，不影响兄弟元素。
"""
from __future__ import annotations

from enum import Enum
from typing import Any, AsyncIterable, AsyncIterator, List, Optional, Union

from typedprompt.core.exceptions import StreamClosedError
from typedprompt.core.logging import get_logger
from typedprompt.core.structure.pipeline import as_schema_info, build_candidate
from typedprompt.core.structure.schema import SchemaInfo, Shape
from typedprompt.core.structure.validator import validate_element, validate_with

logger = get_logger(__name__)


class StreamState(str, Enum):
    """流式管线状态"""
    IDLE = "idle"
    ACCUMULATING = "accumulating"
    DRAINING = "draining"
    DONE = "done"


class StreamingPipeline:
    """
    单次流式调用的增量解析器

    使用方式：
        pipeline = StreamingPipeline(list[int])
        for fragment in fragments:
            for item in pipeline.feed(fragment):
                ...
        for item in pipeline.close():
            ...

    或者直接驱动异步片段源：
        async for item in pipeline.run(fragments):
            ...
    """

    def __init__(self, schema: Union[SchemaInfo, Any] = str):
        self.info: SchemaInfo = as_schema_info(schema)
        self._parts: List[str] = []
        self._cursor: int = 0
        self._emitted: List[int] = []
        self._state: StreamState = StreamState.IDLE

    # ---- 只读属性 ----

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def buffer(self) -> str:
        """累积缓冲区：已到达片段按顺序拼接"""
        return "".join(self._parts)

    @property
    def cursor(self) -> int:
        """已处理（输出或跳过）的元素个数"""
        return self._cursor

    @property
    def emitted_indices(self) -> List[int]:
        """已输出元素在序列中的下标（严格递增）"""
        return list(self._emitted)

    # ---- 状态迁移 ----

    def feed(self, fragment: Optional[str]) -> List[Any]:
        """
        喂入一个片段，返回本轮新产生的输出。

        空片段在任何状态下都是空操作。
        """
        if self._state in (StreamState.DRAINING, StreamState.DONE):
            raise StreamClosedError(
                "Cannot feed a closed streaming pipeline",
                context={"state": self._state.value},
            )
        if not fragment:
            return []

        if self._state is StreamState.IDLE:
            self._state = StreamState.ACCUMULATING
        self._parts.append(fragment)

        shape = self.info.shape
        if shape is Shape.TEXT:
            return [fragment]
        if shape is Shape.SEQUENCE:
            return self._emit_ready(final=False)
        return []

    def close(self) -> List[Any]:
        """
        上游结束：基于完整缓冲区做最后一次提取+解析，输出剩余内容。

        重复调用返回空列表。
        """
        if self._state is StreamState.DONE:
            return []

        had_content = self._state is StreamState.ACCUMULATING
        self._state = StreamState.DRAINING

        items: List[Any] = []
        shape = self.info.shape
        if had_content and shape is Shape.SEQUENCE:
            items = self._emit_ready(final=True)
        elif had_content and shape in (Shape.OBJECT, Shape.SCALAR):
            items = self._emit_whole()

        self._state = StreamState.DONE
        logger.debug(
            "Stream drained",
            schema=self.info.name,
            shape=shape.value,
            buffer_length=sum(len(p) for p in self._parts),
            emitted=len(self._emitted),
            skipped=self._cursor - len(self._emitted),
        )
        return items

    async def run(self, fragments: AsyncIterable[Optional[str]]) -> AsyncIterator[Any]:
        """
        驱动异步片段源直至耗尽，逐个产出结果。

        调用方提前停止迭代即视为取消，无需额外清理。
        """
        async for fragment in fragments:
            for item in self.feed(fragment):
                yield item
        for item in self.close():
            yield item

    # ---- 内部实现 ----

    def _emit_ready(self, final: bool) -> List[Any]:
        candidate = build_candidate(self.buffer, self.info)
        if not isinstance(candidate, list):
            return []

        # 流未结束时最后一个元素可能还在接收片段，不输出
        end = len(candidate) if final else len(candidate) - 1

        items: List[Any] = []
        while self._cursor < end:
            index = self._cursor
            ok, value = validate_element(self.info, candidate[index], index)
            self._cursor += 1
            if ok:
                items.append(value)
                self._emitted.append(index)

        if items:
            logger.debug(
                "Sequence elements emitted",
                schema=self.info.name,
                cursor=self._cursor,
                count=len(items),
                final=final,
            )
        return items

    def _emit_whole(self) -> List[Any]:
        candidate = build_candidate(self.buffer, self.info)
        ok, value = validate_with(self.info.adapter, candidate)
        if not ok:
            logger.debug(
                "Streamed value rejected by schema",
                schema=self.info.name,
                errors=value.error_count(),
            )
            return []
        return [value]


async def stream_structured(
    fragments: AsyncIterable[Optional[str]],
    schema: Union[SchemaInfo, Any] = str,
) -> AsyncIterator[Any]:
    """便捷函数：为一个异步片段源创建新的管线实例并驱动之"""
    pipeline = StreamingPipeline(schema)
    async for item in pipeline.run(fragments):
        yield item
