# typedprompt/core/structure/engine.py
"""
结构化输出引擎

作为结构化解析的统一入口，组合批处理管线与流式管线，
并提供 Schema 工具方法（形态描述、JSON Schema 生成）。
"""
from __future__ import annotations

from typing import Any, AsyncIterable, AsyncIterator, Dict, Optional

from typedprompt.core.structure import schema as schema_utils
from typedprompt.core.structure.pipeline import run_batch
from typedprompt.core.structure.schema import SchemaInfo
from typedprompt.core.structure.stream import StreamingPipeline


class StructureEngine:
    """
    结构化输出引擎
    """

    # ================= Schema 工具方法 (代理) =================

    @staticmethod
    def describe(schema: Any = str) -> SchemaInfo:
        """描述 Schema 的形态与校验器"""
        return schema_utils.describe(schema)

    @staticmethod
    def to_json_schema(schema: Any) -> Dict[str, Any]:
        """生成 JSON Schema"""
        return schema_utils.to_json_schema(schema)

    # ================= 核心解析流程 =================

    @classmethod
    def parse(cls, content: Optional[str], schema: Any = str) -> Optional[Any]:
        """
        解析一次完整响应。

        Args:
            content: LLM 的原始文本输出；None 表示响应中没有文本
            schema:  目标 Schema（str / BaseModel / list[X] ...）

        Returns:
            校验通过的值；无内容、无法解析或校验失败时返回 None
        """
        return run_batch(content, schema)

    @classmethod
    def stream(
        cls,
        fragments: AsyncIterable[Optional[str]],
        schema: Any = str,
    ) -> AsyncIterator[Any]:
        """
        解析一个异步片段流，返回惰性的异步迭代器。

        每次调用都会创建新的 StreamingPipeline，实例之间不共享状态。
        """
        return StreamingPipeline(schema).run(fragments)
