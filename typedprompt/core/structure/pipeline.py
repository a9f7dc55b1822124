# typedprompt/core/structure/pipeline.py
"""
批处理管线

针对一次完整的模型响应：
    形态策略 -> 代码块提取 -> 容错解析 -> 整体校验

只返回完整通过校验的结果，不会返回部分结果；
上游没有文本内容时直接返回 None，不做任何提取与解析。
"""
from __future__ import annotations

from typing import Any, Optional, Union

from typedprompt.core.logging import get_logger
from typedprompt.core.structure.extractor import extract_code_block
from typedprompt.core.structure.parser import parse_any
from typedprompt.core.structure.schema import SchemaInfo, describe
from typedprompt.core.structure.validator import validate

logger = get_logger(__name__)


def as_schema_info(schema: Union[SchemaInfo, Any]) -> SchemaInfo:
    """已经描述过的 SchemaInfo 原样返回，否则现场描述"""
    if isinstance(schema, SchemaInfo):
        return schema
    return describe(schema)


def build_candidate(text: str, info: SchemaInfo) -> Any:
    """
    按形态策略把文本转换为候选值。

    TEXT 形态下原样返回（保留全部空白）；
    其余形态按需提取代码块并做容错解析。
    """
    policy = info.policy
    window = extract_code_block(text) if policy.apply_extraction else text
    if not policy.apply_parsing:
        return window
    return parse_any(window)


def run_batch(content: Optional[str], schema: Union[SchemaInfo, Any] = str) -> Optional[Any]:
    """
    处理一次完整响应，返回校验后的值；任一环节不满足时返回 None。

    Args:
        content: 模型响应的文本内容；None 表示上游没有提供文本
        schema:  调用方 Schema 或预先描述好的 SchemaInfo
    """
    if content is None:
        logger.debug("Response carries no text content")
        return None

    info = as_schema_info(schema)
    candidate = build_candidate(content, info)
    logger.debug(
        "Batch candidate built",
        schema=info.name,
        shape=info.shape.value,
        candidate_type=type(candidate).__name__,
    )
    return validate(info, candidate)
