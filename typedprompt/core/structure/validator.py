# typedprompt/core/structure/validator.py
"""
校验适配器

把候选值交给 pydantic 校验，并把结果统一归一为“有值 / None”。
不做重试，也不做 pydantic 自身之外的类型转换。
"""
from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from typedprompt.core.logging import get_logger
from typedprompt.core.structure.schema import SchemaInfo

logger = get_logger(__name__)


def validate_with(adapter: TypeAdapter, candidate: Any) -> Tuple[bool, Any]:
    """
    使用给定校验器校验候选值，返回 (是否成功, 值或错误)。

    成功时第二项为校验后的类型化值（可能恰好是 None），
    失败时第二项为 pydantic 的 ValidationError。
    """
    try:
        return True, adapter.validate_python(candidate)
    except ValidationError as e:
        return False, e


def validate(info: SchemaInfo, candidate: Any) -> Optional[Any]:
    """整体校验：序列形态下校验整个集合（长度等集合级约束在这里生效）"""
    ok, value = validate_with(info.adapter, candidate)
    if ok:
        return value
    logger.debug(
        "Candidate rejected by schema",
        schema=info.name,
        shape=info.shape.value,
        errors=value.error_count(),
    )
    return None


def validate_element(info: SchemaInfo, candidate: Any, index: int) -> Tuple[bool, Any]:
    """
    元素级校验：仅用于 SEQUENCE 形态的流式输出。

    元素的合法值本身可能是 None（例如 list[Optional[int]]），
    因此返回 (是否成功, 值) 而不是 Optional。
    """
    if info.element_adapter is None:
        raise TypeError(f"Schema {info.name} is not a sequence schema")

    ok, value = validate_with(info.element_adapter, candidate)
    if ok:
        return True, value
    logger.debug(
        "Sequence element rejected by schema",
        schema=info.name,
        index=index,
        errors=value.error_count(),
    )
    return False, None
