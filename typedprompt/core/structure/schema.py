# typedprompt/core/structure/schema.py
"""
Schema 形态识别模块

把调用方提供的 Schema（任意 pydantic 可校验的类型）一次性归类为封闭枚举：

- TEXT:     纯文本（str），原样透传，不做提取与解析
- OBJECT:   单个结构化对象（BaseModel / dict / TypedDict / dataclass）
- SEQUENCE: 结构化元素序列（list[X] / tuple[X, ...] / RootModel[list[X]] ...）
- SCALAR:   其他可校验类型（int / bool / Literal / Union ...），解析但不提取代码块

整个管线只在这里做一次类型分支判断，之后统一查询 SchemaInfo 的能力字段。
"""
from __future__ import annotations

import collections.abc
import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Tuple, get_args, get_origin

from pydantic import BaseModel, RootModel, TypeAdapter
from typing_extensions import is_typeddict


class Shape(str, Enum):
    """Schema 形态"""
    TEXT = "text"
    OBJECT = "object"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


# 被视为“序列”的容器 origin
_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
)

# 被视为“对象”的映射 origin
_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


@dataclass(frozen=True)
class ParsePolicy:
    """形态对应的处理策略"""
    apply_extraction: bool
    apply_parsing: bool


_POLICIES: Dict[Shape, ParsePolicy] = {
    Shape.TEXT: ParsePolicy(apply_extraction=False, apply_parsing=False),
    Shape.OBJECT: ParsePolicy(apply_extraction=True, apply_parsing=True),
    Shape.SEQUENCE: ParsePolicy(apply_extraction=True, apply_parsing=True),
    Shape.SCALAR: ParsePolicy(apply_extraction=False, apply_parsing=True),
}


def policy_for(shape: Shape) -> ParsePolicy:
    """形态 -> (是否提取代码块, 是否结构化解析)"""
    return _POLICIES[shape]


@dataclass(frozen=True)
class SchemaInfo:
    """
    Schema 的一次性描述结果

    属性:
        schema:          调用方原始 Schema
        shape:           形态枚举
        adapter:         整体校验用的 TypeAdapter
        element_schema:  SEQUENCE 形态下的元素类型，其他形态为 None
        element_adapter: 元素级校验用的 TypeAdapter
    """
    schema: Any
    shape: Shape
    adapter: TypeAdapter = field(repr=False, compare=False)
    element_schema: Any = None
    element_adapter: Optional[TypeAdapter] = field(default=None, repr=False, compare=False)

    @property
    def policy(self) -> ParsePolicy:
        return policy_for(self.shape)

    @property
    def is_sequence(self) -> bool:
        return self.shape is Shape.SEQUENCE

    @property
    def name(self) -> str:
        return getattr(self.schema, "__name__", None) or repr(self.schema)


# ============================================================================
# 形态判定
# ============================================================================

def _unwrap_annotated(tp: Any) -> Any:
    """剥离 Annotated[...] 外壳，返回被约束的基础类型"""
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def _sequence_element(tp: Any) -> Tuple[bool, Any]:
    """
    判断类型是否为序列，返回 (是否序列, 元素类型)。

    不带参数的 list / tuple 元素类型视为 Any；
    定长 tuple[int, str] 不是同构序列，不参与逐元素流式输出。
    """
    tp = _unwrap_annotated(tp)

    if tp in (list, tuple, set, frozenset):
        return True, Any

    origin = get_origin(tp)
    if origin not in _SEQUENCE_ORIGINS:
        return False, None

    args = get_args(tp)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return True, args[0]
        return False, None
    return True, (args[0] if args else Any)


def _is_object(tp: Any) -> bool:
    tp = _unwrap_annotated(tp)
    if tp is dict or get_origin(tp) in _MAPPING_ORIGINS:
        return True
    if isinstance(tp, type):
        if issubclass(tp, BaseModel):
            return True
        if dataclasses.is_dataclass(tp):
            return True
    return is_typeddict(tp)


def classify(schema: Any) -> Tuple[Shape, Any]:
    """
    对 Schema 做形态分类，返回 (形态, 元素类型)。

    只有 SEQUENCE 形态的元素类型有意义。
    """
    base = _unwrap_annotated(schema)

    if base is None or base is str:
        return Shape.TEXT, None

    # RootModel[list[X]] 按根类型判定
    if isinstance(base, type) and issubclass(base, RootModel):
        root_type = base.model_fields["root"].annotation
        is_seq, element = _sequence_element(root_type)
        if is_seq:
            return Shape.SEQUENCE, element
        return (Shape.TEXT, None) if _unwrap_annotated(root_type) is str else (Shape.OBJECT, None)

    is_seq, element = _sequence_element(base)
    if is_seq:
        return Shape.SEQUENCE, element

    if _is_object(base):
        return Shape.OBJECT, None

    return Shape.SCALAR, None


def describe(schema: Any = str) -> SchemaInfo:
    """
    描述 Schema：确定形态并预先构建校验器。

    每次 run / stream 只需调用一次，形态在整个运行期间不变。
    """
    if schema is None:
        schema = str

    shape, element = classify(schema)
    element_adapter = TypeAdapter(element) if shape is Shape.SEQUENCE else None

    return SchemaInfo(
        schema=schema,
        shape=shape,
        adapter=TypeAdapter(schema),
        element_schema=element,
        element_adapter=element_adapter,
    )


def to_json_schema(schema: Any) -> Dict[str, Any]:
    """生成 Schema 对应的 JSON Schema，便于拼接到提示词中"""
    return TypeAdapter(schema).json_schema()


__all__: List[str] = [
    "Shape",
    "ParsePolicy",
    "SchemaInfo",
    "policy_for",
    "classify",
    "describe",
    "to_json_schema",
]
