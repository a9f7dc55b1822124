# typedprompt/core/structure/__init__.py
"""
结构化输出子模块入口

对外暴露稳定的公共接口，隐藏内部实现细节：
- StructureEngine: 批处理 / 流式解析的统一入口
- StreamingPipeline / StreamState: 流式增量解析状态机
- describe / Shape / SchemaInfo: Schema 形态识别
- extract_code_block / parse_any: 代码块提取与容错解析
- parse_structured_output / StructureParseError: 严格模式
- ParseStrategy / register_parse_strategy: 解码策略插件扩展接口
"""

from typedprompt.core.structure.engine import StructureEngine
from typedprompt.core.structure.errors import StructureParseError
from typedprompt.core.structure.extractor import extract_code_block
from typedprompt.core.structure.parser import (
    ParseStrategy,
    parse_any,
    register_parse_strategy,
    unregister_parse_strategy,
)
from typedprompt.core.structure.pipeline import build_candidate, run_batch
from typedprompt.core.structure.schema import Shape, SchemaInfo, describe, policy_for
from typedprompt.core.structure.stream import StreamingPipeline, StreamState, stream_structured
from typedprompt.core.structure.sync import parse_structured_output, run_sync
from typedprompt.core.structure.validator import validate, validate_element

__all__ = [
    "StructureEngine",
    "StructureParseError",
    "StreamingPipeline",
    "StreamState",
    "stream_structured",
    "Shape",
    "SchemaInfo",
    "describe",
    "policy_for",
    "extract_code_block",
    "parse_any",
    "build_candidate",
    "run_batch",
    "validate",
    "validate_element",
    "parse_structured_output",
    "run_sync",
    "ParseStrategy",
    "register_parse_strategy",
    "unregister_parse_strategy",
]
