# typedprompt/core/structure/parser.py
"""
容错结构化解析模块

按固定优先级尝试把一段（可能被截断的）文本解码为结构化数据：
1. partial_json：允许不完整输入，在截断处自动闭合未结束的数组/对象/字符串
2. yaml：对缩进与空白宽容，但只接受完整的文档
3. 以上均失败时原样返回文本

本阶段永远不会抛出异常，失败被推迟到 Schema 校验阶段处理。
另提供插件机制，允许调用方在内置策略之后、原文兜底之前追加自定义解码策略。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

import yaml
from partial_json_parser import Allow
from partial_json_parser import loads as partial_loads

from typedprompt.core.logging import get_logger

logger = get_logger(__name__)


# ============================================================================
# Strategy 插件接口定义
# ============================================================================

@dataclass
class ParseStrategy:
    """文本解码策略插件定义"""
    name: str
    func: Callable[[str], Any]


def _partial_json_strategy(text: str) -> Any:
    stripped = text.strip()
    if not stripped:
        raise ValueError("Empty text for partial JSON strategy")
    return partial_loads(stripped, Allow.ALL)


def _yaml_strategy(text: str) -> Any:
    return yaml.safe_load(text)


# 内置策略顺序固定：容错 JSON 必须排在 YAML 之前
_BUILTIN_STRATEGIES: Tuple[ParseStrategy, ...] = (
    ParseStrategy(name="partial_json", func=_partial_json_strategy),
    ParseStrategy(name="yaml", func=_yaml_strategy),
)

# 全局插件策略列表
_EXTRA_STRATEGIES: List[ParseStrategy] = []


def register_parse_strategy(strategy: ParseStrategy) -> None:
    """注册新的解码策略（在内置策略之后执行）"""
    _EXTRA_STRATEGIES.append(strategy)


def unregister_parse_strategy(name: str) -> None:
    """按名称移除已注册的插件策略"""
    _EXTRA_STRATEGIES[:] = [s for s in _EXTRA_STRATEGIES if s.name != name]


def iter_strategies() -> List[ParseStrategy]:
    return [*_BUILTIN_STRATEGIES, *_EXTRA_STRATEGIES]


# ============================================================================
# 主入口函数
# ============================================================================

def parse_with_attempts(text: str) -> Tuple[Any, List[Dict[str, str]]]:
    """
    解码文本并返回 (候选值, 失败记录)。

    失败记录形如 {"strategy": "...", "error": "..."}，供严格模式报错使用。
    """
    attempts: List[Dict[str, str]] = []

    for strategy in iter_strategies():
        try:
            return strategy.func(text), attempts
        except Exception as e:
            attempts.append({"strategy": strategy.name, "error": str(e)})

    logger.debug(
        "No structured form recovered, falling back to raw text",
        length=len(text),
        attempts=len(attempts),
    )
    return text, attempts


def parse_any(text: str) -> Any:
    """
    容错解析：返回第一个成功的解码结果，全部失败时返回原文。
    """
    value, _ = parse_with_attempts(text)
    return value
