# typedprompt/core/structure/sync.py
"""
同步封装与严格模式工具

- parse_structured_output: 严格模式解析，失败时抛出 StructureParseError 并附带失败轨迹
- run_sync: 在纯同步脚本中执行协程（已有事件循环时拒绝执行，避免嵌套）
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Dict, List, TypeVar

from typedprompt.core.structure.errors import StructureParseError
from typedprompt.core.structure.extractor import extract_code_block
from typedprompt.core.structure.parser import parse_with_attempts
from typedprompt.core.structure.schema import describe
from typedprompt.core.structure.validator import validate_with

T = TypeVar("T")


def run_sync(awaitable: Awaitable[T]) -> T:
    """
    同步执行一个协程。

    如果当前存在正在运行的事件循环（例如在 FastAPI / Jupyter 中），
    抛出 RuntimeError，提示调用方改用异步接口。
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(awaitable)  # type: ignore[arg-type]

    # 协程对象未被调度，显式关闭以免出现 "never awaited" 警告
    close = getattr(awaitable, "close", None)
    if callable(close):
        close()
    raise RuntimeError(
        "run_sync() 不能在已有事件循环中调用，请直接 await 对应的异步接口。"
    )


def parse_structured_output(content: str, schema: Any) -> Any:
    """
    严格模式：把一段完整文本解析并校验为 schema。

    与批处理管线使用同一套提取/解析规则，区别在于失败时抛出
    StructureParseError（携带每一步的错误信息），而不是返回 None。
    """
    info = describe(schema)
    attempts: List[Dict[str, str]] = []

    policy = info.policy
    window = extract_code_block(content) if policy.apply_extraction else content
    if policy.apply_parsing:
        candidate, parse_attempts = parse_with_attempts(window)
        attempts.extend(parse_attempts)
    else:
        candidate = window

    ok, value = validate_with(info.adapter, candidate)
    if ok:
        return value

    attempts.append({"strategy": "validation", "error": str(value)})
    error_details = "\n".join(
        f"  - {a['strategy']}: {a['error'][:100]}" for a in attempts
    )
    raise StructureParseError(
        f"无法解析为 {info.name}。失败步骤 {len(attempts)} 个:\n{error_details}",
        attempts=attempts,
        raw_content=content,
    )
