# typedprompt/core/logging.py
"""
结构化日志系统

要点：
1. 基于 structlog 输出 key-value 结构化日志（控制台或 JSON）
2. 支持 trace_id / span_id / 额外上下文注入，便于把一次 run/stream 的日志串起来
3. 使用 ContextVar 保存追踪上下文，兼容异步场景（每个流式调用各自独立）
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog

from typedprompt.config import get_settings

# ========= 追踪上下文变量 =========

# 追踪 ID（一次 run / stream 调用级别）
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")

# Span ID（单个步骤级别）
span_id_var: ContextVar[str] = ContextVar("span_id", default="")

# 额外上下文字段
# default 的 {} 只在从未 set 时返回，使用时总是先 copy 再 set
extra_context_var: ContextVar[Dict[str, Any]] = ContextVar(
    "extra_context",
    default={},
)


def generate_trace_id() -> str:
    """生成追踪 ID（16 位十六进制字符串）"""
    return uuid.uuid4().hex[:16]


def generate_span_id() -> str:
    """生成 Span ID（8 位十六进制字符串）"""
    return uuid.uuid4().hex[:8]


# ========= 日志初始化 =========

_initialized = False


def setup_logging(
    level: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    初始化日志系统。

    参数：
        level:
            日志级别字符串，如 "DEBUG" / "INFO"。默认取 settings.log_level。
        force:
            为 True 时强制重新配置。
    """
    global _initialized

    if _initialized and not force:
        return

    settings = get_settings()
    level = level or settings.log_level
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            (
                structlog.processors.JSONRenderer()
                if settings.log_format == "json"
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        # force 重配时需要让已缓存的 logger 失效，因此不缓存
        cache_logger_on_first_use=False,
    )

    # 降低易产生噪声的三方库日志级别
    for lib in ["httpx", "httpcore", "litellm", "LiteLLM", "openai"]:
        logging.getLogger(lib).setLevel(logging.WARNING)

    _initialized = True


def get_logger(name: str) -> Any:
    """
    获取基础 Logger 实例（structlog BoundLogger）。

    使用示例：
        logger = get_logger(__name__)
        logger.debug("window extracted", length=42)

    如需自动注入 trace_id / span_id，使用 get_context_logger。
    """
    if not _initialized:
        setup_logging()
    return structlog.get_logger(name)


# ========= 追踪上下文管理器 =========

@contextmanager
def trace_context(
    trace_id: Optional[str] = None,
    span_id: Optional[str] = None,
    **extra: Any,
):
    """
    追踪上下文管理器。

    示例：
        logger = get_context_logger(__name__)

        with trace_context(prompt="summarize", mode="stream"):
            logger.info("stream opened")
            # 输出中会包含：trace_id, span_id, prompt, mode

    嵌套时复用外层 trace_id，退出时通过 token 恢复外层上下文。
    """
    tid = trace_id or trace_id_var.get() or generate_trace_id()
    sid = span_id or generate_span_id()

    trace_token = trace_id_var.set(tid)
    span_token = span_id_var.set(sid)

    current_extra = extra_context_var.get().copy()
    current_extra.update(extra)
    extra_token = extra_context_var.set(current_extra)

    try:
        yield {"trace_id": tid, "span_id": sid}
    finally:
        trace_id_var.reset(trace_token)
        span_id_var.reset(span_token)
        extra_context_var.reset(extra_token)


# ========= 带上下文注入的 Logger 包装器 =========

class ContextLogger:
    """
    自动附带追踪上下文的 Logger

    每条事件依次合并 trace_id / span_id、trace_context 中的额外字段、
    调用方字段；同名时调用方字段优先。
    """

    _CONTROL_KEYS = frozenset({"exc_info", "stack_info", "stacklevel"})

    def __init__(self, logger: Any):
        self._logger = logger

    def _enrich(self, **kwargs: Any) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for key, var in (("trace_id", trace_id_var), ("span_id", span_id_var)):
            value = var.get()
            if value:
                fields[key] = value
        fields.update(extra_context_var.get())
        fields.update(kwargs)
        return fields

    def _log(self, level: str, event: str, **kwargs: Any) -> None:
        control = {k: kwargs.pop(k) for k in list(kwargs) if k in self._CONTROL_KEYS}
        getattr(self._logger, level)(event, **self._enrich(**kwargs), **control)

    def debug(self, event: str, **kwargs: Any) -> None:
        self._log("debug", event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._log("info", event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._log("warning", event, **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        self._log("error", event, **kwargs)

    def exception(self, event: str, **kwargs: Any) -> None:
        """error 级别，默认附带当前异常堆栈"""
        kwargs.setdefault("exc_info", True)
        self._log("error", event, **kwargs)


def get_context_logger(name: str) -> ContextLogger:
    """获取带上下文自动注入能力的 Logger。"""
    return ContextLogger(get_logger(name))
