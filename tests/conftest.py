# tests/conftest.py
import os
import warnings
from typing import Any, Dict, List, Optional, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest

from typedprompt.config import reset_settings
from typedprompt.core.protocols import (
    CompletionChoice,
    CompletionResponse,
    ModelProtocol,
    StreamChunk,
)


def pytest_configure(config):
    """
    Pytest 配置钩子
    """
    # LiteLLM 处理非标准响应时的 Pydantic 序列化警告与测试无关
    warnings.filterwarnings(
        "ignore",
        category=UserWarning,
        message="Pydantic serializer warnings",
    )
    os.environ["LITELLM_LOG"] = "ERROR"


@pytest.fixture(autouse=True)
def clean_settings():
    """
    自动清理配置单例与 TYPEDPROMPT_ 环境变量，防止测试之间互相污染
    """
    reset_settings()
    old_environ = dict(os.environ)
    for key in list(os.environ.keys()):
        if key.startswith("TYPEDPROMPT_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(old_environ)
    reset_settings()


def make_response(content: Optional[str]) -> CompletionResponse:
    """构造一个只含单个 choice 的补全响应；content=None 表示无文本"""
    return CompletionResponse(
        id="resp-1",
        model="mock-model",
        choices=[CompletionChoice(message={"role": "assistant", "content": content})],
    )


def make_chunk(content: Optional[str]) -> StreamChunk:
    return StreamChunk(
        id="chunk-1",
        model="mock-model",
        choices=[{"index": 0, "delta": {"role": "assistant", "content": content}}],
    )


def make_mock_model(
    content: Optional[str] = None,
    fragments: Sequence[Optional[str]] = (),
) -> MagicMock:
    """
    Mock 模型对象

    - acompletion 返回固定的完整响应
    - astream 每次调用都按顺序产出给定片段
    调用参数可通过 acompletion.call_args / astream.call_args 断言。
    """
    llm = MagicMock(spec=ModelProtocol)
    llm.acompletion = AsyncMock(return_value=make_response(content))

    async def async_gen(messages: List[Dict[str, Any]], **kwargs: Any):
        for fragment in fragments:
            yield make_chunk(fragment)

    llm.astream = MagicMock(side_effect=async_gen)
    return llm


@pytest.fixture
def mock_model_factory():
    """返回 make_mock_model，便于在测试中按需构造"""
    return make_mock_model


async def fragment_source(fragments: Sequence[Optional[str]]):
    """把片段列表包装为异步片段源"""
    for fragment in fragments:
        yield fragment


@pytest.fixture
def fragments_of():
    return fragment_source
