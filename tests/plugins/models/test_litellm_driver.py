# tests/plugins/models/test_litellm_driver.py
"""
LiteLLM 驱动测试

所有网络调用都通过 patch litellm.acompletion 模拟。
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from typedprompt.core.error_codes import ErrorCode
from typedprompt.core.exceptions import ModelError
from typedprompt.plugins.models import LiteLLMDriver, ModelConfig
from typedprompt.plugins.models.exceptions import (
    AuthenticationError,
    ContextWindowExceededError,
    ProviderError,
    RateLimitError,
    ServiceUnavailableError,
)

ACOMPLETION = "typedprompt.plugins.models.drivers.litellm_driver.litellm.acompletion"


def make_driver(**overrides):
    config = ModelConfig(
        model_name="gpt-4o-mini",
        api_key="sk-test",
        base_url="https://api.example.com/v1",
        timeout=30,
        **overrides,
    )
    return LiteLLMDriver(config)


def fake_response(content):
    return SimpleNamespace(
        id="chatcmpl-1",
        object="chat.completion",
        created=1700000000,
        model="gpt-4o-mini",
        choices=[
            SimpleNamespace(
                index=0,
                finish_reason="stop",
                message=SimpleNamespace(role="assistant", content=content),
            )
        ],
        usage=SimpleNamespace(prompt_tokens=5, completion_tokens=3, total_tokens=8),
    )


def fake_chunk(content, chunk_id="chunk-1"):
    return SimpleNamespace(
        id=chunk_id,
        created=1700000000,
        model="gpt-4o-mini",
        choices=[SimpleNamespace(index=0, delta=SimpleNamespace(role=None, content=content), finish_reason=None)],
    )


async def fake_stream(chunks):
    for chunk in chunks:
        yield chunk


def named_error(name):
    # 与 litellm 异常同名的替身，驱动按异常类型名做映射
    return type(name, (Exception,), {})("upstream said no")


MESSAGES = [{"role": "user", "content": "hi"}]


class TestCompletion:

    @pytest.mark.asyncio
    async def test_params_and_response(self):
        driver = make_driver(extra_kwargs={"top_p": 0.9})
        with patch(ACOMPLETION, new_callable=AsyncMock) as mock_call:
            mock_call.return_value = fake_response("hello")
            response = await driver.acompletion(MESSAGES, temperature=0.1, stream=True)

        params = mock_call.call_args.kwargs
        assert params["model"] == "gpt-4o-mini"
        assert params["messages"] == MESSAGES
        assert params["api_key"] == "sk-test"
        assert params["api_base"] == "https://api.example.com/v1"
        assert params["timeout"] == 30
        assert params["stream"] is False
        assert params["temperature"] == 0.1
        assert params["top_p"] == 0.9

        assert response.content == "hello"
        assert response.usage.total_tokens == 8
        assert response.choices[0].finish_reason == "stop"

    @pytest.mark.asyncio
    async def test_no_text_content(self):
        driver = make_driver()
        with patch(ACOMPLETION, new_callable=AsyncMock) as mock_call:
            mock_call.return_value = fake_response(None)
            response = await driver.acompletion(MESSAGES)
        assert response.content is None

    @pytest.mark.asyncio
    async def test_optional_connection_params_omitted(self):
        driver = LiteLLMDriver(ModelConfig(model_name="ollama/llama3"))
        with patch(ACOMPLETION, new_callable=AsyncMock) as mock_call:
            mock_call.return_value = fake_response("ok")
            await driver.acompletion(MESSAGES)

        params = mock_call.call_args.kwargs
        assert "api_key" not in params
        assert "api_base" not in params


class TestStreaming:

    @pytest.mark.asyncio
    async def test_chunks_adapted_and_keepalive_dropped(self):
        driver = make_driver()
        raw = [
            fake_chunk("Hel"),
            SimpleNamespace(id="", choices=[]),
            fake_chunk("lo"),
        ]
        with patch(ACOMPLETION, new_callable=AsyncMock) as mock_call:
            mock_call.return_value = fake_stream(raw)
            chunks = [c async for c in driver.astream(MESSAGES)]

        assert [c.content for c in chunks] == ["Hel", "lo"]
        assert mock_call.call_args.kwargs["stream"] is True


class TestErrorMapping:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,expected,code", [
        ("AuthenticationError", AuthenticationError, ErrorCode.MODEL_AUTH_FAILED),
        ("RateLimitError", RateLimitError, ErrorCode.MODEL_RATE_LIMITED),
        ("ContextWindowExceededError", ContextWindowExceededError, ErrorCode.MODEL_CONTEXT_EXCEEDED),
        ("ServiceUnavailableError", ServiceUnavailableError, ErrorCode.MODEL_UNAVAILABLE),
        ("APIConnectionError", ServiceUnavailableError, ErrorCode.MODEL_UNAVAILABLE),
        ("Timeout", ServiceUnavailableError, ErrorCode.MODEL_UNAVAILABLE),
        ("BadRequestError", ProviderError, ErrorCode.MODEL_UNAVAILABLE),
    ])
    async def test_completion_errors(self, name, expected, code):
        driver = make_driver()
        with patch(ACOMPLETION, new_callable=AsyncMock) as mock_call:
            mock_call.side_effect = named_error(name)
            with pytest.raises(expected) as exc_info:
                await driver.acompletion(MESSAGES)

        error = exc_info.value
        assert isinstance(error, ModelError)
        assert error.code == code
        assert error.context["provider"] == "litellm"
        assert type(error.__cause__).__name__ == name

    @pytest.mark.asyncio
    async def test_stream_errors(self):
        driver = make_driver()
        with patch(ACOMPLETION, new_callable=AsyncMock) as mock_call:
            mock_call.side_effect = named_error("RateLimitError")
            with pytest.raises(RateLimitError):
                async for _ in driver.astream(MESSAGES):
                    pass

    @pytest.mark.asyncio
    async def test_internal_errors_pass_through(self):
        driver = make_driver()
        mapped = ModelError("already mapped")
        with patch(ACOMPLETION, new_callable=AsyncMock) as mock_call:
            mock_call.side_effect = mapped
            with pytest.raises(ModelError) as exc_info:
                await driver.acompletion(MESSAGES)
        assert exc_info.value is mapped
