# tests/plugins/models/test_model_plumbing.py
"""
模型接入层的配置、注册表、工厂与响应适配器测试
"""
from types import SimpleNamespace

import pytest

from typedprompt.core.exceptions import ConfigurationError
from typedprompt.core.protocols import validate_model
from typedprompt.plugins.models import (
    BaseChatModel,
    LiteLLMDriver,
    ModelConfig,
    create_model,
    get_driver_class,
    list_drivers,
    register_driver,
)
from typedprompt.plugins.models import registry
from typedprompt.plugins.models.adapter import LiteLLMAdapter, safe_access


class EchoModel(BaseChatModel):
    async def acompletion(self, messages, **kwargs):
        raise NotImplementedError

    async def astream(self, messages, **kwargs):
        yield  # pragma: no cover


@pytest.fixture
def isolated_registry(monkeypatch):
    monkeypatch.setattr(registry, "_DRIVER_REGISTRY", dict(registry._DRIVER_REGISTRY))


class TestRegistryAndFactory:

    def test_litellm_registered_by_default(self):
        assert "litellm" in list_drivers()
        assert get_driver_class("litellm") is LiteLLMDriver

    def test_create_default_driver(self):
        model = create_model(ModelConfig(model_name="gpt-4o-mini"))
        assert isinstance(model, LiteLLMDriver)
        assert model.model_name == "gpt-4o-mini"
        validate_model(model)

    def test_custom_driver(self, isolated_registry):
        register_driver("echo")(EchoModel)
        model = create_model(ModelConfig(model_name="echo-1", driver_type="echo"))
        assert isinstance(model, EchoModel)
        assert "echo" in list_drivers()

    def test_unknown_driver(self):
        with pytest.raises(ConfigurationError, match="not found"):
            create_model(ModelConfig(model_name="x", driver_type="nope"))


class TestSafeAccess:

    def test_dict_and_attribute(self):
        assert safe_access({"a": 1}, "a") == 1
        assert safe_access(SimpleNamespace(a=2), "a") == 2

    def test_defaults(self):
        assert safe_access(None, "a", "d") == "d"
        assert safe_access({"a": None}, "a", "d") == "d"
        assert safe_access(SimpleNamespace(), "a", "d") == "d"


class TestAdapter:

    def test_response_from_dict(self):
        response = LiteLLMAdapter.to_response({
            "id": "r1",
            "model": "m",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": "hi"}}],
        })
        assert response.id == "r1"
        assert response.content == "hi"
        assert response.usage is None

    def test_non_text_content_dropped(self):
        response = LiteLLMAdapter.to_response({
            "choices": [{"message": {"role": "assistant", "content": [{"type": "image"}]}}],
        })
        assert response.content is None

    def test_empty_response(self):
        assert LiteLLMAdapter.to_response({}).content is None

    def test_keepalive_chunk(self):
        assert LiteLLMAdapter.to_chunk({"id": "", "choices": []}) is None

    def test_chunk_delta(self):
        chunk = LiteLLMAdapter.to_chunk({
            "id": "c1",
            "choices": [{"index": 0, "delta": {"content": "ab"}}],
        })
        assert chunk.content == "ab"
        assert chunk.delta["role"] is None
