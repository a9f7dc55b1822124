# typedprompt/client.py
"""
客户端入口

PromptClient 持有模型连接信息，并作为 Prompt 的工厂：

    client = PromptClient(base_url="https://api.example.com/v1", api_key="sk-...", model_name="gpt-4o")
    prompt = client.prompt(lambda name: f"Say hello to {name}")
    print(await prompt.run("Alice"))

也可以直接传入一个已有的模型对象（任何实现 acompletion / astream 的对象）。
"""
from __future__ import annotations

from typing import Any, Optional

from typedprompt.config import get_settings
from typedprompt.core.exceptions import ConfigurationError
from typedprompt.core.prompt import Prompt, Template
from typedprompt.core.protocols import ModelProtocol, validate_model
from typedprompt.plugins.models import ModelConfig, create_model


class PromptClient:
    """
    创建和管理类型化 Prompt 的客户端

    连接参数未显式传入时回退到 settings（TYPEDPROMPT_DEFAULT_* 环境变量）。
    缺少必要配置时在构造阶段立即抛出 ConfigurationError。
    """

    def __init__(
        self,
        model: Optional[ModelProtocol] = None,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        driver: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()

        if model is not None:
            try:
                validate_model(model)
            except TypeError as e:
                raise ConfigurationError(str(e)) from e
        else:
            base_url = base_url or settings.default_base_url
            api_key = api_key or settings.default_api_key
            if not (base_url and api_key):
                raise ConfigurationError(
                    "Either a model object or a base_url and api_key need to be provided."
                )

        self._model = model
        self.base_url = base_url
        self.api_key = api_key
        self.model_name = model_name or settings.default_model
        self.driver = driver or settings.default_driver
        self.timeout = timeout or settings.default_model_timeout

    def prompt(
        self,
        template: Template,
        *,
        schema: Any = str,
        model_name: Optional[str] = None,
        **request_kwargs: Any,
    ) -> Prompt:
        """
        创建一个类型化 Prompt。

        Args:
            template:       模板函数，返回字符串或 content parts 列表
            schema:         输出 Schema，默认为 str（纯文本）
            model_name:     本 Prompt 使用的模型（客户端已设置默认模型时以客户端为准）
            request_kwargs: 每次请求透传给模型的额外参数
        """
        name = self.model_name or model_name
        if not name:
            raise ConfigurationError(
                "A model needs to be provided in the client options or in the prompt() options."
            )

        model = self._model
        if model is None:
            model = create_model(ModelConfig(
                model_name=name,
                driver_type=self.driver,
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
            ))

        return Prompt(
            template,
            model=model,
            model_name=name,
            schema=schema,
            request_kwargs=request_kwargs,
        )
