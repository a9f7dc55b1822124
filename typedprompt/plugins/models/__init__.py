# typedprompt/plugins/models/__init__.py
"""
模型插件

提供统一的模型接入层。
架构：配置 (Config) -> 工厂 (Factory) -> 注册表 (Registry) -> 驱动 (Driver)
"""
import litellm

# 关闭 LiteLLM 的遥测和冗余打印，保持控制台整洁
litellm.suppress_debug_info = True
litellm.telemetry = False

from typedprompt.plugins.models.base import BaseChatModel  # noqa: E402
from typedprompt.plugins.models.config import ModelConfig  # noqa: E402
from typedprompt.plugins.models.drivers.litellm_driver import LiteLLMDriver  # noqa: E402
from typedprompt.plugins.models.factory import create_model  # noqa: E402
from typedprompt.plugins.models.registry import get_driver_class, list_drivers, register_driver  # noqa: E402

__all__ = [
    "ModelConfig",
    "BaseChatModel",
    "LiteLLMDriver",
    "create_model",
    "register_driver",
    "get_driver_class",
    "list_drivers",
]
