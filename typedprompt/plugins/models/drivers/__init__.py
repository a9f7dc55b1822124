# typedprompt/plugins/models/drivers/__init__.py
"""内置模型驱动"""
from typedprompt.plugins.models.drivers.litellm_driver import LiteLLMDriver

__all__ = ["LiteLLMDriver"]
