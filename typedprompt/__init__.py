# typedprompt/__init__.py
"""
typedprompt 顶层包入口

职责：
1. 暴露核心稳定 API，import typedprompt 即可访问常用类
2. 提供统一的版本号 (__version__)
"""
from __future__ import annotations

from typedprompt.version import __version__

from typedprompt.client import PromptClient
from typedprompt.config import TypedPromptSettings, configure_settings, get_settings
from typedprompt.core.exceptions import ConfigurationError, ModelError, TypedPromptError
from typedprompt.core.prompt import Prompt
from typedprompt.core.structure import (
    Shape,
    StreamingPipeline,
    StructureEngine,
    StructureParseError,
    describe,
    parse_structured_output,
)

__all__ = [
    "__version__",
    "PromptClient",
    "Prompt",
    "StructureEngine",
    "StreamingPipeline",
    "Shape",
    "describe",
    "parse_structured_output",
    "StructureParseError",
    "TypedPromptError",
    "ConfigurationError",
    "ModelError",
    "TypedPromptSettings",
    "get_settings",
    "configure_settings",
]
