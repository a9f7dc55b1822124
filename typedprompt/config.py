# typedprompt/config.py
"""
全局配置系统

所有配置项均可通过 TYPEDPROMPT_ 前缀的环境变量或 .env 文件覆盖，
运行时也可以通过 configure_settings(...) 直接替换。
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TypedPromptSettings(BaseSettings):
    # ================= 1. Model & Inference (模型与推理) =================
    default_model: Optional[str] = Field(default=None, description="默认 LLM 模型名称，未设置时需在 prompt() 中指定")
    default_api_key: str = Field(default="", description="默认 API Key")
    default_base_url: Optional[str] = Field(default=None, description="OpenAI 兼容接口的 Base URL")
    default_model_timeout: float = Field(default=60.0, ge=1.0, description="LLM 请求超时(秒)")
    default_driver: str = Field(default="litellm", description="默认模型驱动名称")

    # ================= 2. System (系统层) =================
    log_level: str = Field(default="INFO", description="日志级别")
    log_format: Literal["text", "json"] = Field(default="text", description="日志格式")

    model_config = SettingsConfigDict(
        env_prefix="TYPEDPROMPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"log_level must be one of {valid}")
        return v.upper()


# Singleton
_default_settings: Optional[TypedPromptSettings] = None

def get_settings(force_reload: bool = False) -> TypedPromptSettings:
    global _default_settings
    if _default_settings is None or force_reload:
        _default_settings = TypedPromptSettings()
    return _default_settings

def configure_settings(**overrides) -> TypedPromptSettings:
    global _default_settings
    _default_settings = TypedPromptSettings(**overrides)
    return _default_settings

def reset_settings():
    global _default_settings
    _default_settings = None
