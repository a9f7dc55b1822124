# typedprompt/plugins/models/config.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    """
    模型通用配置对象
    """
    model_name: str = Field(..., description="模型名称，如 'gpt-4o', 'ollama/llama3'")

    # 驱动类型 (字符串，支持通过 register_driver 扩展)
    driver_type: str = Field(default="litellm", description="驱动类型")

    # 连接配置
    api_key: Optional[str] = Field(default=None, description="API Key")
    base_url: Optional[str] = Field(default=None, description="OpenAI 兼容接口的 Base URL")
    timeout: float = Field(default=60.0, description="请求超时时间(秒)")

    # 运行时参数透传 (Provider Specific)
    extra_kwargs: Dict[str, Any] = Field(default_factory=dict, description="透传给底层驱动的额外参数")
