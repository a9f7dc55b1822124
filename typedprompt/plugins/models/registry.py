# typedprompt/plugins/models/registry.py
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Type, TypeVar

from typedprompt.core.logging import get_logger
from typedprompt.plugins.models.base import BaseChatModel

logger = get_logger(__name__)

_DRIVER_REGISTRY: Dict[str, Type[BaseChatModel]] = {}

T = TypeVar("T", bound=Type[BaseChatModel])

def register_driver(name: str) -> Callable[[T], T]:
    """
    装饰器：注册模型驱动

    输入是具体的 Driver 类，返回的也是同一个类（保留具体类型信息）。
    """
    def decorator(cls: T) -> T:
        if name in _DRIVER_REGISTRY:
            logger.warning("Driver already registered, overwriting", driver=name, cls=cls.__name__)
        _DRIVER_REGISTRY[name] = cls
        logger.debug("Registered model driver", driver=name)
        return cls
    return decorator


def get_driver_class(name: str) -> Optional[Type[BaseChatModel]]:
    """获取驱动类"""
    return _DRIVER_REGISTRY.get(name)


def list_drivers() -> List[str]:
    """列出已注册的驱动名称"""
    return sorted(_DRIVER_REGISTRY)
