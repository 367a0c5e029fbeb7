# Domain Entities

"""
领域实体 - 核心数据对象

不依赖任何外部框架。
"""

from .config_entry import ConfigEntry
from .store_state import StoreState

__all__ = [
    'ConfigEntry',
    'StoreState',
]
