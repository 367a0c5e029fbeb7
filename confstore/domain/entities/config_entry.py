"""
配置项数据类

一个配置项就是一对 (name, value)，name 在存储内唯一。
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigEntry:
    """
    单个配置项

    Attributes:
        name: 配置名称（非空）
        value: 配置值（可以是空字符串）
    """
    name: str
    value: str
