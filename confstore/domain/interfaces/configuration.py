"""
配置文件接口

定义配置存储对外暴露的抽象契约。
"""

from typing import Protocol, Dict, Optional


class IConfigurationFile(Protocol):
    """
    配置文件接口

    职责:
    - 按名称读取、新增、修改、删除配置
    - 显式保存与重新加载
    """

    @property
    def full_path(self) -> str:
        """配置文件的绝对路径"""
        ...

    @property
    def is_changed(self) -> bool:
        """是否有未保存的修改"""
        ...

    def get(self, name: str) -> Optional[str]:
        """获取配置值，不存在时返回 None"""
        ...

    def contains(self, name: str) -> bool:
        """是否存在指定名称的配置"""
        ...

    def add(self, name: str, value: str) -> None:
        """新增配置，名称已存在时报错"""
        ...

    def update(self, name: str, value: str) -> None:
        """修改配置，名称不存在时报错"""
        ...

    def add_or_update(self, name: str, value: str) -> None:
        """存在则修改，否则新增"""
        ...

    def remove(self, name: str) -> None:
        """删除配置，不存在时什么也不做"""
        ...

    def to_snapshot(self) -> Dict[str, str]:
        """返回全部配置的独立副本"""
        ...

    def save(self) -> bool:
        """保存修改到文件"""
        ...

    def reload(self) -> None:
        """从文件重新加载，丢弃未保存的修改"""
        ...
