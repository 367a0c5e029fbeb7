"""
confstore 配置中心

集中管理存储层的可调参数，支持从环境变量读取配置。

用法:
    from confstore.config import store_settings

    encoding = store_settings.encoding
    indent = store_settings.indent
"""

import os
from dataclasses import dataclass


@dataclass
class StoreSettings:
    """
    存储配置

    控制 XML 文件的序列化与写盘行为。
    """
    encoding: str = "utf-8"         # 文件编码
    indent: int = 2                 # 缩进空格数（0 表示不换行）
    atomic_save: bool = True        # 先写临时文件再替换
    xml_declaration: bool = True    # 是否输出 XML 声明


def _get_env_int(key: str, default: int) -> int:
    """从环境变量获取整数配置"""
    value = os.environ.get(key)
    if value:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def _get_env_bool(key: str, default: bool) -> bool:
    """从环境变量获取布尔配置"""
    value = os.environ.get(key)
    if value:
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
    return default


def _get_env_str(key: str, default: str) -> str:
    """从环境变量获取字符串配置"""
    value = os.environ.get(key)
    if value and value.strip():
        return value.strip()
    return default


def _build_settings() -> StoreSettings:
    indent = _get_env_int('CONFSTORE_INDENT', 2)
    if indent < 0:
        indent = 2
    return StoreSettings(
        encoding=_get_env_str('CONFSTORE_ENCODING', 'utf-8'),
        indent=indent,
        atomic_save=_get_env_bool('CONFSTORE_ATOMIC_SAVE', True),
        xml_declaration=_get_env_bool('CONFSTORE_XML_DECLARATION', True),
    )


# ============================================================
# 全局配置实例
# ============================================================

store_settings = _build_settings()


def reload_settings() -> StoreSettings:
    """
    重新加载配置

    从环境变量重新读取配置。已创建的 ConfigStore 保留其构造时的配置。
    """
    global store_settings
    store_settings = _build_settings()
    return store_settings


def get_settings() -> StoreSettings:
    """返回当前全局配置"""
    return store_settings
