"""
持久化基础设施模块

提供 XML 配置文档与配置存储。
"""
from .xml_document import ConfigDocument, ROOT_TAG, ENTRY_TAG, NAME_ATTR, VALUE_ATTR
from .config_store import ConfigStore, open_store

__all__ = [
    'ConfigDocument',
    'ConfigStore',
    'open_store',
    'ROOT_TAG',
    'ENTRY_TAG',
    'NAME_ATTR',
    'VALUE_ATTR',
]
