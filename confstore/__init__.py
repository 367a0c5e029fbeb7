"""
confstore - 基于 XML 文件的线程安全配置存储

用法:
    from confstore import open_store

    store = open_store("settings.xml")
    store["theme"] = "dark"
    store.save()
"""

from confstore.domain.entities import ConfigEntry, StoreState
from confstore.domain.errors import (
    AlreadyExistsError,
    ConfigStoreError,
    InvalidArgumentError,
    InvalidFormatError,
    NotFoundError,
    ReadError,
    SaveError,
)
from confstore.infrastructure.file_system import InMemoryFileSystem, LocalFileSystem
from confstore.infrastructure.persistence import ConfigDocument, ConfigStore, open_store

__version__ = "1.0.0"

__all__ = [
    'AlreadyExistsError',
    'ConfigDocument',
    'ConfigEntry',
    'ConfigStore',
    'ConfigStoreError',
    'InMemoryFileSystem',
    'InvalidArgumentError',
    'InvalidFormatError',
    'LocalFileSystem',
    'NotFoundError',
    'ReadError',
    'SaveError',
    'StoreState',
    'open_store',
]
