"""
文件系统适配器

提供真实磁盘与内存两种实现。
"""
from .local_fs import LocalFileSystem
from .memory_fs import InMemoryFileSystem

__all__ = ['LocalFileSystem', 'InMemoryFileSystem']
