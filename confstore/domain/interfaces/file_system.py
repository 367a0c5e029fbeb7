"""
文件系统接口

定义存储层访问文件的最小契约，便于测试时替换为内存实现。
"""

from typing import Protocol, BinaryIO


class IFileSystem(Protocol):
    """
    文件系统接口

    职责:
    - 判断文件是否存在
    - 以二进制流读取文件
    - 整体写入文件内容
    """

    def exists(self, path: str) -> bool:
        """文件是否存在"""
        ...

    def open_read(self, path: str) -> BinaryIO:
        """
        以二进制只读方式打开文件

        Raises:
            FileNotFoundError: 文件不存在
            OSError: 其他读取错误
        """
        ...

    def write_all(self, path: str, data: bytes) -> None:
        """
        整体写入文件

        Raises:
            OSError: 写入失败
        """
        ...
