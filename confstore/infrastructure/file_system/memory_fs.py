"""
内存文件系统 - 测试替身

在内存字典中保存文件内容，不触碰磁盘。
"""
import io
import threading
from typing import BinaryIO, Dict, Optional


class InMemoryFileSystem:
    """
    内存文件系统

    Attributes:
        files: 路径 -> 文件内容
        write_count: write_all 成功次数（用于验证是否发生写盘）
        fail_writes: 为 True 时 write_all 抛出 OSError
        fail_reads: 为 True 时 open_read 抛出 OSError
    """

    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self.files: Dict[str, bytes] = dict(files or {})
        self.write_count = 0
        self.fail_writes = False
        self.fail_reads = False
        self._lock = threading.Lock()

    def exists(self, path: str) -> bool:
        with self._lock:
            return path in self.files

    def open_read(self, path: str) -> BinaryIO:
        with self._lock:
            if self.fail_reads:
                raise OSError(f"simulated read failure: {path}")
            if path not in self.files:
                raise FileNotFoundError(path)
            return io.BytesIO(self.files[path])

    def write_all(self, path: str, data: bytes) -> None:
        with self._lock:
            if self.fail_writes:
                raise OSError(f"simulated write failure: {path}")
            self.files[path] = bytes(data)
            self.write_count += 1

    def read_text(self, path: str, encoding: str = 'utf-8') -> str:
        """读取文件文本（测试断言用）"""
        with self._lock:
            return self.files[path].decode(encoding)

    def remove(self, path: str) -> None:
        with self._lock:
            self.files.pop(path, None)
