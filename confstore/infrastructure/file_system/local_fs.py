"""
本地文件系统适配器 - 基础设施层

直接读写操作系统文件。
"""
import os
import stat
import tempfile
from typing import BinaryIO


def _target_mode(path: str) -> int:
    """替换后文件应有的权限：沿用原文件，新文件按 umask 计算"""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class LocalFileSystem:
    """
    本地文件系统

    atomic=True 时 write_all 先写入同目录下的临时文件，
    fsync 后再用 os.replace 覆盖目标，写入失败不会破坏原文件。
    临时文件由 mkstemp 以 0600 创建，替换前会改成目标文件的权限。
    """

    def __init__(self, atomic: bool = True):
        self.atomic = atomic

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def open_read(self, path: str) -> BinaryIO:
        return open(path, 'rb')

    def write_all(self, path: str, data: bytes) -> None:
        if not self.atomic:
            with open(path, 'wb') as f:
                f.write(data)
            return

        directory = os.path.dirname(path) or '.'
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(path)}.", suffix='.tmp', dir=directory
        )
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _target_mode(path))
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
