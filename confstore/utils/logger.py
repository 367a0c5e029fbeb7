"""
confstore 日志

ConfigStore 通过 get_logger(__name__, callback) 记录存储事件:
打开/新建/重新加载为 info，保存成功为 success，
保存失败为 error，跳过的残缺配置项为 debug。
callback 会收到同样的 (message, level)，便于调用方展示或统计。
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Optional


# 回调签名: (message, level) -> None
LogCallback = Callable[[str, str], None]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TIME_FORMAT = "%H:%M:%S"

# 保存成功（介于 INFO=20 和 WARNING=30 之间）
SUCCESS = 25
logging.addLevelName(SUCCESS, 'SUCCESS')

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'success': SUCCESS,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


class StoreLogger:
    """标准 logging 之上加一个事件回调"""

    def __init__(self, name: str, callback: Optional[LogCallback] = None):
        self.logger = logging.getLogger(name)
        self.callback = callback

    def _emit(self, level_name: str, message: str):
        self.logger.log(_LEVELS[level_name], message)
        if self.callback is None:
            return
        try:
            self.callback(message, level_name)
        except Exception as e:
            # 回调失败不影响存储操作
            self.logger.debug(f"log callback failed: {e}")

    def debug(self, message: str):
        self._emit('debug', message)

    def info(self, message: str):
        self._emit('info', message)

    def success(self, message: str):
        self._emit('success', message)

    def warning(self, message: str):
        self._emit('warning', message)

    def error(self, message: str):
        self._emit('error', message)


def get_logger(name: str, callback: Optional[LogCallback] = None) -> StoreLogger:
    return StoreLogger(name, callback)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None):
    """
    为使用 confstore 的应用配置根日志器

    Args:
        level: 日志级别
        log_file: 额外写入的日志文件（可选）
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=level,
        format=DEFAULT_FORMAT,
        datefmt=TIME_FORMAT,
        handlers=handlers,
        force=True,
    )
