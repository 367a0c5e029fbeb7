"""
工具模块
"""
from .logger import LogCallback, StoreLogger, get_logger, setup_logging

__all__ = ['LogCallback', 'StoreLogger', 'get_logger', 'setup_logging']
