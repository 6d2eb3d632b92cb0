"""
工具模块

提供日志功能。
"""
from .logger import info, success, warning, error, debug, get_logger, set_level

__all__ = [
    "info",
    "success",
    "warning",
    "error",
    "debug",
    "get_logger",
    "set_level",
]
