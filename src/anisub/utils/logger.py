"""
日志工具

所有模块通过 info/success/warning/error/debug 输出日志，统一走 "anisub" logger。
Web 层的 router 直接使用 logging.getLogger(__name__)，同属 "anisub" 命名空间。
"""
import logging
import sys

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_LOGGER_NAME = "anisub"
_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

_configured = False


def get_logger(name: str = _LOGGER_NAME) -> logging.Logger:
    """获取 logger。首次调用时为根 "anisub" logger 挂载 stderr handler。"""
    global _configured
    if not _configured:
        root = logging.getLogger(_LOGGER_NAME)
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
            root.addHandler(handler)
        if root.level == logging.NOTSET:
            root.setLevel(logging.INFO)
        _configured = True
    return logging.getLogger(name)


def set_level(level: int | str) -> None:
    """调整 "anisub" logger 的输出级别（CLI --verbose 使用）。"""
    get_logger().setLevel(level)


def debug(msg: str) -> None:
    get_logger().debug(msg)


def info(msg: str) -> None:
    get_logger().info(msg)


def success(msg: str) -> None:
    get_logger().log(SUCCESS, msg)


def warning(msg: str) -> None:
    get_logger().warning(msg)


def error(msg: str) -> None:
    get_logger().error(msg)
