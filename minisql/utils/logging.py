"""
日志配置
"""

import logging
import sys
from typing import Optional, Union

from .constants import LOG_FORMAT, LOG_LEVEL

__all__ = ["get_logger"]


def get_logger(name: str = "minisql", level: Optional[Union[int, str]] = None) -> logging.Logger:
    """返回包级记录器；首次调用时安装输出到 stderr 的处理器。"""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return logger
    if level is None:
        logger.setLevel(LOG_LEVEL)
    # 命令输出走 stdout，日志走 stderr，避免混在一起
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
