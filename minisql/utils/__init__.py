"""
工具函数模块
"""

# 聚合导出常用工具
from .exceptions import *  # noqa: F401,F403
from .helpers import *  # noqa: F401,F403
from .logging import *  # noqa: F401,F403
