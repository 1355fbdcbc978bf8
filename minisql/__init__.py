"""
MiniSQL：基于文本文件的极简单用户关系型存储
"""

from .core.engine import DatabaseEngine
from .utils.exceptions import DatabaseError

__version__ = "0.1.0"

__all__ = ["DatabaseEngine", "DatabaseError", "__version__"]
