"""
命令解析模块
"""

from .sql_parser import SQLParser

__all__ = ["SQLParser"]
