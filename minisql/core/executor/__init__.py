"""
执行器模块
"""

from .query_executor import QueryExecutor

__all__ = ["QueryExecutor"]
