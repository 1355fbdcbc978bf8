"""
系统目录模块
"""

from .system_catalog import SystemCatalog, Table

__all__ = ["SystemCatalog", "Table"]
