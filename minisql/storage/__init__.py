"""
存储模块
"""

from .file_storage import FileStorage

__all__ = ['FileStorage']
