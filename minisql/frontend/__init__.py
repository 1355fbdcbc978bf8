"""
命令行前端
"""

from .cli import MiniSQLShell, cli, main

__all__ = ["MiniSQLShell", "cli", "main"]
