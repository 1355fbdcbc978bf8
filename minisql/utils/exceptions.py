"""
自定义异常类
"""

__all__ = [
    "DatabaseError",
    "SQLSyntaxError",
    "UnrecognizedCommandError",
    "ExecutionError",
    "TableNotFoundError",
    "ColumnNotFoundError",
    "StorageError",
    "StorageUnavailableError",
    "CatalogError",
]


class DatabaseError(Exception):
    """通用数据库错误。"""


class SQLSyntaxError(DatabaseError):
    """命令语法错误。"""


class ExecutionError(DatabaseError):
    """执行阶段错误。"""


class TableNotFoundError(ExecutionError):
    """表的数据文件不存在。"""


class ColumnNotFoundError(ExecutionError):
    """WHERE 子句引用了表中不存在的列。"""


class StorageError(DatabaseError):
    """存储层错误。"""


class StorageUnavailableError(StorageError):
    """数据文件无法打开、创建或替换。"""


class CatalogError(DatabaseError):
    """系统目录错误。"""


class UnrecognizedCommandError(SQLSyntaxError):
    """命令不匹配任何已知前缀。"""
