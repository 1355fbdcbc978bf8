"""
数据库核心引擎
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from .catalog.system_catalog import SystemCatalog, Table
from .executor.query_executor import QueryExecutor
from .parser.sql_parser import SQLParser
from ..storage.file_storage import FileStorage
from ..utils.constants import DEFAULT_DATA_DIR

logger = logging.getLogger(__name__)


class DatabaseEngine:
    """数据库核心引擎"""

    def __init__(self, data_dir: str | Path = DEFAULT_DATA_DIR):
        """
        初始化数据库引擎

        Args:
            data_dir: 存放系统目录日志和表数据文件的目录，不存在时自动创建
        """
        self.data_dir = Path(data_dir)
        self.storage = FileStorage(self.data_dir)
        self.parser = SQLParser()
        self.catalog = SystemCatalog(self.data_dir)
        self.executor = QueryExecutor(self.storage, self.catalog)

        # 启动时从日志加载系统目录
        tables = self.catalog.load()
        logger.info("打开数据目录 %s，共 %d 张表", self.data_dir, len(tables))

    def execute(self, sql: str) -> Dict[str, Any]:
        """
        执行一条命令

        Args:
            sql: 命令字符串

        Returns:
            执行结果字典，包含状态、消息、数据和待打印的输出行

        Raises:
            SQLSyntaxError: 命令语法错误
            DatabaseError: 执行或存储错误
        """
        plan = self.parser.parse(sql)
        logger.debug("执行计划: %s", plan)
        result = self.executor.execute(plan)
        return {"status": "success", **result}

    def get_tables(self) -> List[str]:
        """获取所有表名"""
        return self.catalog.get_tables()

    def get_table(self, table_name: str) -> Table | None:
        """获取表结构"""
        return self.catalog.get_table(table_name)
