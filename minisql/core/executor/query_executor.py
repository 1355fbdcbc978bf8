"""
查询执行器
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..catalog.system_catalog import SystemCatalog, Table
from ..parser.sql_parser import CREATE_TABLE, DELETE, INSERT, SELECT
from ...storage.file_storage import FileStorage
from ...utils.constants import FIELD_DELIMITER, NO_DATA_MESSAGE
from ...utils.exceptions import CatalogError, ColumnNotFoundError, ExecutionError

logger = logging.getLogger(__name__)

INVALID_WHERE_MESSAGE = "Invalid WHERE clause format."


class QueryExecutor:
    def __init__(self, storage: FileStorage, catalog: SystemCatalog):
        self.storage = storage
        self.catalog = catalog

    # --- public ---
    def execute(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        """
        执行一条解析后的命令

        Returns:
            {"message", "data", "affected_rows", "warnings", "output"}，
            output 是按顺序打印给用户的各行文本
        """
        typ = plan.get("type")
        if typ == CREATE_TABLE:
            return self._exec_create_table(plan)
        if typ == INSERT:
            return self._exec_insert(plan)
        if typ == SELECT:
            return self._exec_select(plan)
        if typ == DELETE:
            return self._exec_delete(plan)
        raise ExecutionError(f"Unknown plan type: {typ}")

    # --- operators ---
    def _exec_create_table(self, p: Dict[str, Any]) -> Dict[str, Any]:
        table = Table(name=p["table"], columns=list(p["columns"]))
        existed = self.storage.exists(table.name)
        self.storage.create(table.name)
        try:
            self.catalog.append(table)
        except CatalogError:
            # 回滚本命令新建的数据文件，保证目录与数据文件同在或同不在
            if not existed:
                self.storage.drop(table.name)
            raise
        self.catalog.register(table)
        logger.info("创建表 %s(%s)", table.name, ", ".join(table.columns))
        return self._result(f"Table {table.name} created.")

    def _exec_insert(self, p: Dict[str, Any]) -> Dict[str, Any]:
        table, values = p["table"], p["values"]
        # 不查目录：数据文件是否存在由存储层判定
        self.storage.append(table, values)
        columns = self.catalog.get_columns(table)
        if self.catalog.has_table(table) and len(values) != len(columns):
            logger.warning("表 %s 有 %d 列，插入了 %d 个值", table, len(columns), len(values))
        return self._result(f"Inserted into {table}.", affected_rows=1)

    def _exec_select(self, p: Dict[str, Any]) -> Dict[str, Any]:
        table = p["table"]
        rows = list(self.storage.scan(table))
        message = f"Data from table {table}:"
        output = [message, *rows] if rows else [message, NO_DATA_MESSAGE]
        return self._result(message, data=rows, affected_rows=len(rows), output=output)

    def _exec_delete(self, p: Dict[str, Any]) -> Dict[str, Any]:
        table = p["table"]
        where = p.get("where")
        columns = self.catalog.get_columns(table)
        warnings: List[str] = []

        if where is None:
            keep = _drop_all
        elif where["column"] is None:
            def keep(row: str) -> bool:
                if not warnings:
                    warnings.append(INVALID_WHERE_MESSAGE)
                return True
        elif where["column"] in columns:
            index = columns.index(where["column"])
            value = where["value"]

            def keep(row: str) -> bool:
                fields = row.split(FIELD_DELIMITER)
                return not (index < len(fields) and fields[index] == value)
        else:
            def keep(row: str) -> bool:
                # 第一行就中止重写，临时文件被丢弃，原文件不动
                raise ColumnNotFoundError(
                    f"Column in WHERE clause does not exist in table '{table}'."
                )

        deleted = self.storage.rewrite(table, keep)

        if deleted:
            message = f"Deleted from {table}"
            if where is not None:
                message += f" where {where['clause']}"
            message += "."
        else:
            message = f"No matching rows found in table {table}."
        return self._result(message, affected_rows=deleted, warnings=warnings, output=[*warnings, message])

    @staticmethod
    def _result(message: str, data=None, affected_rows: int = 0, warnings=None, output=None) -> Dict[str, Any]:
        return {
            "message": message,
            "data": data if data is not None else [],
            "affected_rows": affected_rows,
            "warnings": warnings if warnings is not None else [],
            "output": output if output is not None else [message],
        }


def _drop_all(row: str) -> bool:
    return False
