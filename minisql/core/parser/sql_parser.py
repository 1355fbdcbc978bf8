"""
命令解析器
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from ...utils.constants import FIELD_DELIMITER
from ...utils.exceptions import SQLSyntaxError, UnrecognizedCommandError
from ...utils.helpers import strip_whitespace

CREATE_TABLE = "CREATE_TABLE"
INSERT = "INSERT"
SELECT = "SELECT"
DELETE = "DELETE"


class SQLParser:
    """
    极简解析器，按前缀识别 CREATE TABLE / INSERT INTO / SELECT * FROM / DELETE FROM

    关键字不区分大小写，表名、列名和值区分大小写。
    解析结果是带 "type" 键的字典，交给 QueryExecutor 执行。
    """

    # 跳过前两个关键字后取第三个以空白分隔的记号
    _re_third_token = re.compile(r"\S+\s+\S+\s+([^\s(]+)")
    _re_where = re.compile(r"where", re.IGNORECASE)
    # 表名会写入目录日志并拼成文件名，不允许字段分隔符和路径分隔符
    _forbidden_name_chars = set(FIELD_DELIMITER + "/\\")

    def parse(self, sql: str) -> Dict[str, Any]:
        s = sql.lstrip()
        head = s.upper()
        if head.startswith("CREATE TABLE"):
            return self._parse_create_table(s)
        if head.startswith("INSERT INTO"):
            return self._parse_insert(s)
        if head.startswith("SELECT * FROM"):
            return self._parse_select(s)
        if head.startswith("DELETE FROM"):
            return self._parse_delete(s)
        raise UnrecognizedCommandError("Invalid command.")

    def _parse_create_table(self, s: str) -> Dict[str, Any]:
        m = self._re_third_token.match(s)
        if not m:
            raise SQLSyntaxError("Table name missing in CREATE TABLE command.")
        table = self._check_table_name(m.group(1))
        rest = s[m.end():]
        start = rest.find("(")
        end = rest.find(")", start + 1) if start != -1 else -1
        if end == -1:
            raise SQLSyntaxError("Invalid CREATE TABLE syntax.")
        columns = self._split_list(rest[start + 1:end])
        return {"type": CREATE_TABLE, "table": table, "columns": columns}

    def _parse_insert(self, s: str) -> Dict[str, Any]:
        upper = s.upper()
        pos_into = upper.find("INTO")
        pos_values = upper.find("VALUES")
        if pos_into == -1 or pos_values == -1:
            raise SQLSyntaxError("Invalid INSERT syntax.")
        table = strip_whitespace(s[pos_into + len("INTO"):pos_values])
        if not table:
            raise SQLSyntaxError("Invalid INSERT syntax.")
        self._check_table_name(table)

        start = s.find("(", pos_values)
        end = s.find(")", start) if start != -1 else -1
        if start == -1 or end == -1 or end <= start + 1:
            raise SQLSyntaxError("Invalid VALUES syntax.")
        values = self._split_list(s[start + 1:end])
        return {"type": INSERT, "table": table, "values": values}

    def _parse_select(self, s: str) -> Dict[str, Any]:
        pos_from = s.upper().find("FROM")
        # 只去掉左侧空白，右侧多余字符属于表名
        table = s[pos_from + len("FROM"):].lstrip()
        if not table:
            raise SQLSyntaxError("Invalid SELECT syntax.")
        self._check_table_name(table)
        return {"type": SELECT, "table": table}

    def _parse_delete(self, s: str) -> Dict[str, Any]:
        m = self._re_third_token.match(s)
        if not m:
            raise SQLSyntaxError("Table name missing in DELETE FROM command.")
        table = self._check_table_name(m.group(1))
        return {"type": DELETE, "table": table, "where": self._parse_where(s[m.end():])}

    def _parse_where(self, rest: str) -> Optional[Dict[str, Any]]:
        """
        在表名之后查找 WHERE 子句

        Returns:
            None 表示没有 WHERE；否则返回 {"clause", "column", "value"}，
            子句中 '=' 不是恰好一个时 column 和 value 为 None
        """
        m = self._re_where.search(rest)
        if not m:
            return None
        clause = rest[m.end():].strip()
        if clause.count("=") != 1:
            return {"clause": clause, "column": None, "value": None}
        column, value = clause.split("=")
        return {"clause": clause, "column": strip_whitespace(column), "value": strip_whitespace(value)}

    # --- helpers ---
    def _split_list(self, s: str) -> List[str]:
        if not s.strip():
            return []
        parts = [strip_whitespace(p) for p in s.split(FIELD_DELIMITER)]
        # "(a,b,)" 末尾的空项不算一列
        if parts and not parts[-1]:
            parts.pop()
        return parts

    def _check_table_name(self, name: str) -> str:
        if self._forbidden_name_chars.intersection(name):
            raise SQLSyntaxError(f"Invalid table name: {name}")
        return name
