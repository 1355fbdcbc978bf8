"""
系统目录管理
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ...utils.constants import CATALOG_FILE, FIELD_DELIMITER, FILE_ENCODING
from ...utils.exceptions import CatalogError
from ...utils.helpers import ensure_dir

logger = logging.getLogger(__name__)


@dataclass
class Table:
    name: str
    columns: List[str] = field(default_factory=list)

    def to_line(self) -> str:
        return FIELD_DELIMITER.join([self.name, *self.columns])

    @classmethod
    def from_line(cls, line: str) -> "Table":
        name, *columns = line.split(FIELD_DELIMITER)
        return cls(name=name, columns=columns)


class SystemCatalog:
    """
    极简系统目录：表名 -> 列名列表

    磁盘上是只追加的日志文件，重复定义同名表时追加新行而不压缩，
    因此加载时以最后一条为准。
    """

    def __init__(self, base_dir: str | Path):
        self.base_dir = ensure_dir(base_dir)
        self.catalog_path = self.base_dir / CATALOG_FILE
        self._tables: Dict[str, Table] = {}

    def load(self) -> Dict[str, Table]:
        """从日志重建目录；日志文件不存在时得到空目录。"""
        tables: Dict[str, Table] = {}
        if self.catalog_path.is_file():
            try:
                with self.catalog_path.open("r", encoding=FILE_ENCODING) as f:
                    for line in f:
                        line = line.rstrip("\n")
                        if not line:
                            continue
                        table = Table.from_line(line)
                        tables[table.name] = table
            except OSError as exc:
                raise CatalogError(f"Could not read catalog {self.catalog_path}") from exc
        self._tables = tables
        logger.debug("加载系统目录: %d 张表", len(tables))
        return dict(tables)

    def append(self, table: Table) -> None:
        """向日志末尾追加一条表定义，不改写已有内容。"""
        try:
            with self.catalog_path.open("a", encoding=FILE_ENCODING) as f:
                f.write(table.to_line() + "\n")
        except OSError as exc:
            raise CatalogError(f"Could not write catalog {self.catalog_path}") from exc

    def register(self, table: Table) -> None:
        self._tables[table.name] = table

    # --- API ---
    def get_table(self, name: str) -> Optional[Table]:
        return self._tables.get(name)

    def get_columns(self, name: str) -> List[str]:
        table = self._tables.get(name)
        return list(table.columns) if table else []

    def has_table(self, name: str) -> bool:
        return name in self._tables

    def get_tables(self) -> List[str]:
        return sorted(self._tables.keys())
