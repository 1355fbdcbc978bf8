"""
基于文本文件的记录存储：每个表一个数据文件，每行一条逗号分隔的记录
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Iterator, Sequence

from ..utils.constants import (
    FIELD_DELIMITER,
    FILE_ENCODING,
    TABLE_FILE_SUFFIX,
    TEMP_FILE_PREFIX,
    TEMP_FILE_SUFFIX,
)
from ..utils.exceptions import StorageUnavailableError, TableNotFoundError
from ..utils.helpers import ensure_dir

logger = logging.getLogger(__name__)


class FileStorage:
    """最简单的追加式行存储。每个表一个数据文件。"""

    def __init__(self, base_dir: str | Path):
        self.base_dir = ensure_dir(base_dir)

    def _table_path(self, table_name: str) -> Path:
        return self.base_dir / f"{table_name}{TABLE_FILE_SUFFIX}"

    def exists(self, table_name: str) -> bool:
        return self._is_file(table_name, self._table_path(table_name))

    def _is_file(self, table_name: str, path: Path) -> bool:
        # is_file 只吞掉"不存在"类错误，其余 OSError（如文件名过长）需要转换
        try:
            return path.is_file()
        except OSError as exc:
            raise StorageUnavailableError(f"Could not access file for table {table_name}") from exc

    def create(self, table_name: str) -> None:
        """创建空数据文件；文件已存在时保留原有数据。"""
        path = self._table_path(table_name)
        try:
            path.touch(exist_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"Could not create file for table {table_name}") from exc
        logger.debug("数据文件就绪: %s", path)

    def drop(self, table_name: str) -> None:
        path = self._table_path(table_name)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise StorageUnavailableError(f"Could not remove file for table {table_name}") from exc

    def append(self, table_name: str, row: Sequence[str]) -> None:
        """以追加方式写入一行。文件不存在时不会自动创建。"""
        path = self._table_path(table_name)
        line = FIELD_DELIMITER.join(row) + "\n"
        try:
            # 不带 O_CREAT：未建表时直接失败
            fd = os.open(path, os.O_WRONLY | os.O_APPEND)
        except OSError as exc:
            raise StorageUnavailableError(f"Could not open file for table {table_name}") from exc
        with os.fdopen(fd, "w", encoding=FILE_ENCODING) as f:
            f.write(line)

    def scan(self, table_name: str) -> Iterator[str]:
        """
        顺序扫描表的所有原始行

        存在性检查立即进行；返回的迭代器惰性读取文件，
        每次调用 scan 都会从头开始。

        Raises:
            TableNotFoundError: 数据文件不存在
        """
        path = self._table_path(table_name)
        if not self._is_file(table_name, path):
            raise TableNotFoundError(f"Table {table_name} does not exist.")
        return self._iter_lines(path)

    def _iter_lines(self, path: Path) -> Iterator[str]:
        with path.open("r", encoding=FILE_ENCODING) as f:
            for line in f:
                yield line.rstrip("\n")

    def rewrite(self, table_name: str, keep: Callable[[str], bool]) -> int:
        """
        读取全部行，保留 keep(row) 为真的行，并原子地替换原文件

        先写同目录下的临时文件，成功后用 os.replace 换入。
        替换之前的任何异常（包括 keep 抛出的异常）都会删除临时文件，
        原文件保持不变。

        Args:
            table_name: 表名
            keep: 以原始行为参数的保留谓词

        Returns:
            被删除的行数

        Raises:
            TableNotFoundError: 数据文件不存在
            StorageUnavailableError: 临时文件无法创建或替换失败
        """
        path = self._table_path(table_name)
        if not self._is_file(table_name, path):
            raise TableNotFoundError(f"Table {table_name} does not exist.")

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f"{TEMP_FILE_PREFIX}{table_name}.",
                suffix=TEMP_FILE_SUFFIX,
                dir=self.base_dir,
            )
        except OSError as exc:
            raise StorageUnavailableError("Could not create temporary file.") from exc

        dropped = 0
        try:
            with os.fdopen(fd, "w", encoding=FILE_ENCODING) as out, \
                    path.open("r", encoding=FILE_ENCODING) as src:
                for line in src:
                    row = line.rstrip("\n")
                    if keep(row):
                        out.write(row + "\n")
                    else:
                        dropped += 1
                out.flush()
                os.fsync(out.fileno())
            # mkstemp 创建的文件权限为 0600，换入前恢复原文件权限
            shutil.copymode(path, tmp_name)
            os.replace(tmp_name, path)
        except BaseException as exc:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.warning("临时文件清理失败: %s", tmp_name)
            if isinstance(exc, OSError):
                raise StorageUnavailableError(f"Could not rewrite file for table {table_name}") from exc
            raise

        logger.info("重写表 %s: 删除 %d 行", table_name, dropped)
        return dropped
