"""
系统目录测试
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from minisql.core.catalog import SystemCatalog, Table


class TestSystemCatalog(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.catalog = SystemCatalog(self.temp_dir)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _reload(self):
        catalog = SystemCatalog(self.temp_dir)
        catalog.load()
        return catalog

    def test_load_missing_log(self):
        self.assertEqual(self.catalog.load(), {})
        self.assertEqual(self.catalog.get_tables(), [])

    def test_append_writes_one_line(self):
        self.catalog.append(Table("users", ["id", "name"]))
        self.assertEqual(self.catalog.catalog_path.read_text(), "users,id,name\n")

    def test_durability(self):
        table = Table("users", ["id", "name"])
        self.catalog.register(table)
        self.catalog.append(table)

        reloaded = self._reload()
        self.assertTrue(reloaded.has_table("users"))
        self.assertEqual(reloaded.get_columns("users"), ["id", "name"])

    def test_last_definition_wins(self):
        self.catalog.append(Table("t", ["a", "b"]))
        self.catalog.append(Table("other", ["x"]))
        self.catalog.append(Table("t", ["c", "d"]))

        # 日志只追加不压缩
        lines = self.catalog.catalog_path.read_text().splitlines()
        self.assertEqual(lines, ["t,a,b", "other,x", "t,c,d"])

        reloaded = self._reload()
        self.assertEqual(reloaded.get_columns("t"), ["c", "d"])
        self.assertEqual(reloaded.get_tables(), ["other", "t"])

    def test_register_overwrites_in_memory(self):
        self.catalog.register(Table("t", ["a"]))
        self.catalog.register(Table("t", ["b"]))
        self.assertEqual(self.catalog.get_table("t"), Table("t", ["b"]))

    def test_unknown_table_has_no_columns(self):
        self.assertEqual(self.catalog.get_columns("ghost"), [])
        self.assertIsNone(self.catalog.get_table("ghost"))

    def test_load_skips_blank_lines(self):
        Path(self.temp_dir, "catalog.txt").write_text("t,a\n\nempty\n")
        tables = self.catalog.load()
        self.assertEqual(tables["t"].columns, ["a"])
        self.assertEqual(tables["empty"].columns, [])


if __name__ == "__main__":
    unittest.main()
