"""
命令行界面测试
"""

import errno
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from click.testing import CliRunner

from minisql.frontend.cli import cli, iter_script_statements


class TestScriptSplitting(unittest.TestCase):

    def test_one_statement_per_line(self):
        text = "CREATE TABLE t (a,b)\nINSERT INTO t VALUES (1,2)\n\n"
        self.assertEqual(list(iter_script_statements(text)), ["CREATE TABLE t (a,b)", "INSERT INTO t VALUES (1,2)"])

    def test_semicolons_and_comments(self):
        text = "-- setup\nCREATE TABLE t (a,b); INSERT INTO t VALUES (1,2);\nSELECT * FROM t; -- dump\n"
        self.assertEqual(
            list(iter_script_statements(text)),
            ["CREATE TABLE t (a,b)", "INSERT INTO t VALUES (1,2)", "SELECT * FROM t"],
        )

    def test_dashes_inside_values_are_kept(self):
        text = "INSERT INTO t VALUES (a--b, c)\nINSERT INTO t VALUES (1,2) -- note\n"
        self.assertEqual(
            list(iter_script_statements(text)),
            ["INSERT INTO t VALUES (a--b, c)", "INSERT INTO t VALUES (1,2)"],
        )


class TestCLI(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.data_dir = str(Path(self.temp_dir) / "data")
        self.runner = CliRunner()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _write_script(self, text):
        path = Path(self.temp_dir) / "script.sql"
        path.write_text(text, encoding="utf-8")
        return str(path)

    def test_run_script(self):
        script = self._write_script(
            "CREATE TABLE t (a,b)\n"
            "INSERT INTO t VALUES (1,2)\n"
            "INSERT INTO t VALUES (3,4)\n"
            "DELETE FROM t WHERE a = 1\n"
            "SELECT * FROM t\n"
        )
        result = self.runner.invoke(cli, ["--data-dir", self.data_dir, "run", script])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Table t created.", result.output)
        self.assertIn("Deleted from t where a = 1.", result.output)
        self.assertTrue(result.output.rstrip().endswith("Data from table t:\n3,4"))

    def test_run_script_reports_errors(self):
        script = self._write_script("SELECT * FROM ghost\nCREATE TABLE t (a)\n")
        result = self.runner.invoke(cli, ["--data-dir", self.data_dir, "run", script])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error: Table ghost does not exist.", result.output)
        # 出错后继续执行
        self.assertIn("Table t created.", result.output)

    def test_run_script_value_with_dashes(self):
        script = self._write_script("CREATE TABLE t (a,b)\nINSERT INTO t VALUES (a--b,2)\nSELECT * FROM t\n")
        result = self.runner.invoke(cli, ["--data-dir", self.data_dir, "run", script])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Data from table t:\na--b,2", result.output)

    def test_run_stops_at_exit(self):
        script = self._write_script("CREATE TABLE t (a)\nEXIT\nCREATE TABLE u (b)\n")
        result = self.runner.invoke(cli, ["--data-dir", self.data_dir, "run", script])
        self.assertEqual(result.exit_code, 0)
        self.assertNotIn("Table u created.", result.output)

    def test_shell_session(self):
        commands = "\n".join([
            "CREATE TABLE t (a,b)",
            "INSERT INTO t VALUES (1,2)",
            "SELECT * FROM t",
            "tables",
            "SELECT * FROM ghost",
            "exit",
        ]) + "\n"
        result = self.runner.invoke(cli, ["--data-dir", self.data_dir, "shell"], input=commands)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Welcome to MiniSQL Engine", result.output)
        self.assertIn("Inserted into t.", result.output)
        self.assertIn("Data from table t:\n1,2", result.output)
        self.assertIn("  t (a,b)", result.output)
        self.assertIn("Error: Table ghost does not exist.", result.output)

    def test_shell_is_default_command(self):
        result = self.runner.invoke(cli, ["--data-dir", self.data_dir], input="EXIT\n")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Welcome to MiniSQL Engine", result.output)

    def test_shell_invalid_command_shows_help(self):
        result = self.runner.invoke(cli, ["--data-dir", self.data_dir, "shell"], input="DROP TABLE t\n")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Error: Invalid command.", result.output)
        self.assertGreaterEqual(result.output.count("MiniSQL Commands:"), 2)

    def test_shell_survives_storage_error(self):
        """系统级文件错误只影响当前命令，后续命令照常执行"""
        real_is_file = Path.is_file

        def is_file(path):
            if len(path.name) > 255:
                raise OSError(errno.ENAMETOOLONG, "File name too long")
            return real_is_file(path)

        commands = "SELECT * FROM " + "a" * 300 + "\nCREATE TABLE t (a)\n"
        with mock.patch.object(Path, "is_file", autospec=True, side_effect=is_file):
            result = self.runner.invoke(cli, ["--data-dir", self.data_dir, "shell"], input=commands)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIsNone(result.exception)
        self.assertIn("Error: Could not access file for table aaa", result.output)
        self.assertIn("Table t created.", result.output)

    def test_shell_ends_on_eof(self):
        result = self.runner.invoke(cli, ["--data-dir", self.data_dir, "shell"], input="")
        self.assertEqual(result.exit_code, 0)


if __name__ == "__main__":
    unittest.main()
