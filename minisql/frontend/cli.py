"""
MiniSQL 命令行界面
"""

from __future__ import annotations

import sys
from typing import Iterator, List

import click
import sqlparse
from sqlparse.tokens import Comment, Punctuation

from ..core.engine import DatabaseEngine
from ..utils.constants import DEFAULT_DATA_DIR, LOG_LEVEL, PROMPT
from ..utils.exceptions import DatabaseError, UnrecognizedCommandError
from ..utils.logging import get_logger

HELP_TEXT = """
MiniSQL Commands:
  CREATE TABLE table_name (col1,col2,...)
  INSERT INTO table_name VALUES (val1,val2,...)
  SELECT * FROM table_name
  DELETE FROM table_name [WHERE column = value]
  tables
  help
  EXIT
"""


class MiniSQLShell:
    """交互式命令行"""

    def __init__(self, engine: DatabaseEngine):
        self.engine = engine

    def start(self):
        """启动命令行交互"""
        click.echo("Welcome to MiniSQL Engine")
        self._show_help()
        while True:
            try:
                line = input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                click.echo()
                break

            command = line.lstrip()
            if not command:
                continue
            if command.upper() == "EXIT":
                break
            if command.lower() == "help":
                self._show_help()
                continue
            if command.lower() == "tables":
                self._show_tables()
                continue

            try:
                self._echo_lines(self.engine.execute(command)["output"])
            except UnrecognizedCommandError as e:
                click.echo(f"Error: {e}")
                self._show_help()
            except DatabaseError as e:
                click.echo(f"Error: {e}")

    def _echo_lines(self, lines: List[str]):
        for line in lines:
            click.echo(line)

    def _show_help(self):
        click.echo(HELP_TEXT)

    def _show_tables(self):
        tables = self.engine.get_tables()
        if not tables:
            click.echo("(no tables)")
            return
        for name in tables:
            table = self.engine.get_table(name)
            click.echo(f"  {name} ({','.join(table.columns)})")


def iter_script_statements(text: str) -> Iterator[str]:
    """
    逐行切分脚本

    用 sqlparse 分词：括号外的注释被丢弃，括号外的 ';' 分隔同一行的多条命令。
    括号内的内容原样保留，因此 VALUES (a--b) 中的 '--' 不会被当作注释。
    """
    for line in text.splitlines():
        buf: List[str] = []
        depth = 0
        for statement in sqlparse.parse(line):
            for token in statement.flatten():
                if depth == 0 and token.ttype in Comment:
                    continue
                if token.match(Punctuation, "("):
                    depth += 1
                elif token.match(Punctuation, ")"):
                    depth = max(depth - 1, 0)
                elif depth == 0 and token.match(Punctuation, ";"):
                    yield from _flush_statement(buf)
                    continue
                buf.append(token.value)
        yield from _flush_statement(buf)


def _flush_statement(buf: List[str]) -> Iterator[str]:
    statement = "".join(buf).strip()
    buf.clear()
    if statement:
        yield statement


def _open_engine(data_dir: str) -> DatabaseEngine:
    try:
        return DatabaseEngine(data_dir)
    except DatabaseError as e:
        click.echo(f"数据库初始化失败: {e}", err=True)
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--data-dir", default=DEFAULT_DATA_DIR, show_default=True,
              type=click.Path(file_okay=False), help="系统目录和表数据文件所在目录")
@click.option("--log-level", default=LOG_LEVEL, show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="日志级别")
@click.pass_context
def cli(ctx, data_dir, log_level):
    """MiniSQL 命令行工具"""
    get_logger(level=log_level)
    ctx.obj = {"data_dir": data_dir}
    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@cli.command()
@click.pass_obj
def shell(obj):
    """启动交互式命令行"""
    MiniSQLShell(_open_engine(obj["data_dir"])).start()


@cli.command()
@click.argument("script", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def run(obj, script):
    """执行脚本文件中的命令，出错时继续执行，最终以状态码 1 退出"""
    engine = _open_engine(obj["data_dir"])
    failed = False
    for statement in iter_script_statements(script.read()):
        if statement.upper() == "EXIT":
            break
        click.echo(f"{PROMPT}{statement}")
        try:
            lines = engine.execute(statement)["output"]
        except DatabaseError as e:
            lines = [f"Error: {e}"]
            failed = True
        for line in lines:
            click.echo(line)
    if failed:
        sys.exit(1)


def main():
    """主函数"""
    cli()
