"""
数据库系统主程序入口
"""

from minisql.frontend.cli import cli

if __name__ == '__main__':
    cli()
