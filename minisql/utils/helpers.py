"""
通用辅助函数
"""

from __future__ import annotations

from pathlib import Path

__all__ = ["ensure_dir", "strip_whitespace"]


def ensure_dir(path: str | Path) -> Path:
    """确保目录存在并返回 Path。"""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def strip_whitespace(s: str) -> str:
    """删除字符串中的所有空白字符（包括内部空白）。"""
    return "".join(s.split())
