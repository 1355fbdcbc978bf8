"""
python -m minisql 入口
"""

from .frontend.cli import main

if __name__ == "__main__":
    main()
