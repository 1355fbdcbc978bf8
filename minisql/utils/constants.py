"""
系统常量定义
"""

# 数据目录（相对于当前工作目录）
DEFAULT_DATA_DIR = "data"

# 系统目录日志文件：每行 name,col1,col2,...
CATALOG_FILE = "catalog.txt"

# 表数据文件：<表名>.txt，每行一条记录
TABLE_FILE_SUFFIX = ".txt"
FIELD_DELIMITER = ","

# DELETE 重写时使用的临时文件
TEMP_FILE_PREFIX = "temp_"
TEMP_FILE_SUFFIX = ".tmp"

FILE_ENCODING = "utf-8"

# --- 日志配置 ---
LOG_LEVEL = "WARNING"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# --- 命令行 ---
PROMPT = "MiniSQL> "
NO_DATA_MESSAGE = "(no data found)"
