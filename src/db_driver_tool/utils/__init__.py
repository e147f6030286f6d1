"""
数据库驱动工具通用工具模块

- 日志管理：setup_logging / get_logger / set_log_level
- 路径处理：PathHelper
"""

from .logging_utils import get_logger, set_log_level, setup_logging
from .path_utils import PathHelper

__all__ = [
    "setup_logging",
    "get_logger",
    "set_log_level",
    "PathHelper",
]
