"""
日志配置模块

提供统一的日志配置功能，支持控制台日志与滚动文件日志输出。
"""

import logging
import logging.handlers
import sys
from typing import Optional

from .path_utils import PathHelper

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s [%(filename)s:%(lineno)d]"
)


def _parse_level(level: str) -> int:
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(f"无效的日志级别: {level}，有效值为: {VALID_LOG_LEVELS}")
    return getattr(logging, level_upper)


def setup_logging(
    app_name: str = "db_driver_tool",
    level: str = "INFO",
    log_to_console: bool = True,
    log_to_file: bool = True,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    配置日志系统

    初始化并配置 root logger，支持控制台和滚动文件日志输出。
    重复调用会先清除已有的 handler，避免日志重复输出。

    Args:
        app_name: 应用名称，用于确定日志目录和日志文件名
        level: 日志级别，可选值：DEBUG, INFO, WARNING, ERROR, CRITICAL
        log_to_console: 是否输出到控制台
        log_to_file: 是否输出到文件
        max_file_size: 单个日志文件最大大小（字节）
        backup_count: 保留的备份日志文件数量
        log_format: 自定义日志格式字符串，为None时使用默认格式

    Returns:
        logging.Logger: 本模块的logger实例

    Raises:
        ValueError: 当日志级别无效或未启用任何输出方式时
        OSError: 当无法创建日志目录或文件时

    Example:
        >>> logger = setup_logging("db_driver_tool", "DEBUG", log_to_file=False)
    """
    log_level = _parse_level(level)

    if not log_to_console and not log_to_file:
        raise ValueError("至少需要启用一种日志输出方式（控制台或文件）")

    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 清除已有的handler，避免重复配置
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_file = None
    if log_to_file:
        log_dir = PathHelper.get_user_config_dir(app_name) / "logs"
        if not PathHelper.ensure_dir_exists(log_dir):
            raise OSError(f"无法创建日志目录: {log_dir}")

        log_file = log_dir / f"{app_name}.log"
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            raise OSError(f"无法创建日志文件 {log_file}: {str(e)}") from e
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)

    logger = logging.getLogger(__name__)
    logger.debug(f"日志系统初始化完成 - 级别: {level.upper()}, 日志文件: {log_file}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    获取指定名称的logger

    Args:
        name: logger名称，通常使用模块名（如：__name__）

    Returns:
        logging.Logger: logger实例
    """
    return logging.getLogger(name)


def set_log_level(logger_name: str, level: str) -> None:
    """
    动态设置指定logger及其handler的日志级别

    Args:
        logger_name: logger名称
        level: 新的日志级别

    Raises:
        ValueError: 当日志级别无效时

    Example:
        >>> set_log_level("db_driver_tool.core", "DEBUG")
    """
    log_level = _parse_level(level)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)
