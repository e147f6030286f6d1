"""
日志配置测试
"""

import logging
import logging.handlers
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from db_driver_tool.utils.logging_utils import get_logger, set_log_level, setup_logging


class TestLoggingUtils:
    """日志工具测试类"""

    def setup_method(self):
        """保存root logger级别"""
        self.test_dir = Path(tempfile.mkdtemp())
        self.root_logger = logging.getLogger()
        self.saved_level = self.root_logger.level

    def teardown_method(self):
        """移除setup_logging添加的handler并恢复级别"""
        for handler in self.root_logger.handlers[:]:
            if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
                self.root_logger.removeHandler(handler)
                handler.close()
        self.root_logger.setLevel(self.saved_level)
        logging.getLogger("db_driver_tool.core").setLevel(logging.NOTSET)
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_console_only(self):
        """测试只输出到控制台"""
        setup_logging("test_app", "DEBUG", log_to_file=False)

        assert self.root_logger.level == logging.DEBUG
        assert len(self.root_logger.handlers) == 1
        assert isinstance(self.root_logger.handlers[0], logging.StreamHandler)

    def test_file_logging(self):
        """测试滚动文件日志"""
        with patch(
            "db_driver_tool.utils.logging_utils.PathHelper.get_user_config_dir",
            return_value=self.test_dir,
        ):
            setup_logging("test_app", "INFO", log_to_console=False)

        handlers = self.root_logger.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)

        get_logger("db_driver_tool.test").info("写入日志文件")
        handlers[0].flush()

        log_file = self.test_dir / "logs" / "test_app.log"
        assert "写入日志文件" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_does_not_duplicate_handlers(self):
        """测试重复配置不会叠加handler"""
        setup_logging("test_app", log_to_file=False)
        setup_logging("test_app", log_to_file=False)

        assert len(self.root_logger.handlers) == 1

    def test_invalid_level(self):
        """测试无效的日志级别"""
        with pytest.raises(ValueError):
            setup_logging("test_app", "VERBOSE", log_to_file=False)

    def test_no_output_enabled(self):
        """测试未启用任何输出"""
        with pytest.raises(ValueError):
            setup_logging("test_app", log_to_console=False, log_to_file=False)

    def test_set_log_level(self):
        """测试动态设置日志级别"""
        set_log_level("db_driver_tool.core", "warning")

        assert logging.getLogger("db_driver_tool.core").level == logging.WARNING

        with pytest.raises(ValueError):
            set_log_level("db_driver_tool.core", "TRACE")

    def test_get_logger(self):
        """测试获取logger"""
        assert get_logger("db_driver_tool.cli").name == "db_driver_tool.cli"


if __name__ == "__main__":
    pytest.main()
