"""
路径辅助工具测试 - 使用unittest模块
"""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from db_driver_tool.utils.path_utils import PathHelper


class TestPathHelper(unittest.TestCase):
    """PathHelper测试类"""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_get_user_config_dir_windows(self):
        """测试Windows系统下的配置目录获取"""
        appdata = self.test_dir / "AppData" / "Roaming"
        with patch("db_driver_tool.utils.path_utils.platform.system") as mock_system:
            with patch.dict("os.environ", {"APPDATA": str(appdata)}):
                mock_system.return_value = "Windows"

                config_dir = PathHelper.get_user_config_dir("test_app")

                self.assertEqual(config_dir, appdata / "test_app")
                self.assertTrue(config_dir.exists())

    def test_get_user_config_dir_macos(self):
        """测试macOS系统下的配置目录获取"""
        with patch("db_driver_tool.utils.path_utils.platform.system") as mock_system:
            with patch("db_driver_tool.utils.path_utils.Path.home") as mock_home:
                mock_system.return_value = "Darwin"
                mock_home.return_value = self.test_dir

                config_dir = PathHelper.get_user_config_dir("test_app")

                expected = self.test_dir / "Library" / "Application Support" / "test_app"
                self.assertEqual(config_dir, expected)
                self.assertTrue(config_dir.exists())

    def test_get_user_config_dir_linux(self):
        """测试Linux系统下的配置目录获取"""
        with patch("db_driver_tool.utils.path_utils.platform.system") as mock_system:
            with patch("db_driver_tool.utils.path_utils.Path.home") as mock_home:
                mock_system.return_value = "Linux"
                mock_home.return_value = self.test_dir

                config_dir = PathHelper.get_user_config_dir("test_app")

                self.assertEqual(config_dir, self.test_dir / ".config" / "test_app")
                self.assertTrue(config_dir.exists())

    def test_get_user_config_dir_invalid_name(self):
        """测试无效的应用名称"""
        with self.assertRaises(ValueError):
            PathHelper.get_user_config_dir("")

    def test_get_user_config_dir_fallback(self):
        """测试标准目录创建失败时回退到当前目录"""
        with patch("db_driver_tool.utils.path_utils.platform.system") as mock_system:
            with patch("db_driver_tool.utils.path_utils.Path.home") as mock_home:
                with patch("db_driver_tool.utils.path_utils.Path.cwd") as mock_cwd:
                    mock_system.return_value = "Linux"
                    # 让 ~/.config 成为普通文件，使目录创建失败
                    blocker = self.test_dir / "home"
                    blocker.mkdir()
                    (blocker / ".config").write_text("", encoding="utf-8")
                    mock_home.return_value = blocker
                    mock_cwd.return_value = self.test_dir

                    config_dir = PathHelper.get_user_config_dir("test_app")

                    self.assertEqual(config_dir, self.test_dir / ".test_app")
                    self.assertTrue(config_dir.exists())

    def test_ensure_dir_exists(self):
        """测试递归创建目录"""
        target = self.test_dir / "a" / "b" / "c"

        self.assertTrue(PathHelper.ensure_dir_exists(target))
        self.assertTrue(target.is_dir())
        # 再次调用，目录已存在
        self.assertTrue(PathHelper.ensure_dir_exists(str(target)))

    def test_ensure_dir_exists_with_file(self):
        """测试同名文件已存在"""
        file_path = self.test_dir / "file.txt"
        file_path.write_text("x", encoding="utf-8")

        self.assertFalse(PathHelper.ensure_dir_exists(file_path))

    def test_ensure_dir_exists_empty(self):
        """测试空路径"""
        self.assertFalse(PathHelper.ensure_dir_exists(""))


if __name__ == "__main__":
    unittest.main()
