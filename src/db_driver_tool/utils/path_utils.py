"""
路径处理工具模块

提供跨平台的用户配置目录获取与目录创建功能，配置档案、加密密钥与
日志文件都存放在该目录下。
"""

import os
import platform
from pathlib import Path


class PathHelper:
    """
    路径辅助类 - 提供跨平台的路径处理功能

    所有方法均为静态方法，无需实例化即可使用。

    Example:
        >>> config_dir = PathHelper.get_user_config_dir("db_driver_tool")
    """

    @staticmethod
    def get_user_config_dir(app_name: str = "db_driver_tool") -> Path:
        """
        获取用户配置目录路径

        根据操作系统类型获取标准的用户配置目录，并创建应用特定的子目录。
        当标准目录创建失败时回退到当前工作目录下的隐藏目录。

        Args:
            app_name: 应用名称，默认为"db_driver_tool"

        Returns:
            Path: 配置目录的Path对象

        Raises:
            ValueError: 当应用名称为空或不是字符串时
            OSError: 当回退目录也无法创建时

        Note:
            - Windows: %APPDATA%\\{app_name}
            - macOS: ~/Library/Application Support/{app_name}
            - Linux: ~/.config/{app_name}
        """
        if not app_name or not isinstance(app_name, str):
            raise ValueError("应用名称不能为空且必须是字符串")

        system = platform.system().lower()

        try:
            if system == "windows":
                base_dir = Path(os.environ.get("APPDATA", Path.home()))
            elif system == "darwin":
                base_dir = Path.home() / "Library" / "Application Support"
            else:
                base_dir = Path.home() / ".config"

            config_dir = base_dir / app_name
            config_dir.mkdir(parents=True, exist_ok=True)
            return config_dir

        except OSError as e:
            fallback_dir = Path.cwd() / f".{app_name}"
            try:
                fallback_dir.mkdir(exist_ok=True)
                return fallback_dir
            except OSError:
                raise OSError(f"无法创建配置目录: {str(e)}") from e

    @staticmethod
    def ensure_dir_exists(dir_path: str | Path) -> bool:
        """
        确保目录存在，如果不存在则递归创建

        Args:
            dir_path: 需要确保存在的目录路径

        Returns:
            bool: 目录存在或创建成功返回 True；路径为空或已存在同名文件返回 False

        Raises:
            OSError: 当目录创建失败时（权限不足等）
        """
        if not dir_path:
            return False

        dir_path_obj = Path(dir_path)
        if dir_path_obj.exists():
            return dir_path_obj.is_dir()

        try:
            dir_path_obj.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            raise OSError(f"无法创建目录 '{dir_path}': {str(e)}") from e
