"""
数据源配置档案管理模块

使用 TOML 格式保存命名的数据源配置档案（JDBC URL、可选的显式驱动类名、
用户名与密码），密码字段加密存储，其余字段保持可读。

配置文件结构：
    version = "1.0.0"
    app_name = "db_driver_tool"

    [profiles.orders]
    url = "jdbc:postgresql://localhost:5432/orders"
    username = "app"
    password = "gAAAAAB..."   # Fernet 令牌

    [metadata]
    created = "..."
    last_modified = "..."
"""

import tomllib
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli_w

from ..utils.logging_utils import get_logger
from ..utils.path_utils import PathHelper
from .crypto import CryptoManager
from .drivers import DatabaseDriver
from .exceptions import ConfigError, DBDriverToolError, ValidationError

logger = get_logger(__name__)

CONFIG_VERSION = "1.0.0"

# 需要加密存储的字段
ENCRYPTED_FIELDS = ("password",)

ERROR_EMPTY_PROFILE_NAME = "档案名称不能为空且必须是字符串"
ERROR_INVALID_PROFILE_DICT = "档案配置不能为空且必须是字典"


class ProfileManager:
    """
    数据源配置档案管理器

    Attributes:
        app_name (str): 应用名称，用于确定配置目录
        config_file (str): 配置文件名
        config_dir (Path): 配置目录路径
        config_path (Path): 完整配置文件路径
        key_path (Path): 加密密钥文件路径
        crypto (Optional[CryptoManager]): 加密管理器实例
    """

    def __init__(
        self,
        app_name: str = "db_driver_tool",
        config_file: str = "profiles.toml",
        config_dir: Path | None = None,
    ) -> None:
        """
        初始化配置档案管理器

        Args:
            app_name: 应用名称，用于确定配置目录
            config_file: 配置文件名，默认为"profiles.toml"
            config_dir: 配置目录，为 None 时使用用户配置目录

        Raises:
            ConfigError: 当配置文件或密钥初始化失败时
        """
        self.app_name = app_name
        self.config_file = config_file
        self.config_dir = config_dir or PathHelper.get_user_config_dir(app_name)
        self.config_path = self.config_dir / config_file
        self.key_path = self.config_dir / "encryption.key"
        self.crypto: Optional[CryptoManager] = None
        self._ensure_config_exists()

    def _ensure_config_exists(self) -> None:
        try:
            PathHelper.ensure_dir_exists(self.config_dir)
            if not self.config_path.exists():
                self._create_default_config()
            self._load_or_create_crypto_key()
            logger.debug(f"配置文件就绪: {self.config_path}")
        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"初始化配置文件失败: {str(e)}")
            raise ConfigError(
                f"配置文件初始化失败: {str(e)}",
                "CONFIG_001",
                config_file=str(self.config_path),
            ) from e

    def _create_default_config(self) -> None:
        now = datetime.now().astimezone().isoformat()
        default_config = {
            "version": CONFIG_VERSION,
            "app_name": self.app_name,
            "profiles": {},
            "metadata": {"created": now, "last_modified": now},
        }
        self._save_config(default_config)
        logger.info(f"创建默认配置文件: {self.config_path}")

    def _load_or_create_crypto_key(self) -> None:
        if self.key_path.exists():
            with open(self.key_path, "rb") as f:
                key_data = tomllib.load(f)

            if "password" not in key_data or "salt" not in key_data:
                raise ConfigError(
                    "密钥文件格式无效", "CONFIG_002", config_file=str(self.key_path)
                )

            self.crypto = CryptoManager.from_saved_key(
                key_data["password"], key_data["salt"]
            )
            logger.debug("加密密钥加载成功")
        else:
            self.crypto = CryptoManager()
            with open(self.key_path, "wb") as f:
                tomli_w.dump(self.crypto.get_key_info(), f)
            logger.info(f"新加密密钥已创建: {self.key_path}")

    def _load_config(self) -> Dict[str, Any]:
        try:
            with open(self.config_path, "rb") as f:
                config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"配置文件TOML格式错误: {str(e)}")
            raise ConfigError(
                f"配置文件格式无效: {str(e)}",
                "CONFIG_003",
                config_file=str(self.config_path),
            ) from e
        except OSError as e:
            logger.error(f"加载配置文件失败: {str(e)}")
            raise ConfigError(
                f"配置文件加载失败: {str(e)}",
                "CONFIG_004",
                config_file=str(self.config_path),
            ) from e

        self._validate_config(config)
        return config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        for field in ("version", "app_name", "profiles", "metadata"):
            if field not in config:
                raise ConfigError(
                    f"配置文件缺少必需字段: {field}",
                    "CONFIG_005",
                    config_file=str(self.config_path),
                    config_key=field,
                )

    def _save_config(self, config: Dict[str, Any]) -> None:
        config["metadata"]["last_modified"] = datetime.now().astimezone().isoformat()
        self._validate_config(config)

        try:
            with open(self.config_path, "wb") as f:
                tomli_w.dump(config, f)
        except OSError as e:
            logger.error(f"保存配置文件失败: {str(e)}")
            raise ConfigError(
                f"配置文件保存失败: {str(e)}",
                "CONFIG_006",
                config_file=str(self.config_path),
            ) from e

        logger.debug(f"配置文件已保存: {self.config_path}")

    def _validate_profile(self, name: str, profile: Dict[str, Any]) -> None:
        """
        校验档案内容

        Raises:
            ValidationError: 当缺少 url 或 url 不是字符串时
            InvalidJdbcUrlError: 当 url 不以 "jdbc" 开头时
        """
        url = profile.get("url")
        if not url or not isinstance(url, str):
            raise ValidationError(
                f"档案 {name} 缺少 JDBC URL", "PROFILE_001", field_name="url"
            )

        driver = DatabaseDriver.from_jdbc_url(url)
        if driver is DatabaseDriver.UNKNOWN and not profile.get("driver_class_name"):
            logger.warning(f"档案 {name} 的 URL 无法识别数据库类型，且未指定驱动类名")

    def _encode_profile(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        if self.crypto is None:
            raise ConfigError("加密管理器未初始化，无法加密敏感信息", "CONFIG_007")

        encoded = {}
        for key, value in profile.items():
            # TOML 不支持 None，缺省字段直接省略
            if value is None:
                continue
            if key in ENCRYPTED_FIELDS and value != "":
                value = self.crypto.encrypt(str(value))
            encoded[key] = value
        return encoded

    def _decode_profile(self, stored: Dict[str, Any]) -> Dict[str, Any]:
        if self.crypto is None:
            raise ConfigError("加密管理器未初始化，无法解密敏感信息", "CONFIG_007")

        decoded = dict(stored)
        for key in ENCRYPTED_FIELDS:
            if decoded.get(key):
                decoded[key] = self.crypto.decrypt(decoded[key])
        return decoded

    def add_profile(self, name: str, profile: Dict[str, Any]) -> None:
        """
        添加数据源配置档案

        Args:
            name: 档案名称（唯一标识符）
            profile: 档案配置，必须包含 url

        Raises:
            ValueError: 当名称或配置为空时
            ValidationError: 当 url 缺失或不合法时
            ConfigError: 当档案已存在或保存失败时

        Example:
            >>> manager.add_profile("orders", {
            ...     "url": "jdbc:postgresql://localhost:5432/orders",
            ...     "username": "app",
            ...     "password": "secret",
            ... })
        """
        if not name or not isinstance(name, str):
            raise ValueError(ERROR_EMPTY_PROFILE_NAME)
        if not profile or not isinstance(profile, dict):
            raise ValueError(ERROR_INVALID_PROFILE_DICT)

        self._validate_profile(name, profile)

        try:
            config = self._load_config()
            if name in config["profiles"]:
                raise ConfigError(f"档案已存在: {name}", "CONFIG_008", config_key=name)

            config["profiles"][name] = self._encode_profile(profile)
            self._save_config(config)
            logger.info(f"档案已添加: {name}")

        except DBDriverToolError:
            raise
        except Exception as e:
            logger.error(f"添加档案失败 {name}: {str(e)}")
            raise ConfigError(
                f"档案添加失败: {str(e)}", "CONFIG_009", config_key=name
            ) from e

    def get_profile(self, name: str) -> Dict[str, Any]:
        """
        获取数据源配置档案（密码自动解密）

        Raises:
            ConfigError: 当档案不存在时
            CryptoError: 当密码无法解密时
        """
        if not name or not isinstance(name, str):
            raise ValueError(ERROR_EMPTY_PROFILE_NAME)

        config = self._load_config()
        if name not in config["profiles"]:
            raise ConfigError(f"档案不存在: {name}", "CONFIG_010", config_key=name)

        logger.debug(f"档案已获取: {name}")
        return self._decode_profile(config["profiles"][name])

    def update_profile(self, name: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        更新数据源配置档案

        将 changes 合并到已有档案中，值为 None 的字段会被移除。

        Args:
            name: 档案名称
            changes: 要修改的字段

        Returns:
            Dict[str, Any]: 更新后的档案（明文）

        Raises:
            ConfigError: 当档案不存在或保存失败时
            ValidationError: 当更新后的 url 不合法时
        """
        if not changes or not isinstance(changes, dict):
            raise ValueError(ERROR_INVALID_PROFILE_DICT)

        profile = self.get_profile(name)
        profile.update(changes)
        profile = {k: v for k, v in profile.items() if v is not None}
        self._validate_profile(name, profile)

        config = self._load_config()
        config["profiles"][name] = self._encode_profile(profile)
        self._save_config(config)
        logger.info(f"档案已更新: {name}")
        return profile

    def remove_profile(self, name: str) -> None:
        """
        删除数据源配置档案

        Raises:
            ConfigError: 当档案不存在时
        """
        if not name or not isinstance(name, str):
            raise ValueError(ERROR_EMPTY_PROFILE_NAME)

        config = self._load_config()
        if name not in config["profiles"]:
            raise ConfigError(f"档案不存在: {name}", "CONFIG_010", config_key=name)

        del config["profiles"][name]
        self._save_config(config)
        logger.info(f"档案已删除: {name}")

    def list_profiles(self) -> List[str]:
        """列出所有档案名称，保持添加顺序"""
        return list(self._load_config()["profiles"].keys())

    def get_config_info(self) -> Dict[str, Any]:
        """
        获取配置文件的基本信息

        Returns:
            Dict[str, Any]: 版本、档案数量、创建与修改时间以及文件路径
        """
        config = self._load_config()
        return {
            "version": config["version"],
            "app_name": config["app_name"],
            "profile_count": len(config["profiles"]),
            "created": config["metadata"]["created"],
            "last_modified": config["metadata"]["last_modified"],
            "config_file": str(self.config_path),
        }

    def __repr__(self) -> str:
        return (
            f"ProfileManager(app_name='{self.app_name}', "
            f"config_path='{self.config_path}')"
        )
