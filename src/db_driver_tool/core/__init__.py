"""
数据库驱动工具核心模块

主要功能模块：
- DatabaseDriver: 常见数据库 JDBC 驱动枚举与 URL 识别
- 驱动类名解析: 为数据源配置档案确定驱动类名和 XA 数据源类名
- URL 转换: SQLAlchemy URL 到 JDBC URL 的转换
- ProfileManager: 数据源配置档案的持久化与密码加密
- 异常处理: 统一的异常体系
"""

from .config import ProfileManager
from .crypto import CryptoManager
from .drivers import DatabaseDriver, from_jdbc_url
from .exceptions import (
    ConfigError,
    CryptoError,
    DBDriverToolError,
    DriverError,
    InvalidJdbcUrlError,
    ValidationError,
)
from .resolver import (
    describe_url,
    mask_url,
    resolve_driver_class_name,
    resolve_profile,
    resolve_xa_data_source_class_name,
)
from .urls import driver_for_sqlalchemy_url, to_jdbc_url

__all__ = [
    # ==================== 驱动枚举 ====================
    "DatabaseDriver",
    "from_jdbc_url",
    # ==================== 驱动类名解析 ====================
    "resolve_driver_class_name",
    "resolve_xa_data_source_class_name",
    "resolve_profile",
    "describe_url",
    "mask_url",
    # ==================== URL 转换 ====================
    "to_jdbc_url",
    "driver_for_sqlalchemy_url",
    # ==================== 配置档案管理 ====================
    "ProfileManager",
    "CryptoManager",
    # ==================== 异常处理体系 ====================
    "DBDriverToolError",
    "ConfigError",
    "CryptoError",
    "DriverError",
    "ValidationError",
    "InvalidJdbcUrlError",
]
