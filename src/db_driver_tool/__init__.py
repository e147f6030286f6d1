# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
DB Driver Tool - JDBC 驱动识别与数据源档案管理模块
==================================================

根据 JDBC URL 识别数据库类型，给出对应的 JDBC 驱动类名与 XA 数据源类名。

主要特性:
- 支持 Derby, H2, HSQLDB, SQLite, MySQL, MariaDB, Google App Engine,
  Oracle, PostgreSQL, jTDS, SQL Server, DB2, AS400
- SQLAlchemy URL 到 JDBC URL 的转换
- 数据源配置档案管理，密码加密存储
- 命令行界面和API接口

使用示例:
    >>> from db_driver_tool import DatabaseDriver
    >>> driver = DatabaseDriver.from_jdbc_url("jdbc:h2:mem:testdb")
    >>> driver.xa_data_source_class_name
    'org.h2.jdbcx.JdbcDataSource'
"""

__version__ = "0.1.0"

from .core.config import ProfileManager
from .core.drivers import DatabaseDriver, from_jdbc_url
from .core.exceptions import (
    ConfigError,
    CryptoError,
    DBDriverToolError,
    DriverError,
    InvalidJdbcUrlError,
    ValidationError,
)
from .core.resolver import (
    describe_url,
    resolve_driver_class_name,
    resolve_profile,
    resolve_xa_data_source_class_name,
)
from .core.urls import driver_for_sqlalchemy_url, to_jdbc_url

__all__ = [
    # 驱动枚举
    "DatabaseDriver",
    "from_jdbc_url",
    # 驱动类名解析
    "resolve_driver_class_name",
    "resolve_xa_data_source_class_name",
    "resolve_profile",
    "describe_url",
    # URL 转换
    "to_jdbc_url",
    "driver_for_sqlalchemy_url",
    # 配置档案管理
    "ProfileManager",
    # 异常类
    "DBDriverToolError",
    "ConfigError",
    "CryptoError",
    "DriverError",
    "ValidationError",
    "InvalidJdbcUrlError",
]
