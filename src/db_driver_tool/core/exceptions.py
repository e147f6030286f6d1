"""
数据库驱动工具自定义异常模块

提供项目专用的异常类层次结构，用于更精确地处理不同类型的错误。

异常类层次结构：
DBDriverToolError
├── ConfigError (配置档案存储相关异常)
├── CryptoError (加密解密相关异常)
├── DriverError (驱动类名无法确定)
└── ValidationError (数据验证异常)
    └── InvalidJdbcUrlError (JDBC URL 前缀不合法，同时也是 ValueError)
"""

from typing import Any, Dict


class DBDriverToolError(Exception):
    """
    数据库驱动工具基础异常类

    所有自定义异常的基类，提供统一的异常处理接口。
    支持错误代码、详细信息和字典格式转换。

    Attributes:
        message (str): 异常描述信息
        error_code (str | None): 错误代码，用于错误分类和识别
        details (Dict[str, Any]): 详细的错误信息字典

    Example:
        >>> try:
        ...     raise DBDriverToolError("测试异常", "TEST_001", {"key": "value"})
        ... except DBDriverToolError as e:
        ...     print(e.to_dict())
        {'error_type': 'DBDriverToolError', 'message': '测试异常',
         'error_code': 'TEST_001', 'details': {'key': 'value'}}
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """
        返回异常的字符串表示

        Example:
            >>> str(DBDriverToolError("无法识别", "DRIVER_001"))
            'DBDriverToolError: 无法识别 (错误代码: DRIVER_001)'
        """
        base_str = f"{self.__class__.__name__}: {self.message}"
        if self.error_code:
            base_str += f" (错误代码: {self.error_code})"
        return base_str

    def to_dict(self) -> Dict[str, Any]:
        """
        将异常信息转换为字典格式，便于序列化和日志记录

        Returns:
            Dict[str, Any]: 包含异常信息的字典
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigError(DBDriverToolError):
    """
    配置相关异常

    处理配置档案文件读取、解析、保存等过程中出现的错误。

    Attributes:
        config_file (str | None): 相关的配置文件路径
        config_key (str | None): 相关的配置键（通常是档案名称）
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        config_file: str | None = None,
        config_key: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.config_file = config_file
        self.config_key = config_key

        # 自动填充配置相关的详细信息
        if config_file:
            self.details["config_file"] = config_file
        if config_key:
            self.details["config_key"] = config_key


class CryptoError(DBDriverToolError):
    """
    加密解密相关异常

    Attributes:
        operation (str | None): 加密操作类型（encrypt/decrypt/derive_key）
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        operation: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.operation = operation

        if operation:
            self.details["operation"] = operation


class DriverError(DBDriverToolError):
    """
    数据库驱动异常

    当无法为数据源确定驱动类名或 XA 数据源类名时抛出。

    Attributes:
        driver_name (str | None): 识别出的驱动枚举名称（如 SQLITE）
        url (str | None): 相关的 JDBC URL（仅保存在属性中，不写入 details）
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        driver_name: str | None = None,
        url: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.driver_name = driver_name
        self.url = url

        if driver_name:
            self.details["driver_name"] = driver_name


class ValidationError(DBDriverToolError):
    """
    数据验证异常

    处理参数验证、URL 格式验证等过程中出现的错误。

    Attributes:
        field_name (str | None): 验证失败的字段名
        expected_type (str | None): 期望的数据类型或格式
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        field_name: str | None = None,
        expected_type: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.field_name = field_name
        self.expected_type = expected_type

        if field_name:
            self.details["field_name"] = field_name
        if expected_type:
            self.details["expected_type"] = expected_type


class InvalidJdbcUrlError(ValidationError, ValueError):
    """
    JDBC URL 不合法异常

    非空 URL 未以 "jdbc" 开头时抛出，属于调用方的编程错误，
    不会在内部被重试或恢复。

    Attributes:
        url (str): 不合法的 URL（可能包含凭据，因此不写入 details）
    """

    ERROR_CODE = "URL_001"

    def __init__(self, url: str, message: str = "URL must start with 'jdbc'") -> None:
        super().__init__(
            message,
            self.ERROR_CODE,
            field_name="url",
            expected_type="jdbc:<subprotocol>:...",
        )
        self.url = url
