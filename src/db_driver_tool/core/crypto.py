"""
加密管理模块

使用 cryptography.fernet 对数据源配置档案中的密码进行对称加密，
密钥通过 PBKDF2 从随机口令与盐值派生。
"""

import base64
import secrets
from typing import Any, Dict

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..utils.logging_utils import get_logger
from .exceptions import CryptoError

logger = get_logger(__name__)


class CryptoManager:
    """
    加密管理器类

    Attributes:
        SALT_LENGTH (int): 盐值长度（字节）
        PASSWORD_LENGTH (int): 自动生成口令的随机字节数
        ITERATIONS (int): PBKDF2 迭代次数
    """

    SALT_LENGTH = 16
    PASSWORD_LENGTH = 32
    ITERATIONS = 480000  # OWASP 推荐的迭代次数

    def __init__(self, password: str | None = None, salt: bytes | None = None):
        """
        初始化加密管理器

        Args:
            password: 派生密钥用的口令，为 None 时自动生成
            salt: 盐值，为 None 时自动生成

        Raises:
            CryptoError: 当密钥派生失败时
        """
        self.password = password or base64.urlsafe_b64encode(
            secrets.token_bytes(self.PASSWORD_LENGTH)
        ).decode("utf-8")
        self.salt = salt or secrets.token_bytes(self.SALT_LENGTH)
        self.fernet = self._derive_fernet()

    def _derive_fernet(self) -> Fernet:
        try:
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=32,
                salt=self.salt,
                iterations=self.ITERATIONS,
            )
            key = base64.urlsafe_b64encode(kdf.derive(self.password.encode("utf-8")))
            return Fernet(key)
        except Exception as e:
            logger.error(f"加密密钥派生失败: {str(e)}")
            raise CryptoError(
                f"加密密钥派生失败: {str(e)}", "CRYPTO_001", operation="derive_key"
            ) from e

    def encrypt(self, data: str) -> str:
        """
        加密字符串

        Args:
            data: 明文字符串

        Returns:
            str: Fernet 令牌字符串

        Raises:
            ValueError: 当输入为空或不是字符串时
        """
        if not data or not isinstance(data, str):
            raise ValueError("加密数据不能为空且必须是字符串")

        return self.fernet.encrypt(data.encode("utf-8")).decode("utf-8")

    def decrypt(self, token: str) -> str:
        """
        解密 Fernet 令牌

        Args:
            token: encrypt 返回的令牌字符串

        Returns:
            str: 原始明文

        Raises:
            ValueError: 当输入为空或不是字符串时
            CryptoError: 当令牌被篡改或密钥不匹配时
        """
        if not token or not isinstance(token, str):
            raise ValueError("加密数据不能为空且必须是字符串")

        try:
            return self.fernet.decrypt(token.encode("utf-8")).decode("utf-8")
        except InvalidToken as e:
            logger.error("解密令牌无效")
            raise CryptoError(
                "解密失败: 加密数据可能被篡改或密钥不匹配",
                "CRYPTO_002",
                operation="decrypt",
            ) from e

    def get_key_info(self) -> Dict[str, Any]:
        """
        获取用于持久化的密钥信息

        Warning:
            返回值可直接解密所有档案密码，应妥善保存。
        """
        return {
            "salt": base64.urlsafe_b64encode(self.salt).decode("utf-8"),
            "password": self.password,
            "iterations": self.ITERATIONS,
        }

    @classmethod
    def from_saved_key(cls, password: str, salt: str) -> "CryptoManager":
        """
        从保存的密钥信息恢复加密管理器

        Args:
            password: 之前保存的口令
            salt: base64 编码的盐值

        Raises:
            ValueError: 当口令或盐值为空时
            CryptoError: 当盐值无法解码时
        """
        if not password or not salt:
            raise ValueError("密码和盐值不能为空")

        try:
            salt_bytes = base64.urlsafe_b64decode(salt.encode("utf-8"))
        except (ValueError, TypeError) as e:
            raise CryptoError(
                f"密钥恢复失败: {str(e)}", "CRYPTO_003", operation="load_key"
            ) from e
        return cls(password, salt_bytes)

    def __repr__(self) -> str:
        return f"<CryptoManager salt_length={len(self.salt)}, iterations={self.ITERATIONS}>"
