"""
数据库驱动枚举模块

定义常见数据库的 JDBC 驱动类名与 XA 数据源类名，并提供根据 JDBC URL
识别数据库类型的查找函数。

特性：
- 封闭的枚举集合，导入时构建，运行期间不可变
- 按声明顺序匹配 URL 前缀，首个匹配项胜出
- 纯函数查找，无副作用，可在任意线程中并发调用

使用示例：
    >>> from db_driver_tool.core.drivers import DatabaseDriver
    >>> driver = DatabaseDriver.from_jdbc_url("jdbc:postgresql://localhost:5432/db")
    >>> driver.driver_class_name
    'org.postgresql.Driver'
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import InvalidJdbcUrlError

# JDBC URL 的固定前缀（区分大小写）
JDBC_PREFIX = "jdbc"


class DatabaseDriver(Enum):
    """
    常见数据库驱动枚举

    每个成员的值为 (驱动类名, XA 数据源类名) 元组，缺省的类名为 None。
    成员的声明顺序即 URL 匹配顺序，调整顺序会改变匹配结果。
    """

    UNKNOWN = (None, None)
    DERBY = ("org.apache.derby.jdbc.EmbeddedDriver", None)
    H2 = ("org.h2.Driver", "org.h2.jdbcx.JdbcDataSource")
    HSQLDB = ("org.hsqldb.jdbc.JDBCDriver", "org.hsqldb.jdbc.pool.JDBCXADataSource")
    SQLITE = ("org.sqlite.JDBC", None)
    MYSQL = ("com.mysql.jdbc.Driver", "org.mysql.jdbc.MySQLDataSource")
    MARIADB = ("org.mariadb.jdbc.Driver", "org.mariadb.jdbc.MySQLDataSource")
    GOOGLE = ("com.google.appengine.api.rdbms.AppEngineDriver", None)
    ORACLE = ("oracle.jdbc.OracleDriver", "oracle.jdbc.xa.client.OracleXADataSource")
    POSTGRESQL = ("org.postgresql.Driver", "org.postgresql.xa.PGXADataSource")
    JTDS = ("net.sourceforge.jtds.jdbc.Driver", None)
    SQLSERVER = (
        "com.microsoft.sqlserver.jdbc.SQLServerDriver",
        "com.microsoft.sqlserver.jdbc.SQLServerXADataSource",
    )
    DB2 = ("com.ibm.db2.jcc.DB2Driver", "com.ibm.db2.jcc.DB2XADataSource")
    AS400 = (
        "com.ibm.as400.access.AS400JDBCDriver",
        "com.ibm.as400.access.AS400JDBCXADataSource",
    )

    def __init__(
        self,
        driver_class_name: Optional[str],
        xa_data_source_class_name: Optional[str] = None,
    ) -> None:
        self._driver_class_name = driver_class_name
        self._xa_data_source_class_name = xa_data_source_class_name

    @property
    def driver_class_name(self) -> Optional[str]:
        """驱动类名，未知类型返回 None"""
        return self._driver_class_name

    @property
    def xa_data_source_class_name(self) -> Optional[str]:
        """XA 数据源类名，不支持 XA 的类型返回 None"""
        return self._xa_data_source_class_name

    @property
    def url_prefix(self) -> str:
        """去掉 "jdbc" 后用于匹配的前缀，例如 ":mysql:" """
        return f":{self.name.lower()}:"

    @classmethod
    def known(cls) -> List["DatabaseDriver"]:
        """
        返回除 UNKNOWN 外的全部驱动，保持声明顺序

        Returns:
            List[DatabaseDriver]: 已知驱动列表
        """
        return [driver for driver in cls if driver is not cls.UNKNOWN]

    @classmethod
    def from_jdbc_url(cls, url: Optional[str]) -> "DatabaseDriver":
        """
        根据 JDBC URL 查找对应的数据库驱动

        空字符串或 None 直接返回 UNKNOWN。非空 URL 必须以 "jdbc" 开头
        （区分大小写），其余部分转为小写后按声明顺序逐个匹配 ":<名称>:" 前缀。

        Args:
            url: JDBC URL

        Returns:
            DatabaseDriver: 匹配的驱动，无匹配时返回 UNKNOWN

        Raises:
            InvalidJdbcUrlError: 当非空 URL 不以 "jdbc" 开头时
            TypeError: 当 url 既不是字符串也不是 None 时

        Example:
            >>> DatabaseDriver.from_jdbc_url("jdbc:h2:mem:testdb")
            <DatabaseDriver.H2: ('org.h2.Driver', 'org.h2.jdbcx.JdbcDataSource')>
            >>> DatabaseDriver.from_jdbc_url("")
            <DatabaseDriver.UNKNOWN: (None, None)>
        """
        if url is None:
            return cls.UNKNOWN
        if not isinstance(url, str):
            raise TypeError(f"URL 必须是字符串，实际类型: {type(url).__name__}")
        if not url:
            return cls.UNKNOWN

        if not url.startswith(JDBC_PREFIX):
            raise InvalidJdbcUrlError(url)

        url_without_prefix = url[len(JDBC_PREFIX) :].lower()
        for driver in cls.known():
            if url_without_prefix.startswith(driver.url_prefix):
                return driver
        return cls.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """
        将驱动信息转换为字典格式，便于 JSON 输出

        Returns:
            Dict[str, Any]: 包含名称、驱动类名和 XA 数据源类名的字典
        """
        return {
            "name": self.name,
            "driver_class_name": self.driver_class_name,
            "xa_data_source_class_name": self.xa_data_source_class_name,
        }

    def __str__(self) -> str:
        return self.name


def from_jdbc_url(url: Optional[str]) -> DatabaseDriver:
    """模块级快捷函数，等价于 DatabaseDriver.from_jdbc_url"""
    return DatabaseDriver.from_jdbc_url(url)
