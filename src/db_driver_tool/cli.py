"""
DB Driver CLI 工具
==================

提供命令行界面来识别 JDBC URL 对应的数据库驱动，并管理数据源配置档案。

功能特性:
- 根据 JDBC URL 识别数据库类型、驱动类名与 XA 数据源类名
- 列出全部已知驱动
- SQLAlchemy URL 转换为 JDBC URL
- 数据源配置档案管理 (添加、删除、查看、解析)
- 表格与 JSON 两种输出格式

使用示例:
    db-driver detect "jdbc:postgresql://localhost:5432/db"
    db-driver drivers --format json
    db-driver convert "mysql+pymysql://root@localhost/app"
    db-driver add orders --url "jdbc:postgresql://localhost:5432/orders" -u app
    db-driver resolve orders
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.config import ProfileManager
from .core.drivers import DatabaseDriver
from .core.exceptions import DBDriverToolError
from .core.resolver import MASK, describe_url, mask_url, resolve_profile
from .core.urls import to_jdbc_url
from .utils.logging_utils import get_logger, setup_logging

logger = get_logger(__name__)

OUTPUT_FORMATS = ["table", "json"]


class DBDriverCLI:
    """
    DB Driver 命令行接口主类

    Attributes:
        profile_manager (Optional[ProfileManager]): 配置档案管理器，首次使用时创建
        console (Console): rich 控制台，用于表格输出
    """

    def __init__(self, init_logging: bool = True):
        self.profile_manager: Optional[ProfileManager] = None
        self.console = Console()
        if init_logging:
            self.setup_logging()

    def setup_logging(self) -> None:
        """设置日志系统，CLI 的提示信息直接打印，日志只写入文件"""
        try:
            setup_logging(level="INFO", log_to_console=False)
        except (OSError, ValueError) as e:
            print(f"❌ 日志系统初始化失败: {e}")
            sys.exit(1)

    def _ensure_profile_manager(self) -> ProfileManager:
        if self.profile_manager is None:
            try:
                self.profile_manager = ProfileManager()
                logger.info("配置档案管理器初始化成功")
            except DBDriverToolError as e:
                self._fail(f"初始化配置档案管理器失败: {e}")
        return self.profile_manager

    def _fail(self, message: str) -> None:
        logger.error(message)
        print(f"❌ {message}")
        sys.exit(1)

    # ==================== 驱动识别 ====================

    def detect(self, args: argparse.Namespace) -> None:
        """识别 JDBC URL 对应的数据库驱动"""
        try:
            info = describe_url(args.url)
        except DBDriverToolError as e:
            self._fail(f"URL 识别失败: {e}")

        if args.format == "json":
            self._print_json(info)
            return

        self._display_mapping(info, title="🔍 驱动识别结果")
        if info["driver"] == DatabaseDriver.UNKNOWN.name:
            print("ℹ️  未能识别数据库类型")

    def list_drivers(self, args: argparse.Namespace) -> None:
        """列出全部已知驱动"""
        rows = [driver.to_dict() for driver in DatabaseDriver.known()]

        if args.format == "json":
            self._print_json(rows)
            return

        table = Table(title="📋 已知数据库驱动", show_header=True, header_style="bold magenta")
        table.add_column("名称", style="cyan", no_wrap=True)
        table.add_column("驱动类名", style="green", overflow="fold")
        table.add_column("XA 数据源类名", style="yellow", overflow="fold")
        for row in rows:
            table.add_row(
                row["name"],
                row["driver_class_name"],
                row["xa_data_source_class_name"] or "-",
            )
        self.console.print(table)

    def convert(self, args: argparse.Namespace) -> None:
        """将 SQLAlchemy URL 转换为 JDBC URL 并识别驱动"""
        try:
            jdbc_url = to_jdbc_url(args.url)
            info = describe_url(jdbc_url)
        except DBDriverToolError as e:
            self._fail(f"URL 转换失败: {e}")

        info = {"sqlalchemy_url": mask_url(args.url), **info}
        if args.format == "json":
            self._print_json(info)
        else:
            self._display_mapping(info, title="🔁 URL 转换结果")

    # ==================== 配置档案管理 ====================

    def add_profile(self, args: argparse.Namespace) -> None:
        """添加数据源配置档案"""
        manager = self._ensure_profile_manager()

        profile = {
            "url": args.url,
            "driver_class_name": args.driver_class_name,
            "xa_data_source_class_name": args.xa_data_source_class_name,
            "username": args.username,
            "password": args.password,
        }
        profile = {k: v for k, v in profile.items() if v is not None}

        try:
            manager.add_profile(args.name, profile)
        except (DBDriverToolError, ValueError) as e:
            self._fail(f"添加档案失败: {e}")

        print(f"✅ 档案 '{args.name}' 添加成功")

    def remove_profile(self, args: argparse.Namespace) -> None:
        """删除数据源配置档案"""
        manager = self._ensure_profile_manager()
        try:
            manager.remove_profile(args.name)
        except (DBDriverToolError, ValueError) as e:
            self._fail(f"删除档案失败: {e}")

        print(f"✅ 档案 '{args.name}' 已删除")

    def show_profile(self, args: argparse.Namespace) -> None:
        """显示档案详情，密码脱敏"""
        manager = self._ensure_profile_manager()
        try:
            profile = manager.get_profile(args.name)
        except (DBDriverToolError, ValueError) as e:
            self._fail(f"获取档案失败: {e}")

        self._display_mapping(self._sanitize(profile), title=f"📄 档案: {args.name}")

    def list_profiles(self, _args: argparse.Namespace) -> None:
        """列出全部档案名称"""
        manager = self._ensure_profile_manager()
        try:
            names = manager.list_profiles()
        except DBDriverToolError as e:
            self._fail(f"列出档案失败: {e}")

        if not names:
            print("ℹ️  暂无数据源配置档案")
            return

        table = Table(title="📋 数据源配置档案", show_header=True, header_style="bold magenta")
        table.add_column("序号", style="cyan", justify="center")
        table.add_column("档案名称", style="magenta")
        for i, name in enumerate(names, 1):
            table.add_row(str(i), name)
        self.console.print(table)
        self.console.print(f"📊 总共 {len(names)} 个档案")

    def resolve(self, args: argparse.Namespace) -> None:
        """解析档案应使用的驱动类名"""
        manager = self._ensure_profile_manager()
        try:
            resolved = resolve_profile(manager.get_profile(args.name))
        except (DBDriverToolError, ValueError) as e:
            self._fail(f"解析档案失败: {e}")

        resolved = self._sanitize(resolved)
        if args.format == "json":
            self._print_json(resolved)
        else:
            self._display_mapping(resolved, title=f"🔧 档案解析结果: {args.name}")

    # ==================== 输出 ====================

    def _sanitize(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        sanitized = dict(profile)
        if sanitized.get("password"):
            sanitized["password"] = MASK
        if sanitized.get("url"):
            sanitized["url"] = mask_url(sanitized["url"])
        return sanitized

    def _print_json(self, data: Any) -> None:
        print(json.dumps(data, indent=2, ensure_ascii=False))

    def _display_mapping(self, data: Dict[str, Any], title: str) -> None:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("属性", style="cyan", no_wrap=True)
        table.add_column("值", style="green", overflow="fold")
        for key, value in data.items():
            table.add_row(key, "-" if value is None else escape(str(value)))
        self.console.print(table)


class ChineseHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """中文帮助格式化器"""

    def _format_usage(self, usage, actions, groups, prefix):
        if prefix is None:
            prefix = "\n使用情况: "
        return super()._format_usage(usage, actions, groups, prefix)

    def start_section(self, heading):
        if heading == "options":
            heading = "下列选项可用"
        super().start_section(heading)


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="table",
        help="输出格式 (默认: table)",
    )


def create_argument_parser(cli_instance: DBDriverCLI) -> argparse.ArgumentParser:
    """
    创建命令行参数解析器

    Args:
        cli_instance: 已初始化的CLI实例

    Returns:
        argparse.ArgumentParser: 配置好的参数解析器
    """
    parser = argparse.ArgumentParser(
        prog="db-driver",
        usage="db-driver [<命令>] [<选项>]",
        description="DB Driver - JDBC 驱动识别与数据源档案管理工具",
        formatter_class=ChineseHelpFormatter,
        epilog="""
使用示例:
  db-driver detect "jdbc:postgresql://localhost:5432/db"
  db-driver drivers --format json
  db-driver convert "mysql+pymysql://root@localhost/app"
  db-driver add orders --url "jdbc:postgresql://localhost:5432/orders" -u app
  db-driver resolve orders
        """,
        add_help=False,
    )
    parser.add_argument(
        "-h",
        "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="显示选定命令的帮助信息",
    )

    subparsers = parser.add_subparsers(title="下列命令有效", dest="command")

    # detect 命令
    detect_parser = subparsers.add_parser("detect", help="识别 JDBC URL 对应的驱动")
    detect_parser.add_argument("url", help="JDBC URL")
    _add_format_argument(detect_parser)
    detect_parser.set_defaults(func=cli_instance.detect)

    # drivers 命令
    drivers_parser = subparsers.add_parser("drivers", help="列出全部已知驱动")
    _add_format_argument(drivers_parser)
    drivers_parser.set_defaults(func=cli_instance.list_drivers)

    # convert 命令
    convert_parser = subparsers.add_parser("convert", help="SQLAlchemy URL 转换为 JDBC URL")
    convert_parser.add_argument("url", help="SQLAlchemy URL")
    _add_format_argument(convert_parser)
    convert_parser.set_defaults(func=cli_instance.convert)

    # add 命令
    add_parser = subparsers.add_parser("add", help="添加数据源配置档案")
    add_parser.add_argument("name", help="档案名称")
    add_parser.add_argument("--url", required=True, help="JDBC URL")
    add_parser.add_argument("-D", "--driver-class-name", help="显式指定驱动类名")
    add_parser.add_argument("-X", "--xa-data-source-class-name", help="显式指定 XA 数据源类名")
    add_parser.add_argument("-u", "--username", help="用户名")
    add_parser.add_argument("-p", "--password", help="密码")
    add_parser.set_defaults(func=cli_instance.add_profile)

    # remove 命令
    remove_parser = subparsers.add_parser("remove", help="删除数据源配置档案")
    remove_parser.add_argument("name", help="档案名称")
    remove_parser.set_defaults(func=cli_instance.remove_profile)

    # show 命令
    show_parser = subparsers.add_parser("show", help="显示档案详情")
    show_parser.add_argument("name", help="档案名称")
    show_parser.set_defaults(func=cli_instance.show_profile)

    # list 命令
    list_parser = subparsers.add_parser("list", help="列出所有档案")
    list_parser.set_defaults(func=cli_instance.list_profiles)

    # resolve 命令
    resolve_parser = subparsers.add_parser("resolve", help="解析档案使用的驱动类名")
    resolve_parser.add_argument("name", help="档案名称")
    _add_format_argument(resolve_parser)
    resolve_parser.set_defaults(func=cli_instance.resolve)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """DB Driver CLI 主入口函数"""
    argv = sys.argv[1:] if argv is None else argv
    cli = DBDriverCLI()
    parser = create_argument_parser(cli)

    if not argv:
        parser.print_help()
        sys.exit(0)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
