# -*- coding: utf-8 -*-
"""
adams-bootstrap 命令行接口
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from .bootstrap import Bootstrapper
from .config import BootstrapConfig, load_defaults, merge_options
from .exceptions import BootstrapError, ConfigurationError
from .logger import level_from_flags, setup_logging

# 退出码
EXIT_OK = 0
EXIT_OPTIONS = 1
EXIT_FAILURE = 2


class _ArgumentParser(argparse.ArgumentParser):
    """选项解析失败时以退出码 1 结束"""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(EXIT_OPTIONS, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """配置并返回命令行解析器"""
    parser = _ArgumentParser(
        prog="adams-bootstrap",
        description="Allows bootstrapping of ADAMS applications by simply supplying the modules.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("-m", "--maven_home", metavar="DIR", help="The directory with a local Maven installation to use instead of the one on the PATH.")
    parser.add_argument("-u", "--maven_user_settings", metavar="FILE", help="The file with the maven user settings to use other than the instant-adams one.")
    parser.add_argument("-j", "--java_home", metavar="DIR", help="The Java home to use for the Maven execution.")
    parser.add_argument("-p", "--pom_template", metavar="FILE", help="The alternative Jinja2 template for the pom.xml to use.")
    parser.add_argument("-n", "--name", help="The name to use for the project in the pom.xml and for the launch scripts (default: adams).")
    parser.add_argument("-M", "--module", dest="modules", help="The comma-separated list of ADAMS modules to use for the application, e.g.: adams-weka,adams-groovy,adams-excel")
    parser.add_argument("-V", "--version", help="The version of ADAMS to use, e.g., '20.1.1' or '20.2.0-SNAPSHOT'.")
    parser.add_argument("-d", "--dependency", dest="dependencies", action="append", metavar="DEPENDENCY", help="Additional maven dependency (group:artifact:version), e.g.: nz.ac.waikato.cms.weka:kfGroovy:1.0.12")
    parser.add_argument("-D", "--dependency-file", dest="dependency_files", action="append", metavar="FILE", help="File with additional maven dependencies (group:artifact:version), one dependency per line.")
    parser.add_argument("-J", "--external-jar", dest="external_jars", action="append", metavar="JAR_OR_DIR", help="External jar or directory with jar files to also include in the application.")
    parser.add_argument("-s", "--sources", action="store_true", default=None, help="If enabled, source jars of all the Maven artifacts get downloaded as well and stored in a separate directory.")
    parser.add_argument("-S", "--external-source", dest="external_sources", action="append", metavar="JAR_OR_DIR", help="External source jar or directory with source jar files to also include in the application.")
    parser.add_argument("-o", "--output_dir", metavar="DIR", help="The directory to output the bootstrapped ADAMS application in.")
    parser.add_argument("-C", "--clean", action="store_true", default=None, help="If enabled, the 'clean' goal gets executed.")
    parser.add_argument("-v", "--jvm", action="append", help="Parameter to pass to the JVM before launching the application in the scripts.")
    parser.add_argument("-c", "--main_class", metavar="CLASSNAME", help="The main class to launch in the scripts (default: adams.gui.Main).")
    parser.add_argument("-l", "--list_modules", action="store_true", default=None, help="If enabled, all currently available ADAMS modules are output (all other options get ignored).")
    parser.add_argument("--config", metavar="FILE", help="YAML file with default values for any of the options above.")
    parser.add_argument("--verbose", action="store_true", help="Output debugging information.")
    parser.add_argument("--quiet", action="store_true", help="Only output warnings and errors.")

    return parser


def join_jvm_options(argv: List[str]) -> List[str]:
    """
    将 "-v X" / "--jvm X" 改写为 "--jvm=X"

    JVM 参数通常以连字符开头（如 -Xmx2g），argparse 会把分开写的值当作选项。
    """
    result = []
    items = iter(argv)
    for item in items:
        if item in ("-v", "--jvm"):
            value = next(items, None)
            result.append(item if value is None else f"--jvm={value}")
        else:
            result.append(item)
    return result


def _list_modules() -> None:
    """列出可用模块后退出"""
    try:
        Bootstrapper(BootstrapConfig(list_modules=True)).execute()
    except BootstrapError as e:
        print(f"Failed to list modules:\n{e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)
    sys.exit(EXIT_OK)


def _options_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """将解析结果转换为 BootstrapConfig 字段（未指定的选项为 None）"""
    options = vars(args).copy()
    for key in ("config", "verbose", "quiet"):
        options.pop(key, None)
    return options


def load_config(args: argparse.Namespace) -> BootstrapConfig:
    """
    合并 YAML 默认值与命令行选项，创建配置

    Raises:
        ConfigurationError: 配置无效
    """
    defaults = load_defaults(args.config) if args.config else {}
    options = merge_options(defaults, _options_from_args(args))
    return BootstrapConfig.create(**options)


def main(argv: Optional[List[str]] = None) -> None:
    """命令行主入口"""
    parser = build_parser()
    args = parser.parse_args(join_jvm_options(sys.argv[1:] if argv is None else argv))

    setup_logging(level_from_flags(args.verbose, args.quiet))

    # 列出模块时忽略所有其他选项
    if args.list_modules:
        _list_modules()

    try:
        config = load_config(args)
    except ConfigurationError as e:
        print(f"Failed to parse options!\n{e}", file=sys.stderr)
        sys.exit(EXIT_OPTIONS)

    # 配置文件中也可以打开 list_modules
    if config.list_modules:
        _list_modules()

    try:
        config.require_build_options()
    except ConfigurationError as e:
        print(f"Failed to parse options!\n{e}", file=sys.stderr)
        sys.exit(EXIT_OPTIONS)

    try:
        Bootstrapper(config, progress=not args.quiet).execute()
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(EXIT_FAILURE)
    except BootstrapError as e:
        print(f"Failed to perform bootstrapping:\n{e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
