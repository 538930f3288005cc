# -*- coding: utf-8 -*-
"""
adams-bootstrap 核心异常
"""

from typing import Optional


class BootstrapError(Exception):
    """所有 adams-bootstrap 自定义异常的基类。"""

    pass


class ConfigurationError(BootstrapError, ValueError):
    """当模块列表或命令行选项无效时引发，例如未提供模块或 LTS/非 LTS 模块冲突。"""

    pass


class ResourceError(BootstrapError):
    """当无法下载或提取 settings.xml、pom.xml 模板或模块目录时引发。"""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class BuildError(BootstrapError):
    """当构建代理（Maven）执行失败时引发。"""

    def __init__(self, message: str, returncode: Optional[int] = None, output: str = ""):
        self.returncode = returncode
        self.output = output
        super().__init__(message)
