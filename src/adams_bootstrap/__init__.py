# -*- coding: utf-8 -*-
"""
adams-bootstrap: Bootstrapping ADAMS applications from Maven modules
"""

__author__ = "adams-bootstrap"
__version__ = "0.1.0"

# 引导流程
from .bootstrap import Bootstrapper
from .config import BootstrapConfig

# 构建代理
from .delegate import BuildDelegate, BuildRequest, MavenBuildDelegate

# 异常
from .exceptions import (
    BootstrapError,
    BuildError,
    ConfigurationError,
    ResourceError,
)

# 依赖解析
from .resolver import (
    ADAMS_GROUP,
    LTS_SUFFIX,
    Coordinate,
    DependencySet,
    check_modules,
    resolve_dependencies,
)

__all__ = [
    "Bootstrapper",
    "BootstrapConfig",
    # 构建代理
    "BuildDelegate",
    "BuildRequest",
    "MavenBuildDelegate",
    # 异常
    "BootstrapError",
    "ConfigurationError",
    "ResourceError",
    "BuildError",
    # 依赖解析
    "ADAMS_GROUP",
    "LTS_SUFFIX",
    "Coordinate",
    "DependencySet",
    "check_modules",
    "resolve_dependencies",
]
