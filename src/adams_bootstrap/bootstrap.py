# -*- coding: utf-8 -*-
"""
引导流程

按顺序准备 Maven 用户设置、解析依赖、准备 pom.xml 模板，然后交给构建代理执行。
"""

import logging
from typing import Optional

from .config import BootstrapConfig
from .delegate import BuildDelegate, BuildRequest, MavenBuildDelegate
from .exceptions import BootstrapError
from .resolver import DependencySet, resolve_dependencies
from . import resources

logger = logging.getLogger(__name__)


class Bootstrapper:
    """
    ADAMS 应用引导器

    一次运行对应一个实例：配置在构造时给定，``execute`` 执行完整流程。
    """

    def __init__(self, config: BootstrapConfig, delegate: Optional[BuildDelegate] = None, progress: bool = True):
        """
        Args:
            config: 引导配置
            delegate: 构建代理，默认使用 MavenBuildDelegate
            progress: 下载时是否显示进度条
        """
        self.config = config
        self.delegate = delegate or MavenBuildDelegate()
        self.progress = progress

    def resolve(self) -> DependencySet:
        return resolve_dependencies(self.config.modules, self.config.version, self.config.dependencies)

    def build_request(self) -> BuildRequest:
        """准备设置文件、依赖和模板，组装构建请求"""
        config = self.config
        config.require_build_options()

        settings = resources.init_maven_user_settings(config.maven_user_settings, progress=self.progress)
        dependencies = self.resolve()
        template = resources.init_pom_template(config.pom_template)

        return BuildRequest(
            dependencies=dependencies,
            output_dir=config.output_dir,
            maven_user_settings=settings,
            pom_template=template,
            name=config.name,
            main_class=config.main_class,
            dependency_files=config.dependency_files,
            external_jars=config.external_jars,
            external_sources=config.external_sources,
            jvm=config.jvm,
            clean=config.clean,
            sources=config.sources,
            maven_home=config.maven_home,
            java_home=config.java_home,
        )

    def execute(self) -> None:
        """
        执行引导

        Raises:
            BootstrapError: 任一步骤失败（已记录日志）
        """
        try:
            if self.config.list_modules:
                resources.list_modules()
                return
            self.delegate.execute(self.build_request())
        except BootstrapError as e:
            logger.error(str(e))
            raise
