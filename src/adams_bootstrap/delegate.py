# -*- coding: utf-8 -*-
"""
构建代理

定义构建代理接口，以及基于外部 Maven 安装的默认实现：
渲染 pom.xml、调用 Maven 下载依赖、复制外部 jar 并生成启动脚本。
"""

import logging
import os
import shutil
import stat
import subprocess
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .exceptions import BuildError
from .resolver import Coordinate, DependencySet, read_dependency_files

logger = logging.getLogger(__name__)

# 输出目录结构
MAVEN_DIR = "maven"
LIB_DIR = "lib"
SRC_DIR = "src"
BIN_DIR = "bin"

# 出错时保留的 Maven 输出行数
OUTPUT_TAIL_LINES = 40

SHELL_SCRIPT = """#!/usr/bin/env bash
BASEDIR="$(cd "$(dirname "$0")/.." && pwd)"
if [ -n "$JAVA_HOME" ]; then
  JAVA="$JAVA_HOME/bin/java"
else
  JAVA="java"
fi
exec "$JAVA" {{ jvm }} -cp "$BASEDIR/lib/*" {{ main_class }} "$@"
"""

BATCH_SCRIPT = """@echo off
set BASEDIR=%~dp0..
if defined JAVA_HOME (
  set JAVA="%JAVA_HOME%\\bin\\java"
) else (
  set JAVA=java
)
%JAVA% {{ jvm }} -cp "%BASEDIR%\\lib\\*" {{ main_class }} %*
"""


@dataclass(frozen=True)
class BuildRequest:
    """交给构建代理的一次构建请求"""

    dependencies: DependencySet
    output_dir: Path
    maven_user_settings: Path
    pom_template: Path
    name: str = "adams"
    main_class: Optional[str] = None
    dependency_files: Tuple[Path, ...] = ()
    external_jars: Tuple[Path, ...] = ()
    external_sources: Tuple[Path, ...] = ()
    jvm: Tuple[str, ...] = ()
    clean: bool = False
    sources: bool = False
    maven_home: Optional[Path] = None
    java_home: Optional[Path] = None

    @property
    def scripts(self) -> bool:
        """是否需要生成启动脚本"""
        return bool(self.main_class and self.main_class.strip())


class BuildDelegate(ABC):
    """构建代理接口"""

    @abstractmethod
    def execute(self, request: BuildRequest) -> None:
        """
        根据请求生成可运行的应用目录

        Raises:
            BuildError: 构建失败
        """
        pass


@dataclass
class MavenBuildDelegate(BuildDelegate):
    """通过外部 Maven 安装完成依赖下载的构建代理"""

    batch_mode: bool = True
    extra_args: List[str] = field(default_factory=list)

    def execute(self, request: BuildRequest) -> None:
        output_dir = Path(request.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        dependencies = request.dependencies.extend(read_dependency_files(request.dependency_files))
        logger.info(f"Bootstrapping '{request.name}' with {len(dependencies)} dependencies into {output_dir}")

        if request.clean:
            self._clean(output_dir)

        pom = self.render_pom(request, dependencies)
        self.run_maven(request, pom)

        self._copy_external(request.external_jars, output_dir / LIB_DIR)
        self._copy_external(request.external_sources, output_dir / SRC_DIR)

        if request.scripts:
            self.write_scripts(request)

        logger.info(f"Application bootstrapped in {output_dir}")

    def render_pom(self, request: BuildRequest, dependencies: DependencySet) -> Path:
        """
        使用 Jinja2 渲染 pom.xml 模板

        模板可用的变量: name, dependencies (Coordinate 列表), lib_dir, src_dir, sources

        Raises:
            ConfigurationError: 依赖格式错误（请求未经 BootstrapConfig 验证时）
            BuildError: 模板渲染失败
        """
        output_dir = Path(request.output_dir).absolute()
        template_path = Path(request.pom_template)

        coordinates = [Coordinate.parse(dep) for dep in dependencies]

        env = Environment(
            loader=FileSystemLoader(str(template_path.parent)),
            undefined=StrictUndefined,
            autoescape=True,
            keep_trailing_newline=True,
        )
        try:
            template = env.get_template(template_path.name)
            content = template.render(
                name=request.name,
                dependencies=coordinates,
                lib_dir=str(output_dir / LIB_DIR),
                src_dir=str(output_dir / SRC_DIR),
                sources=request.sources,
            )
        except TemplateError as e:
            raise BuildError(f"Failed to render pom.xml template {template_path}: {e}") from e

        maven_dir = output_dir / MAVEN_DIR
        maven_dir.mkdir(parents=True, exist_ok=True)
        pom = maven_dir / "pom.xml"
        pom.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {pom}")
        return pom

    def maven_executable(self, maven_home: Optional[Path]) -> str:
        """
        确定 Maven 可执行文件

        Raises:
            BuildError: 找不到 Maven
        """
        name = "mvn.cmd" if sys.platform.startswith("win") else "mvn"
        if maven_home is not None:
            executable = Path(maven_home) / "bin" / name
            if not executable.exists():
                raise BuildError(f"Maven executable not found: {executable}")
            return str(executable)

        found = shutil.which(name)
        if found is None:
            raise BuildError("Maven executable not found on PATH, use --maven_home to specify an installation")
        return found

    def maven_command(self, request: BuildRequest, pom: Path) -> List[str]:
        cmd = [self.maven_executable(request.maven_home)]
        if self.batch_mode:
            cmd.append("-B")
        cmd += ["-s", str(request.maven_user_settings), "-f", str(pom)]
        cmd += self.extra_args
        if request.clean:
            cmd.append("clean")
        cmd.append("package")
        return cmd

    def maven_environment(self, request: BuildRequest) -> Dict[str, str]:
        env = dict(os.environ)
        if request.java_home is not None:
            env["JAVA_HOME"] = str(request.java_home)
        return env

    def run_maven(self, request: BuildRequest, pom: Path) -> None:
        """
        执行 Maven 构建

        Raises:
            BuildError: Maven 无法启动或返回非零退出码
        """
        cmd = self.maven_command(request, pom)
        logger.debug(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(pom.parent),
                env=self.maven_environment(request),
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise BuildError(f"Failed to execute Maven: {e}") from e

        if result.returncode != 0:
            output = (result.stdout or "") + (result.stderr or "")
            tail = "\n".join(output.splitlines()[-OUTPUT_TAIL_LINES:])
            raise BuildError(
                f"Maven failed with exit code {result.returncode}:\n{tail}",
                returncode=result.returncode,
                output=output,
            )

    def write_scripts(self, request: BuildRequest) -> List[Path]:
        """生成 Linux/Mac 和 Windows 的启动脚本"""
        bin_dir = Path(request.output_dir) / BIN_DIR
        bin_dir.mkdir(parents=True, exist_ok=True)

        env = Environment(keep_trailing_newline=True)
        values = {"jvm": " ".join(request.jvm), "main_class": request.main_class.strip()}

        shell = bin_dir / f"{request.name}.sh"
        shell.write_text(env.from_string(SHELL_SCRIPT).render(**values), encoding="utf-8")
        shell.chmod(shell.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

        batch = bin_dir / f"{request.name}.bat"
        batch.write_text(env.from_string(BATCH_SCRIPT).render(**values), encoding="utf-8", newline="\r\n")

        logger.debug(f"Wrote launch scripts to {bin_dir}")
        return [shell, batch]

    def _clean(self, output_dir: Path) -> None:
        """删除上次生成的库、源码和脚本目录"""
        for sub in (LIB_DIR, SRC_DIR, BIN_DIR):
            path = output_dir / sub
            if path.is_dir():
                logger.debug(f"Removing {path}")
                shutil.rmtree(path)

    def _copy_external(self, paths: Sequence[Path], target: Path) -> None:
        """复制外部 jar 文件，或目录中的所有 jar 文件"""
        if not paths:
            return
        target.mkdir(parents=True, exist_ok=True)
        for path in paths:
            path = Path(path)
            jars = sorted(path.glob("*.jar")) if path.is_dir() else [path]
            for jar in jars:
                shutil.copy2(jar, target / jar.name)
                logger.debug(f"Copied {jar} to {target}")
