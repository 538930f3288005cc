# -*- coding: utf-8 -*-
"""
全局测试配置
提供基本的测试环境设置和共享fixture
"""

import logging
import stat
from pathlib import Path

import pytest

from adams_bootstrap.logger import ROOT_LOGGER_NAME
from adams_bootstrap.paths import HOME_DIR_ENV
from tests.support import SETTINGS_XML, make_client


@pytest.fixture(autouse=True)
def instant_home(tmp_path, monkeypatch) -> Path:
    """将 instant-adams 主目录指向临时目录，避免访问用户目录"""
    home = tmp_path / "instant-home"
    monkeypatch.setenv(HOME_DIR_ENV, str(home))
    return home


@pytest.fixture
def settings_xml(tmp_path) -> Path:
    """示例 Maven 用户设置文件"""
    path = tmp_path / "settings.xml"
    path.write_text(SETTINGS_XML, encoding="utf-8")
    return path


@pytest.fixture
def dependency_file(tmp_path) -> Path:
    """示例依赖声明文件"""
    path = tmp_path / "deps.txt"
    path.write_text(
        "# extra libraries\n"
        "nz.ac.waikato.cms.weka:kfGroovy:1.0.12\n"
        "\n"
        "  org.slf4j:slf4j-simple:2.0.9  \n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def maven_home(tmp_path) -> Path:
    """伪造的 Maven 安装目录"""
    home = tmp_path / "maven"
    (home / "bin").mkdir(parents=True)
    for name in ("mvn", "mvn.cmd"):
        mvn = home / "bin" / name
        mvn.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        mvn.chmod(mvn.stat().st_mode | stat.S_IXUSR)
    return home


@pytest.fixture
def output_dir(tmp_path) -> Path:
    """引导输出目录"""
    return tmp_path / "app"


@pytest.fixture
def http_client_factory():
    """返回构造模拟 HTTP 客户端的函数"""
    return make_client


@pytest.fixture(autouse=True)
def reset_logging():
    """移除命令行测试安装的日志处理器"""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
