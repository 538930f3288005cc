# -*- coding: utf-8 -*-
"""
应用路径管理

提供统一的目录访问，所有代码通过此模块获取 instant-adams 的主目录
"""

import os
import sys
import tempfile
from pathlib import Path

# 覆盖主目录的环境变量
HOME_DIR_ENV = "INSTANTADAMS_HOME"


def _is_windows() -> bool:
    return sys.platform.startswith("win")


def home_dir() -> Path:
    """获取 instant-adams 主目录

    查找顺序: $INSTANTADAMS_HOME → ~/.local/share/instant-adams（Windows 下为 ~/instant-adams）

    Returns:
        主目录的Path对象（不保证已存在）
    """
    env_value = os.environ.get(HOME_DIR_ENV)
    if env_value:
        return Path(env_value)

    result = Path.home()
    if not _is_windows():
        result = result / ".local" / "share"
    return result / "instant-adams"


def settings_file() -> Path:
    """获取默认 Maven 用户设置文件路径"""
    return home_dir() / "settings.xml"


def temp_dir() -> Path:
    """获取临时目录（用于提取 pom.xml 模板）"""
    return Path(tempfile.gettempdir())
