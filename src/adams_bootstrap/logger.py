# -*- coding: utf-8 -*-
"""
日志配置模块
"""
import logging
import sys
from typing import Optional, TextIO

# 与原 ptrade 风格一致的时间戳格式
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "adams_bootstrap"


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    配置包级日志记录器

    重复调用只会调整级别，不会重复添加处理器。

    Args:
        level: 日志级别
        stream: 输出流，默认为 sys.stderr

    Returns:
        包级日志记录器
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not any(getattr(h, "_adams_bootstrap", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._adams_bootstrap = True
        logger.addHandler(handler)

    return logger


def level_from_flags(verbose: bool = False, quiet: bool = False) -> int:
    """根据命令行开关确定日志级别"""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO
