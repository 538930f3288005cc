# -*- coding: utf-8 -*-
"""
引导配置

提供基于 Pydantic 的不可变配置模型，并支持从 YAML 文件加载默认值。
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    DirectoryPath,
    FilePath,
    ValidationError,
    field_validator,
)

from .exceptions import ConfigurationError
from .resolver import Coordinate, check_modules

logger = logging.getLogger(__name__)

# 环境变量匹配模式: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\${([A-Za-z0-9_]+)}")

DEFAULT_NAME = "adams"
DEFAULT_MAIN_CLASS = "adams.gui.Main"


class BootstrapConfig(BaseModel):
    """
    一次引导运行的完整配置

    构造后不可修改。模块列表在构造时即检查 LTS/非 LTS 冲突。
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    modules: str = ""
    version: str = ""
    output_dir: Optional[Path] = None
    name: str = DEFAULT_NAME
    main_class: Optional[str] = DEFAULT_MAIN_CLASS

    maven_home: Optional[DirectoryPath] = None
    maven_user_settings: Optional[FilePath] = None
    java_home: Optional[DirectoryPath] = None
    pom_template: Optional[FilePath] = None

    dependencies: Tuple[str, ...] = ()
    dependency_files: Tuple[FilePath, ...] = ()
    external_jars: Tuple[Path, ...] = ()
    external_sources: Tuple[Path, ...] = ()
    jvm: Tuple[str, ...] = ()

    clean: bool = False
    sources: bool = False
    list_modules: bool = False

    @field_validator("modules", mode="before")
    @classmethod
    def _join_modules(cls, value: Any) -> Any:
        """允许以名称序列的形式提供模块"""
        if isinstance(value, (list, tuple)):
            return ",".join(str(v) for v in value)
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        """
        YAML 会把未加引号的 20.10 解析为浮点数 20.1，无法还原原始文本，因此拒绝数字版本
        """
        if isinstance(value, (bool, int, float)):
            raise ValueError(
                f"Version must be text, got {value!r}; quote it in the configuration file, e.g. version: '20.10'"
            )
        return value

    @field_validator("modules")
    @classmethod
    def _check_modules(cls, value: str) -> str:
        check_modules(value)
        return value

    @field_validator("dependencies")
    @classmethod
    def _check_dependencies(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        for dependency in value:
            Coordinate.parse(dependency)
        return value

    @field_validator("external_jars", "external_sources")
    @classmethod
    def _check_exists(cls, value: Tuple[Path, ...]) -> Tuple[Path, ...]:
        for path in value:
            if not path.exists():
                raise ValueError(f"File or directory does not exist: {path}")
        return value

    @classmethod
    def create(cls, **data: Any) -> "BootstrapConfig":
        """
        创建经过验证的配置对象

        Raises:
            ConfigurationError: 配置验证失败
        """
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(_format_validation_error(e)) from e

    def require_build_options(self) -> None:
        """
        检查执行构建所必需的选项（列出模块时不需要）

        Raises:
            ConfigurationError: 缺少必需选项
        """
        missing = []
        if not self.modules.strip():
            missing.append("modules")
        if not self.version.strip():
            missing.append("version")
        if self.output_dir is None:
            missing.append("output_dir")
        if missing:
            raise ConfigurationError(f"Missing required options: {', '.join(missing)}")


def _format_validation_error(error: ValidationError) -> str:
    """将 Pydantic 验证错误转换为可读消息"""
    messages = []
    for item in error.errors():
        original = item.get("ctx", {}).get("error")
        message = str(original) if original is not None else item["msg"]
        location = ".".join(str(part) for part in item["loc"])
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def _resolve_env_vars(value: Any) -> Any:
    """递归解析 ${VAR_NAME} 形式的环境变量"""
    if isinstance(value, str):
        def _replace(match):
            env_var_name = match.group(1)
            env_var_value = os.getenv(env_var_name)
            if env_var_value is None:
                raise ConfigurationError(f"Environment variable '{env_var_name}' is not set")
            return env_var_value

        return ENV_VAR_PATTERN.sub(_replace, value)
    elif isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(v) for v in value]
    else:
        return value


def load_defaults(path: Union[str, Path]) -> Dict[str, Any]:
    """
    从 YAML 文件加载配置默认值

    文件顶层必须是映射，键与 BootstrapConfig 的字段名一致（连字符会被转换为下划线）。

    Raises:
        ConfigurationError: 文件不存在或格式不正确
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file does not exist: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    logger.debug(f"Loaded defaults from {path}")
    return {str(k).replace("-", "_"): v for k, v in _resolve_env_vars(data).items()}


def merge_options(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """合并配置：overrides 中非 None 的值覆盖 defaults"""
    result = dict(defaults)
    for key, value in overrides.items():
        if value is not None:
            result[key] = value
    return result
