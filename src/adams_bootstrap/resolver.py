# -*- coding: utf-8 -*-
"""
模块依赖解析

将用户提供的模块名称和额外依赖规范化为有序的 Maven 坐标列表，
并检查同一模块是否同时以 LTS 和非 LTS 形式出现。
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# ADAMS 模块的 Maven groupId
ADAMS_GROUP = "nz.ac.waikato.cms.adams"

# LTS 模块的后缀
LTS_SUFFIX = "-lts"


@dataclass(frozen=True)
class Coordinate:
    """Maven 坐标 group:artifact:version"""

    REGEX = re.compile(r"^([^:\s]+):([^:\s]+):([^:\s]+)$")

    group: str
    artifact: str
    version: str

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """
        解析 group:artifact:version 格式的坐标字符串

        Raises:
            ConfigurationError: 格式不正确
        """
        match = cls.REGEX.match(text.strip())
        if match is None:
            raise ConfigurationError(
                f"Invalid dependency '{text.strip()}', expected group:artifact:version"
            )
        return cls(*match.groups())

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class DependencySet:
    """有序且不可变的依赖坐标集合"""

    coordinates: Tuple[str, ...] = ()

    def __iter__(self) -> Iterator[str]:
        return iter(self.coordinates)

    def __len__(self) -> int:
        return len(self.coordinates)

    def __getitem__(self, index):
        return self.coordinates[index]

    def extend(self, extra: Iterable[str]) -> "DependencySet":
        """返回追加了额外坐标的新集合"""
        return DependencySet(self.coordinates + tuple(extra))

    def to_list(self) -> List[str]:
        return list(self.coordinates)


def split_modules(modules: Union[str, Iterable[str], None]) -> List[str]:
    """将逗号分隔的模块列表（或模块名称序列）拆分为去除空白后的名称列表"""
    if modules is None:
        return []
    if isinstance(modules, str):
        modules = modules.split(",")
    return [name.strip() for name in modules if name and name.strip()]


def is_lts(module: str) -> bool:
    return module.endswith(LTS_SUFFIX)


def base_name(module: str) -> str:
    """去掉 LTS 后缀后的模块名称"""
    return module[: -len(LTS_SUFFIX)] if is_lts(module) else module


def find_conflicts(modules: Sequence[str]) -> List[str]:
    """
    查找同时以 LTS 和非 LTS 形式出现的模块

    Returns:
        冲突模块的基础名称，按非 LTS 条目在输入中的出现顺序排列
    """
    lts_bases = {base_name(m) for m in modules if is_lts(m)}
    conflicts: List[str] = []
    for module in modules:
        if not is_lts(module) and module in lts_bases and module not in conflicts:
            conflicts.append(module)
    return conflicts


def check_modules(modules: Union[str, Iterable[str]]) -> None:
    """
    检查模块列表中是否混用了 LTS 和非 LTS 版本

    Raises:
        ConfigurationError: 存在冲突的模块
    """
    conflicts = find_conflicts(split_modules(modules))
    if conflicts:
        raise ConfigurationError(
            "Following modules are present as LTS and non-LTS version: "
            + ", ".join(conflicts)
        )


def resolve_dependencies(
    modules: Union[str, Iterable[str], None],
    version: str,
    extra: Optional[Iterable[str]] = None,
) -> DependencySet:
    """
    将模块列表展开为 Maven 坐标

    每个模块生成一个 ``nz.ac.waikato.cms.adams:<module>:<version>`` 坐标（保持输入顺序），
    随后按原样追加额外依赖。

    Args:
        modules: 逗号分隔的模块列表或模块名称序列
        version: 应用于所有 ADAMS 模块的版本
        extra: 额外的 group:artifact:version 依赖（不做校验）

    Returns:
        有序的依赖集合

    Raises:
        ConfigurationError: 未提供模块或存在 LTS/非 LTS 冲突
    """
    names = split_modules(modules)
    if not names:
        raise ConfigurationError("no modules provided")
    check_modules(names)

    coordinates = [str(Coordinate(ADAMS_GROUP, name, version)) for name in names]
    if extra:
        coordinates.extend(extra)

    logger.debug(f"Resolved {len(coordinates)} dependencies: {coordinates}")
    return DependencySet(tuple(coordinates))


def read_dependency_files(files: Optional[Iterable[Union[str, Path]]]) -> List[str]:
    """
    读取依赖声明文件（每行一个 group:artifact:version 坐标）

    空行以及以 ``#`` 开头的行会被忽略。

    Raises:
        ConfigurationError: 某行不是合法坐标
    """
    result: List[str] = []
    for path in files or []:
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                result.append(str(Coordinate.parse(line)))
        logger.debug(f"Read dependencies from {path}")
    return result
