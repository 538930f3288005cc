# -*- coding: utf-8 -*-
"""
远程与内置资源

负责下载 Maven 用户设置文件、提取内置的 pom.xml 模板，以及列出可用的 ADAMS 模块。
"""

import logging
import shutil
from importlib import resources
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import httpx
from tqdm import tqdm

from .exceptions import ResourceError
from .paths import settings_file, temp_dir

logger = logging.getLogger(__name__)

# ADAMS settings.xml 的地址
USER_SETTINGS_URL = "https://raw.githubusercontent.com/waikato-datamining/adams-website/master/files/resources/settings.xml"

# 模块目录（各仓库的 pom.xml）
ADAMS_BASE_URL = "https://raw.githubusercontent.com/waikato-datamining/adams-base/master/pom.xml"
ADAMS_ADDONS_URL = "https://raw.githubusercontent.com/waikato-datamining/adams-addons/master/pom.xml"
ADAMS_LTS_URL = "https://raw.githubusercontent.com/waikato-datamining/adams-lts/master/pom.xml"
ADAMS_SPECTRAL_BASE_URL = "https://raw.githubusercontent.com/waikato-datamining/adams-spectral-base/master/pom.xml"

MODULE_CATALOGS: Tuple[Tuple[str, str], ...] = (
    ("adams-base", ADAMS_BASE_URL),
    ("adams-addons", ADAMS_ADDONS_URL),
    ("adams-lts", ADAMS_LTS_URL),
    ("adams-spectral-base", ADAMS_SPECTRAL_BASE_URL),
)

LTS_NOTE = "LTS and non-LTS modules (e.g., 'adams-weka-lts' and 'adams-weka') cannot be mixed."

# 内置 pom 模板
TEMPLATE_PACKAGE = "adams_bootstrap.templates"
POM_TEMPLATE_FILE = "instant-adams.xml"

DEFAULT_TIMEOUT = 30.0  # 请求超时秒数


def _new_client() -> httpx.Client:
    return httpx.Client(follow_redirects=True, timeout=DEFAULT_TIMEOUT)


def download_file(
    url: str,
    target: Path,
    client: Optional[httpx.Client] = None,
    progress: bool = True,
) -> Path:
    """
    下载文件到指定路径

    先写入临时文件，成功后再改名，避免留下不完整的文件。

    Raises:
        httpx.HTTPError: 请求失败
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(target.name + ".part")

    owns_client = client is None
    if owns_client:
        client = _new_client()

    try:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            total = int(response.headers.get("Content-Length", 0)) or None
            with open(partial, "wb") as f, tqdm(
                total=total,
                unit="B",
                unit_scale=True,
                desc=target.name,
                disable=not progress,
            ) as bar:
                for chunk in response.iter_bytes():
                    f.write(chunk)
                    bar.update(len(chunk))
        partial.replace(target)
    finally:
        if partial.exists():
            partial.unlink()
        if owns_client:
            client.close()

    return target


def init_maven_user_settings(
    explicit: Optional[Path] = None,
    client: Optional[httpx.Client] = None,
    progress: bool = True,
) -> Path:
    """
    确定要使用的 Maven 用户设置文件

    显式指定的文件优先；否则使用主目录下的 settings.xml，不存在时从网络下载。

    Raises:
        ResourceError: 下载失败
    """
    if explicit is not None:
        return Path(explicit)

    settings = settings_file()
    if settings.exists():
        logger.debug(f"Using existing Maven user settings: {settings}")
        return settings

    logger.info(f"Downloading Maven user settings to {settings}")
    try:
        download_file(USER_SETTINGS_URL, settings, client=client, progress=progress)
    except (httpx.HTTPError, OSError) as e:
        logger.error(f"Failed to download Maven user settings: {e}")
        raise ResourceError(
            f"Failed to download Maven user settings from: {USER_SETTINGS_URL}",
            url=USER_SETTINGS_URL,
        ) from e
    return settings


def init_pom_template(explicit: Optional[Path] = None, work_dir: Optional[Path] = None) -> Path:
    """
    确定要使用的 pom.xml 模板

    显式指定的模板优先；否则将内置模板提取到临时目录。

    Raises:
        ResourceError: 提取失败
    """
    if explicit is not None:
        return Path(explicit)

    target_dir = Path(work_dir) if work_dir is not None else temp_dir()
    target = target_dir / POM_TEMPLATE_FILE
    try:
        source = resources.files(TEMPLATE_PACKAGE).joinpath(POM_TEMPLATE_FILE)
        target_dir.mkdir(parents=True, exist_ok=True)
        with source.open("rb") as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)
    except (OSError, ModuleNotFoundError) as e:
        logger.error(f"Failed to extract pom.xml template: {e}")
        raise ResourceError("Failed to extract pom.xml template!") from e

    logger.debug(f"Extracted pom.xml template to {target}")
    return target


def extract_modules(pom: str) -> List[str]:
    """
    从 pom.xml 文本中提取 <module> 条目

    含有 ``$`` 的条目（Maven 属性）会被忽略，结果按字母排序。
    """
    result = []
    for line in pom.split("\n"):
        if "<module>" not in line:
            continue
        line = line[line.index(">") + 1:]
        end = line.find("<")
        if end >= 0:
            line = line[:end]
        if "$" not in line:
            result.append(line)
    return sorted(result)


def fetch_modules(url: str, client: httpx.Client) -> List[str]:
    """
    获取单个模块目录中的模块列表

    Raises:
        ResourceError: 请求失败或未找到任何模块
    """
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        raise ResourceError(f"Failed to extract modules from: {url}", url=url) from e

    if not response.is_success:
        raise ResourceError(
            f"Failed to load URL (status: {response.status_code}: {response.reason_phrase}): {url}",
            url=url,
        )

    modules = extract_modules(response.text)
    if not modules:
        raise ResourceError(f"Failed to extract any modules from: {url}", url=url)
    return modules


def list_modules(
    client: Optional[httpx.Client] = None,
    output: Callable[[str], None] = print,
) -> None:
    """
    输出所有可用的 ADAMS 模块

    Raises:
        ResourceError: 任一模块目录获取失败
    """
    owns_client = client is None
    if owns_client:
        client = _new_client()

    try:
        output("\nAvailable modules:")
        for title, url in MODULE_CATALOGS:
            modules = fetch_modules(url, client)
            output(f"\n{title}:")
            output(", ".join(modules))
        output(f"\nNote:\n{LTS_NOTE}")
    finally:
        if owns_client:
            client.close()
