# -*- coding: utf-8 -*-
"""
远程与内置资源测试

所有 HTTP 请求都通过 httpx.MockTransport 模拟。
"""

import pytest

from adams_bootstrap import resources
from adams_bootstrap.exceptions import ResourceError
from adams_bootstrap.paths import home_dir

from tests.support import BASE_POM, SETTINGS_XML


class TestMavenUserSettings:
    """测试 Maven 用户设置文件的准备"""

    def test_explicit_file_wins(self, settings_xml, http_client_factory):
        client = http_client_factory({})
        assert resources.init_maven_user_settings(settings_xml, client=client) == settings_xml

    def test_existing_file_reused(self, instant_home, http_client_factory):
        instant_home.mkdir(parents=True)
        existing = instant_home / "settings.xml"
        existing.write_text("<settings/>", encoding="utf-8")

        result = resources.init_maven_user_settings(client=http_client_factory({}))

        assert result == existing
        assert existing.read_text(encoding="utf-8") == "<settings/>"

    def test_download_when_missing(self, instant_home, http_client_factory):
        client = http_client_factory({resources.USER_SETTINGS_URL: (200, SETTINGS_XML)})

        result = resources.init_maven_user_settings(client=client, progress=False)

        assert result == instant_home / "settings.xml"
        assert result.read_text(encoding="utf-8") == SETTINGS_XML
        assert not (instant_home / "settings.xml.part").exists()

    def test_download_failure(self, instant_home, http_client_factory):
        client = http_client_factory({resources.USER_SETTINGS_URL: (500, "boom")})

        with pytest.raises(ResourceError) as exc_info:
            resources.init_maven_user_settings(client=client, progress=False)

        assert resources.USER_SETTINGS_URL in str(exc_info.value)
        assert exc_info.value.url == resources.USER_SETTINGS_URL
        assert not (instant_home / "settings.xml").exists()


class TestPomTemplate:
    """测试 pom.xml 模板的准备"""

    def test_explicit_template_wins(self, tmp_path):
        template = tmp_path / "custom.xml"
        template.write_text("<project/>", encoding="utf-8")
        assert resources.init_pom_template(template) == template

    def test_bundled_template_extracted(self, tmp_path):
        target = resources.init_pom_template(work_dir=tmp_path / "work")

        assert target == tmp_path / "work" / resources.POM_TEMPLATE_FILE
        content = target.read_text(encoding="utf-8")
        assert "{% for dep in dependencies %}" in content.replace("{%-", "{%")
        assert "maven-dependency-plugin" in content


class TestModuleCatalog:
    """测试模块列表"""

    def test_extract_modules(self):
        assert resources.extract_modules(BASE_POM) == ["adams-core", "adams-excel", "adams-weka"]

    def test_extract_modules_none(self):
        assert resources.extract_modules("<project/>") == []

    def test_list_modules(self, http_client_factory):
        routes = {url: (200, BASE_POM) for _, url in resources.MODULE_CATALOGS}
        lines = []

        resources.list_modules(client=http_client_factory(routes), output=lines.append)

        assert lines[0] == "\nAvailable modules:"
        assert "\nadams-base:" in lines
        assert "\nadams-spectral-base:" in lines
        assert lines.count("adams-core, adams-excel, adams-weka") == len(resources.MODULE_CATALOGS)
        assert resources.LTS_NOTE in lines[-1]

    def test_list_modules_http_error(self, http_client_factory):
        routes = {resources.ADAMS_BASE_URL: (200, BASE_POM)}

        with pytest.raises(ResourceError) as exc_info:
            resources.list_modules(client=http_client_factory(routes), output=lambda line: None)

        message = str(exc_info.value)
        assert "status: 404: Not Found" in message
        assert resources.ADAMS_ADDONS_URL in message

    def test_list_modules_empty_catalog(self, http_client_factory):
        routes = {resources.ADAMS_BASE_URL: (200, "<project/>")}

        with pytest.raises(ResourceError, match="Failed to extract any modules from"):
            resources.list_modules(client=http_client_factory(routes), output=lambda line: None)


class TestHomeDir:
    """测试主目录"""

    def test_env_override(self, instant_home):
        assert home_dir() == instant_home

    def test_default_location(self, monkeypatch, tmp_path):
        monkeypatch.delenv("INSTANTADAMS_HOME")
        monkeypatch.setattr("adams_bootstrap.paths.Path.home", lambda: tmp_path)
        monkeypatch.setattr("adams_bootstrap.paths._is_windows", lambda: False)
        assert home_dir() == tmp_path / ".local" / "share" / "instant-adams"

    def test_default_location_windows(self, monkeypatch, tmp_path):
        monkeypatch.delenv("INSTANTADAMS_HOME")
        monkeypatch.setattr("adams_bootstrap.paths.Path.home", lambda: tmp_path)
        monkeypatch.setattr("adams_bootstrap.paths._is_windows", lambda: True)
        assert home_dir() == tmp_path / "instant-adams"
