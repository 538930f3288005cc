# -*- coding: utf-8 -*-
"""
测试辅助数据与工具
"""

import httpx

SETTINGS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<settings>
  <profiles/>
</settings>
"""

BASE_POM = """<project>
  <modules>
    <module>adams-core</module>
    <module>adams-weka</module>
    <module>${extra.module}</module>
    <module>adams-excel</module>
  </modules>
</project>
"""


def make_client(routes) -> httpx.Client:
    """
    创建基于 MockTransport 的 HTTP 客户端

    Args:
        routes: {url: (status_code, text)}，未列出的地址返回 404
    """

    def handler(request: httpx.Request) -> httpx.Response:
        status, text = routes.get(str(request.url), (404, "not found"))
        return httpx.Response(status, text=text)

    return httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
