# -*- coding: utf-8 -*-
"""
内置模板
"""
