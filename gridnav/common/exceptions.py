#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
自定义异常类：定义 gridnav 的专用异常

注意：搜索算法本身从不抛异常，无路径统一用空 path 表示。
"""


class GridNavError(Exception):
    """gridnav 基础异常类"""
    pass


class ConfigurationError(GridNavError):
    """配置错误异常（未知算法、非法参数等）"""
    pass


class GridFormatError(GridNavError):
    """栅格格式错误异常（空栅格、行长度不一致等）"""
    pass
