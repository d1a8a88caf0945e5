# -*- coding: utf-8 -*-
"""配置管理器模块 (ConfigManager)。

负责加载、合并并对外提供花名册应用的配置信息，
包括日志设置与控制台菜单的显示参数。
"""
from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
