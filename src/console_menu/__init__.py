# -*- coding: utf-8 -*-
"""控制台菜单模块 (ConsoleMenu)。

花名册应用的交互式文本界面，支持 Add / Remove / View / View Details / Exit。
"""
from .console_menu import ConsoleMenu, MenuExit

__all__ = ["ConsoleMenu", "MenuExit"]
