# -*- coding: utf-8 -*-
"""花名册服务模块 (RosterService)。

在存储之上提供与之一一对应的业务操作，作为今后加入校验或审计策略的接缝。
"""
from .roster_service import RosterService

__all__ = ["RosterService"]
