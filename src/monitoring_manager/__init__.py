# -*- coding: utf-8 -*-
"""监控管理器模块 (MonitoringManager)。

负责花名册应用的结构化日志与审计事件记录。
"""
from .monitoring_manager import MonitoringManager, StructuredJsonFormatter

__all__ = ["MonitoringManager", "StructuredJsonFormatter"]
