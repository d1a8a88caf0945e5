# -*- coding: utf-8 -*-
"""花名册存储模块 (RosterStore)。

持有全部班级与学生数据，是唯一允许修改花名册状态的入口。
"""
from .models import CLASS_NOT_FOUND, STUDENT_NOT_FOUND, Student
from .roster_store import RosterStore

__all__ = ["RosterStore", "Student", "CLASS_NOT_FOUND", "STUDENT_NOT_FOUND"]
