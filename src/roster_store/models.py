# -*- coding: utf-8 -*-
"""花名册数据模型与操作结果的约定。"""
from typing import Any, Dict

from pydantic import BaseModel

CLASS_NOT_FOUND = "class_not_found"
STUDENT_NOT_FOUND = "student_not_found"
INVALID_REQUEST = "invalid_request"
INTERNAL_ERROR = "internal_error"


class Student(BaseModel):
    name: str
    age: int


def success(message: str = "", **fields: Any) -> Dict[str, Any]:
    result: Dict[str, Any] = {"status": "success", "message": message}
    result.update(fields)
    return result


def error(error_code: str, message: str) -> Dict[str, Any]:
    return {"status": "error", "error_code": error_code, "message": message}
