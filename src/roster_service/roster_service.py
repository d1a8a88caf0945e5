# -*- coding: utf-8 -*-
"""
花名册服务 (RosterService)：位于存储之上的转发层，
同时提供按操作名分发请求的统一入口。
"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from monitoring_manager.monitoring_manager import MonitoringManager
from roster_store.models import INTERNAL_ERROR, INVALID_REQUEST, Student, error, success
from roster_store.roster_store import RosterStore


class RosterService:
    """
    Forwards each operation to the RosterStore unchanged.
    """

    def __init__(self, roster_store: RosterStore, monitoring_manager: Optional[MonitoringManager] = None):
        self.roster_store = roster_store
        self.monitoring_manager = monitoring_manager

        # operation name -> (handler, required payload keys)
        self.operation_mapping = {
            "add_student": (self._add_from_payload, ("class_name", "name", "age")),
            "remove_student": (self._remove_from_payload, ("class_name", "name")),
            "get_student": (self._get_from_payload, ("class_name", "name")),
            "get_students": (self._list_from_payload, ("class_name",)),
            "list_classes": (self._classes_from_payload, ()),
        }

    def add_student_to_class(self, class_name: str, student: Student) -> Dict[str, Any]:
        return self.roster_store.add_student(class_name, student)

    def remove_student_from_class(self, class_name: str, student_name: str) -> Dict[str, Any]:
        return self.roster_store.remove_student(class_name, student_name)

    def view_student_details(self, class_name: str, student_name: str) -> Dict[str, Any]:
        return self.roster_store.get_student_by_name_and_class(class_name, student_name)

    def view_students_in_class(self, class_name: str) -> Dict[str, Any]:
        return self.roster_store.get_all_students_by_class(class_name)

    def list_classes(self) -> List[str]:
        return self.roster_store.list_classes()

    def _add_from_payload(self, payload):
        # strict: "10", 10.0 and True are not ages
        student = Student.model_validate({"name": payload["name"], "age": payload["age"]}, strict=True)
        return self.add_student_to_class(payload["class_name"], student)

    def _remove_from_payload(self, payload):
        return self.remove_student_from_class(payload["class_name"], payload["name"])

    def _get_from_payload(self, payload):
        return self.view_student_details(payload["class_name"], payload["name"])

    def _list_from_payload(self, payload):
        return self.view_students_in_class(payload["class_name"])

    def _classes_from_payload(self, payload):
        return success(data=self.list_classes())

    def process_request(self, operation: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        按操作名把请求路由到对应的方法。

        Args:
            operation (str): One of ``add_student``, ``remove_student``,
                ``get_student``, ``get_students``, ``list_classes``.
            payload (Optional[Dict[str, Any]]): Arguments for the operation,
                e.g. ``{"class_name": "A1", "name": "Alice", "age": 10}``.

        Returns:
            Dict[str, Any]: The operation's result dict. Unknown operations and
            payloads that miss a key or fail Student validation give
            ``invalid_request``; any other exception gives ``internal_error``.
        """
        if payload is None:
            payload = {}

        entry = self.operation_mapping.get(operation)
        if entry is None:
            self._log_warning(f"Unknown operation requested: {operation}")
            return error(INVALID_REQUEST, f"Unknown operation: {operation}")

        handler, required_keys = entry
        missing = [k for k in required_keys if k not in payload]
        if missing:
            self._log_warning(f"Operation {operation} is missing payload keys: {missing}")
            return error(INVALID_REQUEST, f"Missing required fields for {operation}: {', '.join(missing)}")

        try:
            result = handler(payload)
        except ValidationError as e:
            self._log_warning(f"Operation {operation} rejected payload: {e.error_count()} field error(s)")
            return error(INVALID_REQUEST, f"Invalid payload for {operation}: {e}")
        except Exception as e:
            if self.monitoring_manager is not None:
                self.monitoring_manager.log_exception(
                    f"Error during operation {operation}", context={"payload": payload}
                )
            return error(INTERNAL_ERROR, f"An unexpected error occurred processing {operation}: {e}")

        if self.monitoring_manager is not None:
            self.monitoring_manager.log_info(
                f"Operation {operation} completed with status: {result.get('status')}"
            )
        return result

    def _log_warning(self, message):
        if self.monitoring_manager is not None:
            self.monitoring_manager.log_warning(message)
