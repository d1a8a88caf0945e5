# -*- coding: utf-8 -*-
"""
花名册存储 (RosterStore)：班级标签到有序学生列表的唯一持有者。
"""
from typing import Any, Dict, List, Optional

from monitoring_manager.monitoring_manager import MonitoringManager

from .models import CLASS_NOT_FOUND, STUDENT_NOT_FOUND, Student, error, success


class RosterStore:
    """
    In-memory store mapping class labels to ordered lists of students.

    Classes come into existence on the first add and are never dropped, even when
    emptied. Lookups on unknown labels never create entries. Students are copied
    on the way in and on the way out, so callers cannot edit stored entries.

    Every operation returns a result dict:
    ``{"status": "success", ...}`` or
    ``{"status": "error", "error_code": ..., "message": ...}``.
    """

    def __init__(self, monitoring_manager: Optional[MonitoringManager] = None, audit_user: str = "console"):
        self.monitoring_manager = monitoring_manager
        # recorded as user_id on every audit event
        self.audit_user = audit_user
        self._classes: Dict[str, List[Student]] = {}

    def _log_warning(self, message: str, **context):
        if self.monitoring_manager is not None:
            self.monitoring_manager.log_warning(message, context=context)

    def _class_not_found(self, class_name: str) -> Dict[str, Any]:
        self._log_warning("Class lookup failed.", class_name=class_name)
        return error(CLASS_NOT_FOUND, f"{class_name} class is not found in the system.")

    def has_class(self, class_name: str) -> bool:
        return class_name in self._classes

    def list_classes(self) -> List[str]:
        """Class labels in the order they were first added to."""
        return list(self._classes)

    def add_student(self, class_name: str, student: Student) -> Dict[str, Any]:
        """
        Appends a copy of ``student`` to ``class_name``, creating the class if needed.
        Never fails.
        """
        roster = self._classes.setdefault(class_name, [])
        roster.append(student.model_copy())
        if self.monitoring_manager is not None:
            self.monitoring_manager.log_debug(
                "Student appended.",
                context={"class_name": class_name, "student_name": student.name, "class_size": len(roster)},
            )
            self.monitoring_manager.log_audit_event(
                "student_added", self.audit_user, {"class_name": class_name, "student_name": student.name}
            )
        return success(f"{student.name} added to {class_name}.", class_size=len(roster))

    def remove_student(self, class_name: str, student_name: str) -> Dict[str, Any]:
        """
        Removes every student named ``student_name`` from ``class_name``.

        Survivors keep their relative order. Reports ``removed_count`` on success.
        """
        if class_name not in self._classes:
            return self._class_not_found(class_name)

        roster = self._classes[class_name]
        survivors = [s for s in roster if s.name != student_name]
        removed_count = len(roster) - len(survivors)
        if removed_count == 0:
            self._log_warning("No student matched for removal.", class_name=class_name, student_name=student_name)
            return error(STUDENT_NOT_FOUND, f"{student_name} not found in {class_name}.")

        roster[:] = survivors
        if self.monitoring_manager is not None:
            self.monitoring_manager.log_audit_event(
                "student_removed",
                self.audit_user,
                {"class_name": class_name, "student_name": student_name, "removed_count": removed_count},
            )
        return success(f"{student_name} removed from {class_name}.", removed_count=removed_count)

    def get_student_by_name_and_class(self, class_name: str, student_name: str) -> Dict[str, Any]:
        """Returns a copy of the first student in stored order whose name matches."""
        if class_name not in self._classes:
            return self._class_not_found(class_name)

        for student in self._classes[class_name]:
            if student.name == student_name:
                return success(data=student.model_copy())

        self._log_warning("Student lookup failed.", class_name=class_name, student_name=student_name)
        return error(STUDENT_NOT_FOUND, f"{student_name} not found in {class_name}.")

    def get_all_students_by_class(self, class_name: str) -> Dict[str, Any]:
        """
        Returns copies of every student in ``class_name``, in insertion order.

        A known class with no students yields success with an empty list, which is
        a different outcome from ``class_not_found``.
        """
        if class_name not in self._classes:
            return self._class_not_found(class_name)
        return success(data=[s.model_copy() for s in self._classes[class_name]])
