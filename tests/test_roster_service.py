"""Unit tests for the RosterService class."""

import os
import sys
import unittest
from unittest.mock import MagicMock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from monitoring_manager.monitoring_manager import MonitoringManager
from roster_service.roster_service import RosterService
from roster_store.models import CLASS_NOT_FOUND, INTERNAL_ERROR, INVALID_REQUEST, Student
from roster_store.roster_store import RosterStore


class TestRosterServiceForwarding(unittest.TestCase):
    """Each service method hands its arguments to the store and returns its result untouched."""

    def setUp(self):
        self.mock_store = MagicMock(spec=RosterStore)
        self.service = RosterService(roster_store=self.mock_store)

    def test_add_student_to_class(self):
        student = Student(name="Alice", age=10)
        result = self.service.add_student_to_class("A1", student)
        self.mock_store.add_student.assert_called_once_with("A1", student)
        self.assertIs(result, self.mock_store.add_student.return_value)

    def test_remove_student_from_class(self):
        result = self.service.remove_student_from_class("A1", "Alice")
        self.mock_store.remove_student.assert_called_once_with("A1", "Alice")
        self.assertIs(result, self.mock_store.remove_student.return_value)

    def test_view_student_details(self):
        result = self.service.view_student_details("A1", "Bob")
        self.mock_store.get_student_by_name_and_class.assert_called_once_with("A1", "Bob")
        self.assertIs(result, self.mock_store.get_student_by_name_and_class.return_value)

    def test_view_students_in_class(self):
        result = self.service.view_students_in_class("A1")
        self.mock_store.get_all_students_by_class.assert_called_once_with("A1")
        self.assertIs(result, self.mock_store.get_all_students_by_class.return_value)

    def test_list_classes(self):
        self.mock_store.list_classes.return_value = ["A1", "B2"]
        self.assertEqual(self.service.list_classes(), ["A1", "B2"])


class TestRosterServiceProcessRequest(unittest.TestCase):

    def setUp(self):
        self.mock_monitoring_manager = MagicMock(spec=MonitoringManager)
        self.store = RosterStore()
        self.service = RosterService(roster_store=self.store, monitoring_manager=self.mock_monitoring_manager)

    def test_full_flow_through_named_operations(self):
        for name, age in [("Alice", 10), ("Bob", 11), ("Alice", 12)]:
            result = self.service.process_request("add_student", {"class_name": "A1", "name": name, "age": age})
            self.assertEqual(result["status"], "success")

        removed = self.service.process_request("remove_student", {"class_name": "A1", "name": "Alice"})
        self.assertEqual(removed["removed_count"], 2)

        listing = self.service.process_request("get_students", {"class_name": "A1"})
        self.assertEqual([(s.name, s.age) for s in listing["data"]], [("Bob", 11)])

        details = self.service.process_request("get_student", {"class_name": "A1", "name": "Bob"})
        self.assertEqual(details["data"].age, 11)

        classes = self.service.process_request("list_classes")
        self.assertEqual(classes["data"], ["A1"])

    def test_not_found_outcomes_pass_through(self):
        result = self.service.process_request("get_student", {"class_name": "Z9", "name": "Anyone"})
        self.assertEqual(result["error_code"], CLASS_NOT_FOUND)

    def test_unknown_operation(self):
        result = self.service.process_request("rename_class", {"class_name": "A1"})
        self.assertEqual(result["status"], "error")
        self.assertEqual(result["error_code"], INVALID_REQUEST)
        self.assertEqual(result["message"], "Unknown operation: rename_class")
        self.mock_monitoring_manager.log_warning.assert_called_once()

    def test_missing_payload_keys(self):
        result = self.service.process_request("add_student", {"class_name": "A1", "name": "Alice"})
        self.assertEqual(result["error_code"], INVALID_REQUEST)
        self.assertIn("age", result["message"])
        self.assertEqual(self.store.list_classes(), [])

    def test_non_integer_age_is_rejected(self):
        for age in ["ten", "10", 10.0, True]:
            with self.subTest(age=age):
                result = self.service.process_request("add_student", {"class_name": "A1", "name": "Alice", "age": age})
                self.assertEqual(result["status"], "error")
                self.assertEqual(result["error_code"], INVALID_REQUEST)
        self.assertFalse(self.store.has_class("A1"))

    def test_direct_add_skips_payload_checks(self):
        result = self.service.add_student_to_class("A1", Student(name="", age=-1))
        self.assertEqual(result["status"], "success")

    def test_unexpected_exception_becomes_internal_error(self):
        mock_store = MagicMock(spec=RosterStore)
        mock_store.get_all_students_by_class.side_effect = RuntimeError("boom")
        service = RosterService(roster_store=mock_store, monitoring_manager=self.mock_monitoring_manager)

        result = service.process_request("get_students", {"class_name": "A1"})
        self.assertEqual(result["error_code"], INTERNAL_ERROR)
        self.assertIn("boom", result["message"])
        self.mock_monitoring_manager.log_exception.assert_called_once()

    def test_completed_operations_are_logged(self):
        self.service.process_request("get_students", {"class_name": "A1"})
        self.mock_monitoring_manager.log_info.assert_called_with(
            "Operation get_students completed with status: error"
        )


if __name__ == '__main__':
    unittest.main()
