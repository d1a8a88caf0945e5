# -*- coding: utf-8 -*-
"""控制台菜单 (ConsoleMenu) 的主实现文件。

负责逐行读取操作员输入、把命令分派到对应的处理方法，
并把 RosterService 返回的结构化结果渲染成文本。
"""
from typing import Callable, Dict, Optional

from config_manager.config_manager import ConfigManager
from monitoring_manager.monitoring_manager import MonitoringManager
from roster_service.roster_service import RosterService
from roster_store.models import CLASS_NOT_FOUND, Student


class MenuExit(Exception):
    """Raised when the operator leaves the menu or input runs out."""


class ConsoleMenu:
    COMMANDS = ("Add", "Remove", "View", "View Details", "Exit")

    def __init__(
        self,
        roster_service: RosterService,
        config_manager: Optional[ConfigManager] = None,
        monitoring_manager: Optional[MonitoringManager] = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        self.roster_service = roster_service
        self.monitoring_manager = monitoring_manager
        self.input_func = input_func
        self.output_func = output_func

        example_class = "A1"
        if config_manager is not None:
            example_class = config_manager.get_config("console_menu.example_class", "A1")
        self.class_prompt = f"Enter class name (e.g., {example_class}): "

        self._command_map: Dict[str, Callable[[], None]] = {
            "Add": self.add_student,
            "Remove": self.remove_student,
            "View": self.view_students,
            "View Details": self.view_student_details,
            "Exit": self.exit_menu,
        }

    def _read(self, prompt: str) -> str:
        try:
            line = self.input_func(prompt)
        except EOFError:
            raise MenuExit() from None
        return line.rstrip("\r\n")

    def _read_age(self) -> int:
        while True:
            raw = self._read("Enter student age: ")
            try:
                return int(raw.strip())
            except ValueError:
                self.output_func("Invalid age. Please enter a whole number.")

    def run(self):
        """Shows the banner and processes commands until Exit or end of input."""
        self.output_func("Welcome to the Student Management Console")
        self.output_func(f"Options: {', '.join(self.COMMANDS)}")

        while True:
            try:
                choice = self._read("\nEnter your choice: ")
                handler = self._command_map.get(choice)
                if handler is None:
                    self.output_func("Invalid choice. Please try again.")
                    continue
                if self.monitoring_manager is not None:
                    self.monitoring_manager.log_debug(f"Menu command: {choice}")
                handler()
            except MenuExit:
                break

    def exit_menu(self):
        self.output_func("Exiting... Goodbye!")
        raise MenuExit()

    def add_student(self):
        class_name = self._read(self.class_prompt)
        name = self._read("Enter student name: ")
        age = self._read_age()
        self.roster_service.add_student_to_class(class_name, Student(name=name, age=age))
        self.output_func("Student added successfully!")

    def remove_student(self):
        class_name = self._read(self.class_prompt)
        name = self._read("Enter student name to remove: ")
        result = self.roster_service.remove_student_from_class(class_name, name)
        self.output_func(result["message"])

    def view_students(self):
        class_name = self._read(self.class_prompt)
        result = self.roster_service.view_students_in_class(class_name)
        if result["status"] == "success":
            self.output_func(f"Students in {class_name}:")
            for student in result["data"]:
                self.output_func(f"- {student.name}, Age: {student.age}")
            return

        if result.get("error_code") == CLASS_NOT_FOUND:
            self.output_func(result["message"])
        self.output_func("No students found in this class.")

    def view_student_details(self):
        class_name = self._read(self.class_prompt)
        name = self._read("Enter student name: ")
        result = self.roster_service.view_student_details(class_name, name)
        if result["status"] == "success":
            student = result["data"]
            self.output_func(f"Student Details: {student.name}, Age: {student.age}")
            return

        self.output_func(result["message"])
        self.output_func("No student found with the given details.")
