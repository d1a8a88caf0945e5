"""学生花名册管理器主应用程序。

负责按依赖顺序创建各个模块（配置、监控、存储、服务、控制台菜单），
并启动交互式菜单循环。
"""

import argparse
from typing import Callable, List, Optional

from config_manager.config_manager import ConfigManager
from console_menu.console_menu import ConsoleMenu
from monitoring_manager.monitoring_manager import MonitoringManager
from roster_service.roster_service import RosterService
from roster_store.roster_store import RosterStore


class RosterApp:
    """
    Builds every module once and wires them together explicitly.
    """

    def __init__(
        self,
        config_dir: Optional[str] = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        """
        Args:
            config_dir: Directory holding config.json. Defaults to the current
                        working directory (see ConfigManager).
            input_func: Line reader used by the menu.
            output_func: Line writer used by the menu.
        """
        self.config_manager = ConfigManager(config_dir=config_dir)
        self.monitoring_manager = MonitoringManager(self.config_manager)

        self.roster_store = RosterStore(monitoring_manager=self.monitoring_manager)
        self.roster_service = RosterService(
            roster_store=self.roster_store,
            monitoring_manager=self.monitoring_manager,
        )
        self.console_menu = ConsoleMenu(
            roster_service=self.roster_service,
            config_manager=self.config_manager,
            monitoring_manager=self.monitoring_manager,
            input_func=input_func,
            output_func=output_func,
        )
        self.monitoring_manager.log_info("Application initialization complete.")

    def start(self):
        """Runs the interactive menu until the operator exits."""
        self.monitoring_manager.log_info("Starting console menu.")
        try:
            self.console_menu.run()
        except Exception:
            self.monitoring_manager.log_exception("Console menu terminated unexpectedly.")
            raise
        self.monitoring_manager.log_info("Console menu closed.")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="In-memory student roster manager.")
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory containing config.json (default: current directory).",
    )
    args = parser.parse_args(argv)

    app = RosterApp(config_dir=args.config_dir)
    app.start()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
