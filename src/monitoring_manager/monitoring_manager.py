# -*- coding: utf-8 -*-
"""监控管理器 (MonitoringManager) 的主实现文件。

为花名册各组件提供统一的结构化日志入口：根据配置把日志写入
（可轮转的）文件，并支持 JSON 格式输出与审计事件记录。
日志只写入文件，不会输出到控制台菜单。
"""
import json
import logging
import logging.handlers
import time
from pathlib import Path
from typing import Any, Dict, Optional

from config_manager.config_manager import ConfigManager


class StructuredJsonFormatter(logging.Formatter):
    """Renders each record as a single JSON object, merging its ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "lineno": record.lineno,
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        context = getattr(record, "context", None)
        if context:
            if isinstance(context, dict):
                log_record.update(context)
            else:
                log_record["context"] = str(context)
        return json.dumps(log_record, ensure_ascii=False, default=str)


class MonitoringManager:
    """
    花名册应用的日志门面。所有组件通过它记录诊断信息与审计事件。
    """

    def __init__(self, config_manager: ConfigManager):
        """
        Args:
            config_manager: 提供 ``monitoring.logging.*`` 配置项。
        """
        self.config_manager = config_manager
        self.logger = logging.getLogger(__name__)
        self._setup_logging()
        self.logger.info("MonitoringManager initialized.")

    def _build_handler(self, log_filepath: Path, rotation_config: Dict[str, Any]) -> logging.Handler:
        rotation_type = str(rotation_config.get("type", "size")).lower()
        if rotation_type == "size":
            return logging.handlers.RotatingFileHandler(
                log_filepath,
                maxBytes=rotation_config.get("max_bytes", 1024 * 1024 * 5),
                backupCount=rotation_config.get("backup_count", 3),
                encoding="utf-8",
            )
        if rotation_type == "time":
            return logging.handlers.TimedRotatingFileHandler(
                log_filepath,
                when=rotation_config.get("when", "midnight"),
                interval=rotation_config.get("interval", 1),
                backupCount=rotation_config.get("backup_count", 7),
                encoding="utf-8",
            )
        return logging.FileHandler(log_filepath, encoding="utf-8")

    def _setup_logging(self):
        log_enabled = self.config_manager.get_config("monitoring.logging.enabled", True)
        log_level_str = str(self.config_manager.get_config("monitoring.logging.level", "INFO"))
        log_level = getattr(logging, log_level_str.upper(), logging.INFO)

        self.logger.setLevel(log_level)
        # 日志不传播到根 logger，避免打扰控制台菜单的输出
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if not log_enabled:
            self.logger.addHandler(logging.NullHandler())
            return

        log_filepath = Path(
            self.config_manager.get_config("monitoring.logging.filepath", "logs/student_roster.log")
        )
        structured_json = self.config_manager.get_config("monitoring.logging.structured_json", True)
        rotation_config = self.config_manager.get_config("monitoring.logging.rotation", {})
        if not isinstance(rotation_config, dict):
            rotation_config = {}

        log_filepath.parent.mkdir(parents=True, exist_ok=True)
        handler = self._build_handler(log_filepath, rotation_config)
        if structured_json:
            handler.setFormatter(StructuredJsonFormatter())
        else:
            handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
        self.logger.addHandler(handler)

        self.logger.info(
            f"File logging set up. Level: {log_level_str}, Path: {log_filepath}, Structured: {structured_json}"
        )

    def _log(
        self,
        level: int,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        exc_info=None,
        **kwargs,
    ):
        extra_info = {}
        if context:
            extra_info.update(context)
        if kwargs:
            extra_info.update(kwargs)

        if extra_info:
            self.logger.log(level, message, exc_info=exc_info, extra={"context": extra_info})
        else:
            self.logger.log(level, message, exc_info=exc_info)

    def log_debug(self, message: str, context: Optional[Dict[str, Any]] = None, **kwargs):
        self._log(logging.DEBUG, message, context, **kwargs)

    def log_info(self, message: str, context: Optional[Dict[str, Any]] = None, **kwargs):
        self._log(logging.INFO, message, context, **kwargs)

    def log_warning(self, message: str, context: Optional[Dict[str, Any]] = None, **kwargs):
        self._log(logging.WARNING, message, context, **kwargs)

    def log_error(self, message: str, context: Optional[Dict[str, Any]] = None, **kwargs):
        self._log(logging.ERROR, message, context, **kwargs)

    def log_exception(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        exc_info=True,
        **kwargs,
    ):
        """记录异常信息 (附带 traceback)。"""
        self._log(logging.ERROR, message, context, exc_info=exc_info, **kwargs)

    def log_audit_event(self, event_type: str, user_id: Optional[str], details: Dict[str, Any]):
        """
        记录审计事件，例如 ``student_added`` / ``student_removed``。
        """
        audit_data = {
            "event_type": event_type,
            "user_id": user_id,
            "details": details,
            "timestamp_iso": time.strftime("%Y-%m-%dT%H:%M:%S%z", time.gmtime(time.time())),
        }
        self.log_info(f"Audit Event: {event_type}", context=audit_data)
