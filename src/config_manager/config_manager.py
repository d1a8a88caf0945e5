# -*- coding: utf-8 -*-
"""配置管理器 (ConfigManager) 的主实现文件。

从 config.json 以及可选的 config.<APP_ENV>.json 加载配置，深度合并后
通过点号路径 (例如 "monitoring.logging.level") 对外提供，
并允许映射表中的环境变量覆盖对应的配置项。
"""
import copy
import json
import logging
import os

logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


class ConfigManager:
    _instance = None
    _config = None
    _config_dir = None
    _base_config_filename = "config.json"
    _env_var_map = {
        "monitoring.logging.level": "ROSTER_LOG_LEVEL",
        "monitoring.logging.filepath": "ROSTER_LOG_FILE",
    }

    def __new__(cls, config_dir=None):
        """
        Returns the process-wide ConfigManager.

        The first call fixes the config directory (``config_dir`` or the current
        working directory) and loads the files. Later calls with a different
        directory are ignored with a warning; use reload_config() to switch.
        """
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            if config_dir:
                cls._config_dir = os.path.abspath(config_dir)
                logger.info(
                    f"ConfigManager initializing. Config directory explicitly set to: {cls._config_dir}"
                )
            else:
                cls._config_dir = os.path.abspath(os.getcwd())
                logger.info(
                    f"ConfigManager initializing. No config_dir provided, using current working directory: {cls._config_dir}"
                )
            cls._instance._load_config()
        elif config_dir:
            requested_dir = os.path.abspath(config_dir)
            if cls._config_dir != requested_dir:
                logger.warning(
                    f"ConfigManager already initialized with config directory {cls._config_dir}. "
                    f"Ignoring attempt to re-initialize with different directory {requested_dir}. "
                    "Use reload_config() to explicitly change settings and reload."
                )
        return cls._instance

    @classmethod
    def _get_config_path(cls, filename):
        if not cls._config_dir:
            cls._config_dir = os.path.abspath(os.getcwd())
            logger.warning(f"Config directory was unset, falling back to CWD: {cls._config_dir}")
        return os.path.join(cls._config_dir, filename)

    @staticmethod
    def _deep_merge(source, destination):
        """Merges ``source`` into ``destination`` in place; lists are replaced, not merged."""
        for key, value in source.items():
            if isinstance(value, dict):
                node = destination.setdefault(key, {})
                if isinstance(node, dict):
                    ConfigManager._deep_merge(value, node)
                else:
                    destination[key] = copy.deepcopy(value)
            elif isinstance(value, list):
                destination[key] = copy.deepcopy(value)
            else:
                destination[key] = value
        return destination

    @staticmethod
    def _read_json_file(path, missing_level=logging.WARNING, missing_message=None):
        """Reads one JSON config file. Any failure is logged and yields ``{}``."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.log(missing_level, missing_message or f"Config file not found at {path}.")
            return {}
        except json.JSONDecodeError as e:
            logger.error(f"Could not decode JSON from {path}: {e}. Ignoring this file.")
            return {}
        except (IOError, OSError) as e:
            logger.error(
                f"Permission denied while trying to read config file {path}: {e}. Ignoring this file."
            )
            return {}
        if not isinstance(data, dict):
            logger.error(f"Config file {path} does not contain a JSON object. Ignoring this file.")
            return {}
        logger.info(f"Loaded config from {path}")
        return data

    def _load_config(self):
        base_path = self._get_config_path(self._base_config_filename)
        base_config = self._read_json_file(
            base_path,
            missing_message=f"Base config file not found at {base_path}. Starting with empty base config.",
        )

        app_env = os.environ.get("APP_ENV")
        env_config = {}
        env_config_filename = None
        if app_env:
            stem = os.path.splitext(self._base_config_filename)[0]
            env_config_filename = f"{stem}.{app_env}.json"
            env_config_path = self._get_config_path(env_config_filename)
            env_config = self._read_json_file(
                env_config_path,
                missing_level=logging.INFO,
                missing_message=f"Environment-specific config file {env_config_path} is absent; using base config only.",
            )
        else:
            logger.info("APP_ENV environment variable not set. No environment-specific config file loaded.")

        merged_config = copy.deepcopy(base_config)
        self._deep_merge(env_config, merged_config)
        self.__class__._config = merged_config

        if isinstance(merged_config.get("ENV_VAR_MAP"), dict):
            self.__class__._env_var_map = merged_config["ENV_VAR_MAP"]
            logger.info(f"Environment variable map replaced from configuration: {self.__class__._env_var_map}")

        logger.info(
            f"Configuration loaded. APP_ENV='{app_env}'. Priority: Env Vars > Env File ('{env_config_filename}') > Base File ('{self._base_config_filename}')."
        )

    def reload_config(self, config_dir=None, base_filename=None, app_env_override=None):
        """
        Reloads configuration from disk.

        ``config_dir`` and ``base_filename`` change the singleton's state for every
        later call. ``app_env_override`` only applies to this reload.
        """
        logger.info("Reloading configuration...")
        original_env = os.environ.get("APP_ENV")
        if app_env_override:
            os.environ["APP_ENV"] = app_env_override

        if config_dir:
            new_config_dir = os.path.abspath(config_dir)
            if new_config_dir != self.__class__._config_dir:
                self.__class__._config_dir = new_config_dir
                logger.warning(f"Configuration directory changed to: {new_config_dir}")
        if base_filename and base_filename != self.__class__._base_config_filename:
            self.__class__._base_config_filename = base_filename
            logger.info(f"Base configuration filename changed to: {base_filename}")

        try:
            self._load_config()
        finally:
            if app_env_override:
                if original_env is None:
                    del os.environ["APP_ENV"]
                else:
                    os.environ["APP_ENV"] = original_env

    @staticmethod
    def _coerce_env_value(raw):
        if raw.lower() == "true":
            return True
        if raw.lower() == "false":
            return False
        for caster in (int, float):
            try:
                return caster(raw)
            except ValueError:
                continue
        return raw

    def get_config(self, key, default_value=None):
        """
        Looks up a configuration value.

        Args:
            key (str): Dot-separated path, e.g. "monitoring.logging.level".
                An empty key returns the whole configuration.
            default_value: Returned when the key is missing.

        Returns:
            The environment override when the key is mapped and the variable is set,
            else the value from the loaded files, else ``default_value``.
        """
        env_var_map = self.__class__._env_var_map or {}
        if key in env_var_map:
            env_var_name = env_var_map[key]
            raw = os.environ.get(env_var_name)
            if raw is not None:
                logger.info(
                    f"Configuration '{key}' overridden by environment variable '{env_var_name}' with value '{raw}'."
                )
                return self._coerce_env_value(raw)

        if self.__class__._config is None:
            logger.warning("Config accessed before initial load. Loading now.")
            self._load_config()

        if key == "":
            if default_value is not None:
                return default_value
            return self.__class__._config

        value = self.__class__._config
        try:
            for part in key.split("."):
                if not isinstance(value, dict):
                    raise KeyError(part)
                value = value[part]
        except KeyError:
            logger.debug(f"Configuration key '{key}' not found; using default.")
            return default_value
        return value
