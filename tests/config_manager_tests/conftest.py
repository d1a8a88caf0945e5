"""Shared fixtures for ConfigManager tests."""

import json
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from config_manager.config_manager import ConfigManager

_DEFAULT_ENV_VAR_MAP = dict(ConfigManager._env_var_map)
_DEFAULT_BASE_FILENAME = ConfigManager._base_config_filename


def reset_config_manager_singleton():
    """Resets the ConfigManager singleton instance and its class-level state."""
    ConfigManager._instance = None
    ConfigManager._config_dir = None
    ConfigManager._config = None
    ConfigManager._env_var_map = dict(_DEFAULT_ENV_VAR_MAP)
    ConfigManager._base_config_filename = _DEFAULT_BASE_FILENAME


@pytest.fixture(autouse=True)
def reset_singleton_before_each_test():
    reset_config_manager_singleton()
    yield
    reset_config_manager_singleton()


@pytest.fixture
def temp_config_dir(tmp_path):
    config_dir = tmp_path / "config_test_dir"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def base_config_content():
    return {
        "monitoring": {
            "logging": {
                "enabled": True,
                "level": "INFO",
                "filepath": "logs/base.log",
                "structured_json": True,
            }
        },
        "console_menu": {"example_class": "A1"},
        "app_name": "student-roster",
    }


@pytest.fixture
def env_specific_config_content():
    return {
        "monitoring": {
            "logging": {
                "level": "DEBUG",
                "rotation": {"type": "time", "when": "midnight"},
            }
        },
        "console_menu": {"example_class": "B2"},
        "maintainer": "registrar",
    }


@pytest.fixture
def create_base_config_file(temp_config_dir, base_config_content):
    config_file_path = temp_config_dir / "config.json"
    with open(config_file_path, 'w') as f:
        json.dump(base_config_content, f)
    return config_file_path


@pytest.fixture
def create_env_specific_config_file(temp_config_dir, env_specific_config_content):
    env_name = "staging"
    env_config_file_path = temp_config_dir / f"config.{env_name}.json"
    with open(env_config_file_path, 'w') as f:
        json.dump(env_specific_config_content, f)
    return env_config_file_path, env_name


@pytest.fixture
def create_invalid_json_file(temp_config_dir):
    invalid_file_path = temp_config_dir / "invalid_config.json"
    with open(invalid_file_path, 'w') as f:
        f.write("this is not valid json {")
    return invalid_file_path
