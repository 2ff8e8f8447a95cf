"""Configuration for the swiftgate hook.

Resolution order (later wins):
1. GateConfig defaults
2. YAML file: $SWIFTGATE_CONFIG, else <project>/.claude/swiftgate.yaml
3. Environment variables (SWIFTGATE_*)

Example .claude/swiftgate.yaml:

    swift_command: ["xcrun", "swift", "-parse"]
    extensions: [".swift"]
    log_level: DEBUG
"""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigError
from .logging_config import DEFAULT_LOG_DIR

CONFIG_ENV_VAR = "SWIFTGATE_CONFIG"
CONFIG_FILE_NAME = "swiftgate.yaml"

_FALSY = {"0", "false", "no", "off"}


@dataclass
class GateConfig:
    """Settings for one hook invocation."""

    swift_command: list[str] = field(default_factory=lambda: ["swift", "-parse"])
    extensions: tuple[str, ...] = (".swift",)
    log_dir: str = DEFAULT_LOG_DIR
    log_level: str = "INFO"
    logging_enabled: bool = True

    def matches(self, file_path: str) -> bool:
        """Check whether a path carries one of the target extensions."""
        return bool(file_path) and file_path.endswith(self.extensions)


def default_config_path(env: dict[str, str] | None = None) -> Path:
    """Locate the YAML config file for the current invocation."""
    env = os.environ if env is None else env
    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(os.path.expanduser(explicit))

    project_dir = env.get("CLAUDE_PROJECT_DIR") or os.getcwd()
    return Path(project_dir) / ".claude" / CONFIG_FILE_NAME


def _as_command(value, source: str) -> list[str]:
    if isinstance(value, str):
        command = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(v, str) for v in value):
        command = list(value)
    else:
        raise ConfigError(f"{source}: swift_command must be a string or list of strings")
    if not command:
        raise ConfigError(f"{source}: swift_command must not be empty")
    return command


def _as_extensions(value, source: str) -> tuple[str, ...]:
    if isinstance(value, str):
        items = [v.strip() for v in value.split(",")]
    elif isinstance(value, list) and all(isinstance(v, str) for v in value):
        items = [v.strip() for v in value]
    else:
        raise ConfigError(f"{source}: extensions must be a string or list of strings")

    extensions = tuple(e if e.startswith(".") else f".{e}" for e in items if e)
    if not extensions:
        raise ConfigError(f"{source}: extensions must not be empty")
    return extensions


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY
    return bool(value)


def _load_yaml_file(path: Path) -> dict:
    """Load and parse the YAML config file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    except OSError as e:
        raise ConfigError(f"{path}: cannot read: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
    return data


def _apply_file(config: GateConfig, data: dict, source: str) -> None:
    if "swift_command" in data:
        config.swift_command = _as_command(data["swift_command"], source)
    if "extensions" in data:
        config.extensions = _as_extensions(data["extensions"], source)
    if "log_dir" in data:
        config.log_dir = str(data["log_dir"])
    if "log_level" in data:
        config.log_level = str(data["log_level"]).upper()
    if "logging" in data:
        config.logging_enabled = _as_bool(data["logging"])


def _apply_env(config: GateConfig, env: dict[str, str]) -> None:
    if env.get("SWIFTGATE_SWIFT_COMMAND"):
        config.swift_command = _as_command(env["SWIFTGATE_SWIFT_COMMAND"], "SWIFTGATE_SWIFT_COMMAND")
    if env.get("SWIFTGATE_EXTENSIONS"):
        config.extensions = _as_extensions(env["SWIFTGATE_EXTENSIONS"], "SWIFTGATE_EXTENSIONS")
    if env.get("SWIFTGATE_LOG_DIR"):
        config.log_dir = env["SWIFTGATE_LOG_DIR"]
    if env.get("SWIFTGATE_LOG_LEVEL"):
        config.log_level = env["SWIFTGATE_LOG_LEVEL"].upper()
    if "SWIFTGATE_LOGGING" in env:
        config.logging_enabled = _as_bool(env["SWIFTGATE_LOGGING"])


def load_config(path: Path | None = None, env: dict[str, str] | None = None) -> GateConfig:
    """Build the effective configuration.

    Args:
        path: YAML file to read. Defaults to default_config_path(); a missing
            file is not an error.
        env: Environment mapping (default: os.environ)

    Raises:
        ConfigError: If the YAML file or an override is invalid.
    """
    env = dict(os.environ) if env is None else env
    config = GateConfig()

    config_path = path if path is not None else default_config_path(env)
    try:
        found = config_path.is_file()
    except (OSError, ValueError) as e:
        raise ConfigError(f"{config_path}: cannot stat: {e}") from e
    if found:
        _apply_file(config, _load_yaml_file(config_path), str(config_path))

    _apply_env(config, env)
    return config
