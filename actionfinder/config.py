"""
Configuration management for actionfinder.

This module provides configuration loading with sensible defaults for where
to look for action modules and how to enumerate their exports.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from .types import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = [".actionfinder.yml", ".actionfinder.yaml", "actionfinder.yml", "actionfinder.yaml"]


@dataclass
class ActionFinderConfig:
    """Configuration for action discovery and completion."""

    # Dependency modules searched for actions
    modules: List[str] = field(default_factory=lambda: ["huddles-app"])
    node_module_paths: List[str] = field(default_factory=lambda: ["node_modules"])
    file_globs: List[str] = field(default_factory=lambda: ["**/*Actions.js"])

    # Local source files searched for actions
    local_file_globs: List[str] = field(default_factory=lambda: ["**/*Actions.js"])
    local_source_dir: str = "src"

    # Completion is offered on lines containing this keyword
    trigger: str = "dispatch"

    # Export enumeration
    use_introspection: bool = True
    node_binary: str = "node"
    introspection_timeout: float = 10.0


# name -> (type, description), rendered by `actionfinder docs`
CONFIG_OPTIONS: Dict[str, Dict[str, str]] = {
    "modules": {
        "type": "array",
        "description": "Dependency modules to search for action creators.",
    },
    "node_module_paths": {
        "type": "array",
        "description": "Directories holding installed dependencies, relative to the workspace root.",
    },
    "file_globs": {
        "type": "array",
        "description": "Glob patterns, relative to each dependency module, matching action files.",
    },
    "local_file_globs": {
        "type": "array",
        "description": "Glob patterns, relative to local_source_dir, matching local action files.",
    },
    "local_source_dir": {
        "type": "string",
        "description": "Workspace directory holding the project's own sources.",
    },
    "trigger": {
        "type": "string",
        "description": "Completions are offered on lines containing this text.",
    },
    "use_introspection": {
        "type": "boolean",
        "description": "Load modules with Node.js to list exports before falling back to parsing.",
    },
    "node_binary": {
        "type": "string",
        "description": "Node.js executable used for introspection.",
    },
    "introspection_timeout": {
        "type": "number",
        "description": "Seconds to wait for Node.js to load one module.",
    },
}


def _validate(values: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(values) - set(CONFIG_OPTIONS)
    if unknown:
        raise ConfigError(f"Unknown configuration options: {', '.join(sorted(unknown))}")

    for name, value in values.items():
        expected = CONFIG_OPTIONS[name]["type"]
        if expected == "array" and not (isinstance(value, list) and all(isinstance(v, str) for v in value)):
            raise ConfigError(f"{name} must be a list of strings")
        if expected == "string" and not isinstance(value, str):
            raise ConfigError(f"{name} must be a string")
        if expected == "boolean" and not isinstance(value, bool):
            raise ConfigError(f"{name} must be true or false")
        if expected == "number" and (isinstance(value, bool) or not isinstance(value, (int, float))):
            raise ConfigError(f"{name} must be a number")
    return values


def load_config(config_path: Optional[str] = None) -> ActionFinderConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, uses defaults.

    Returns:
        ActionFinderConfig instance
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ConfigError("top level must be a mapping")

            return ActionFinderConfig(**_validate(file_config))

        except (OSError, yaml.YAMLError, ConfigError) as e:
            logger.warning("Failed to load config from %s: %s. Using default configuration.", config_path, e)

    return ActionFinderConfig()


def get_default_config() -> ActionFinderConfig:
    """Get default configuration without loading from file."""
    return load_config(None)


def save_config(config: ActionFinderConfig, config_path: str) -> None:
    """
    Save configuration to file.

    Args:
        config: ActionFinderConfig to save
        config_path: Path where to save the config
    """
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(config), f, default_flow_style=False, indent=2)


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks for .actionfinder.yml, .actionfinder.yaml, actionfinder.yml and
    actionfinder.yaml, in that order, in each directory.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    current_path = os.path.abspath(start_path)

    while True:
        for config_name in CONFIG_FILE_NAMES:
            config_path = os.path.join(current_path, config_name)
            if os.path.exists(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached the root directory
            break
        current_path = parent_path

    return None


def render_options_markdown(defaults: Optional[ActionFinderConfig] = None) -> str:
    """Configuration reference in markdown, one line per option."""
    defaults = defaults or ActionFinderConfig()
    values = asdict(defaults)
    lines = ["## Configuration options", ""]
    for name, option in CONFIG_OPTIONS.items():
        default = json.dumps(values[name])
        lines.append(f"`{name}`: {option['type']} (defaults to {default}) - {option['description']}")
    return "\n".join(lines) + "\n"
