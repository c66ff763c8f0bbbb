#!/usr/bin/env python3

import os
import json
import tomllib
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .exit_codes import ConfigError, USAGE_ERROR

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("gitair")

MIN_INTERVAL_MINUTES = 0.5
MAX_INTERVAL_MINUTES = 30.0
CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. GITAIR_CONFIG environment variable
    2. ~/.gitair/ directory
    """
    if 'GITAIR_CONFIG' in os.environ:
        path = Path(os.environ['GITAIR_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.gitair'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path
    return config_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "general": {
            "interval_minutes": 0.5,
            "root": ".",
            "monorepo": False,
            "ai_commits": False
        },
        "discovery": {
            "skip_directories": ["node_modules", "vendor"]
        },
        "commit": {
            "provider_command": "gemini",
            "provider_timeout_seconds": 30,
            "max_diff_chars": 2000,
            "max_message_length": 72
        },
        "push": {
            "default_branch": "main"
        },
        "pull": {
            "min_interval_minutes": 1
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s"
        }
    }


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)
    if suffix in ['.yaml', '.yml']:
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    # Default to JSON format
    with open(config_path, 'r') as f:
        return json.load(f)


def load_config(config_path: Optional[Path] = None):
    """Load configuration from file, falling back to defaults."""
    config_path = config_path or get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            file_config = _read_config_file(config_path)
            if not isinstance(file_config, dict):
                raise ValueError("top level must be a mapping")
            config = merge_configs(config, file_config)
        except Exception as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def _coerce_env_value(value: str):
    if value.lower() in ('true', 'yes', 'on'):
        return True
    if value.lower() in ('false', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GITAIR_SECTION_KEY
    For example: GITAIR_GENERAL_INTERVAL_MINUTES=2
    """
    env_prefix = "GITAIR_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')
        typed_value = _coerce_env_value(value)

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if not matched_key:
                break

            # End of the env var: this is the key to set
            if i + best_match_len == len(key_parts):
                current_level[matched_key] = typed_value
                break

            if not isinstance(current_level[matched_key], dict):
                # Path conflict: env var is longer than the config path
                break
            current_level = current_level[matched_key]
            i += best_match_len

    return config


def parse_interval(value: Union[str, float, int]) -> float:
    """
    Parse a check interval given in minutes.

    Args:
        value: Minutes, as a number or numeric string

    Returns:
        Interval in seconds

    Raises:
        ConfigError: if the value is not numeric or outside [0.5, 30]
    """
    try:
        minutes = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid interval format: {e}", USAGE_ERROR)

    if not MIN_INTERVAL_MINUTES <= minutes <= MAX_INTERVAL_MINUTES:
        raise ConfigError(
            f"interval must be between {MIN_INTERVAL_MINUTES:g} and "
            f"{MAX_INTERVAL_MINUTES:g} minutes, got: {minutes:.1f}",
            USAGE_ERROR
        )

    return minutes * 60


@dataclass(frozen=True)
class SyncConfig:
    """
    Immutable settings for one gitair process.

    Built once at startup and passed explicitly to every component.

    Example:
        settings = SyncConfig.from_config(load_config(), interval="2")
        print(settings.pull_interval)  # 120.0
    """
    root: str = "."
    check_interval: float = 30.0
    force_composite: bool = False
    use_ai: bool = False
    skip_directories: Tuple[str, ...] = ("node_modules", "vendor")
    provider_command: str = "gemini"
    provider_timeout: float = 30.0
    max_diff_chars: int = 2000
    max_message_length: int = 72
    default_branch: str = "main"
    min_pull_interval: float = 60.0

    @property
    def pull_interval(self) -> float:
        """Pull passes never run more often than commit/push passes."""
        return max(self.check_interval, self.min_pull_interval)

    @property
    def check_interval_minutes(self) -> float:
        return self.check_interval / 60

    @classmethod
    def from_config(
        cls,
        config: Optional[Dict[str, Any]] = None,
        interval: Optional[Union[str, float]] = None,
        force_composite: Optional[bool] = None,
        use_ai: Optional[bool] = None,
        root: Optional[str] = None
    ) -> 'SyncConfig':
        """
        Build settings from a config dict plus command-line overrides.

        Arguments left as None fall back to the config dict, which
        in turn falls back to the defaults.

        Raises:
            ConfigError: if the interval is invalid
        """
        config = merge_configs(get_default_config(), config or {})
        general = config['general']
        commit = config['commit']

        if interval is None:
            interval = general['interval_minutes']
        if force_composite is None:
            force_composite = bool(general['monorepo'])
        if use_ai is None:
            use_ai = bool(general['ai_commits'])
        if root is None:
            root = general['root']

        try:
            return cls(
                root=os.path.expanduser(str(root)),
                check_interval=parse_interval(interval),
                force_composite=force_composite,
                use_ai=use_ai,
                skip_directories=tuple(config['discovery']['skip_directories']),
                provider_command=str(commit['provider_command']),
                provider_timeout=float(commit['provider_timeout_seconds']),
                max_diff_chars=int(commit['max_diff_chars']),
                max_message_length=int(commit['max_message_length']),
                default_branch=str(config['push']['default_branch']),
                min_pull_interval=float(config['pull']['min_interval_minutes']) * 60,
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid configuration value: {e}")
