"""Runtime settings: CLI flags, environment variables and an optional YAML file.

Precedence, highest first: CLI flag, environment variable, config file,
built-in default from Constants.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be read or is malformed."""


@dataclass
class Settings:
    """Resolved runtime settings."""

    rustc: str = Constants.RUSTC
    cargo: str = Constants.CARGO
    log_level: str = Constants.DEFAULT_LOG_LEVEL


def load_config_file(config_path: Optional[str], required: bool = True) -> Dict[str, Any]:
    """Load the YAML configuration file.

    Args:
        config_path: Path to the YAML file, or None.
        required: Whether a missing file is an error (explicit --config)
            or silently ignored.

    Returns:
        The top-level mapping, or an empty dict when there is nothing to load.

    Raises:
        ConfigError: If the file is missing (when required), unreadable, not
            valid YAML, or not a mapping.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        if required:
            raise ConfigError(f"Config file not found: {config_path}")
        logger.debug("Config file not found, ignoring: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Unable to read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping at the top level")

    for key in data:
        if key not in Constants.CONFIG_KEYS:
            logger.debug("Ignoring unknown config key: %s", key)
    return data


def _pick(*candidates: Any) -> Any:
    for candidate in candidates:
        if candidate is not None and candidate != "":
            return candidate
    return None


def resolve_settings(args: Any, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Merge CLI arguments, environment variables and the config file.

    Args:
        args: Parsed CLI namespace (CONFIG and LOG_LEVEL are read if present).
        environ: Environment mapping; defaults to os.environ.

    Raises:
        ConfigError: If the config file cannot be loaded.
    """
    env = os.environ if environ is None else environ

    cli_path = getattr(args, "CONFIG", None)
    if cli_path:
        file_cfg = load_config_file(cli_path, required=True)
    else:
        file_cfg = load_config_file(env.get(Constants.ENV_CONFIG), required=False)

    defaults = Settings()
    settings = Settings(
        rustc=str(_pick(env.get(Constants.ENV_RUSTC), file_cfg.get("rustc"), defaults.rustc)),
        cargo=str(_pick(env.get(Constants.ENV_CARGO), file_cfg.get("cargo"), defaults.cargo)),
        log_level=str(
            _pick(
                getattr(args, "LOG_LEVEL", None),
                env.get(Constants.ENV_LOG_LEVEL),
                file_cfg.get("log_level"),
                defaults.log_level,
            )
        ).upper(),
    )
    logger.debug("Resolved settings: %s", settings)
    return settings
