"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    CONFIG_ERROR = 1
    NO_SUBCOMMAND = 1  # alias of CONFIG_ERROR
    USAGE_ERROR = 2
    TOOLCHAIN_ERROR = 101
    SPAWN_ERROR = 127


class Verbs(Enum):
    """Verbs the tool is invoked as.

    Args:
        Enum (string): Subcommand names Cargo passes as the first argument.
    """

    WHEN = "when"
    UNLESS = "unless"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    VERSION = "0.2.0"
    RUSTC = "rustc"
    CARGO = "cargo"
    ENV_RUSTC = "RUSTC"
    ENV_CARGO = "CARGO"
    ENV_CONFIG = "CARGO_WHEN_CONFIG"
    ENV_LOG_LEVEL = "CARGO_WHEN_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "WARNING"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    CONFIG_KEYS = ["rustc", "cargo", "log_level"]
    CHANNELS = ["stable", "beta", "nightly"]
    LIST_SEPARATOR = ","
    TOOLCHAIN_TIMEOUT = 30  # Timeout in seconds for `rustc -V`
