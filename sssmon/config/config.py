"""Main configuration data structure."""
import logging
from dataclasses import dataclass
from typing import Optional

import psutil

from ..core.errors import ConfigError

DEFAULT_PERIOD = 1
DEFAULT_NETWORK_INTERFACE = "eth0"
DEFAULT_STAT_PATH = "."
DEFAULT_ITERATIONS = 0
DEFAULT_PROC_ROOT = "/proc"
DEFAULT_LOG_LEVEL = "INFO"

# Upper bound for log file names, before and after time formatting
MAX_LOG_FILE_NAME_LENGTH = 512


@dataclass(frozen=True)
class RunConfig:
    """Process-wide settings, built once at startup."""
    period: int = DEFAULT_PERIOD
    network_interface: str = DEFAULT_NETWORK_INTERFACE
    stat_path: str = DEFAULT_STAT_PATH
    log_file: Optional[str] = None
    iterations: int = DEFAULT_ITERATIONS
    proc_root: str = DEFAULT_PROC_ROOT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Reject invalid values."""
        if isinstance(self.period, bool) or not isinstance(self.period, int):
            raise ConfigError(f"period ({self.period!r}) is not an integer")
        if self.period < 1:
            raise ConfigError(f"period ({self.period}) is less than one")
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int):
            raise ConfigError(f"iterations ({self.iterations!r}) is not an integer")
        if self.iterations < 0:
            raise ConfigError(f"iterations ({self.iterations}) is negative")
        if not self.network_interface:
            raise ConfigError("network interface name is empty")
        if self.log_file is not None:
            if not self.log_file:
                raise ConfigError("log file name is empty")
            if len(self.log_file) > MAX_LOG_FILE_NAME_LENGTH:
                raise ConfigError(
                    f"log file name is too long (must be < {MAX_LOG_FILE_NAME_LENGTH})")
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ConfigError(f"unknown log level ({self.log_level!r})")

    def check_stat_path(self):
        """Make sure filesystem statistics can be read for the stat path."""
        try:
            psutil.disk_usage(self.stat_path)
        except OSError as e:
            raise ConfigError(
                f"stat path ({self.stat_path}) does not exist or cannot be used") from e

    @property
    def use_log_file(self) -> bool:
        return self.log_file is not None
