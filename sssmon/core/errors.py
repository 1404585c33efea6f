"""Fatal error types for sss-mon.

Anything raised from here ends the process; recoverable read problems
never raise and are handled inside the readers.
"""


class SssMonError(Exception):
    """Base class for fatal sss-mon errors."""


class ConfigError(SssMonError):
    """Invalid static configuration."""


class OutputError(SssMonError):
    """The output destination cannot be opened for writing."""


class LogFileNameError(OutputError):
    """A log file name could not be derived from its time template."""
