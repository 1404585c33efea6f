"""Output sink writing sample lines to stdout or a (time-named) log file."""
import logging
import sys
import time
from typing import Callable, Optional, TextIO

from rich.console import Console

from ..config import MAX_LOG_FILE_NAME_LENGTH
from ..core.errors import LogFileNameError, OutputError
from ..core.sample import Sample, format_line

logger = logging.getLogger(__name__)


def render_log_file_name(template: str, now: float) -> str:
    """Apply strftime directives in ``template`` using local time."""
    name = time.strftime(template, time.localtime(now))
    if not name or len(name) > MAX_LOG_FILE_NAME_LENGTH:
        raise LogFileNameError(
            f"log file name after applying time format is too long "
            f"(must be < {MAX_LOG_FILE_NAME_LENGTH})")
    return name


class OutputSink:
    """Writes one line per Sample to the active destination.

    With a log file template containing time directives, the file name is
    re-derived before every write and the sink switches files whenever the
    name changes. Switching always appends, nothing is truncated.
    """

    def __init__(self, log_file: Optional[str] = None, stream: Optional[TextIO] = None,
                 status_console: Optional[Console] = None,
                 clock: Callable[[], float] = time.time):
        """Initialize the sink; files are opened lazily on the first write."""
        self.log_file = log_file
        self.stream = stream
        self.status_console = status_console or Console(stderr=True)
        self.clock = clock
        self.current_name: Optional[str] = None
        self._handle: Optional[TextIO] = None
        self.time_encoded = False
        if log_file:
            try:
                self.time_encoded = render_log_file_name(log_file, clock()) != log_file
            except LogFileNameError:
                # Too long once rendered, so it must contain directives
                self.time_encoded = True

    def write(self, sample: Sample):
        """Serialize ``sample`` and write it in a single call."""
        line = format_line(sample)
        out = self._destination()
        try:
            out.write(line)
            out.flush()
        except OSError as e:
            raise OutputError(f"could not write to {self.current_name or 'stdout'}: {e}") from e

    def close(self):
        if self._handle is not None:
            self._handle.close()
            logger.debug("Closed log file %s", self.current_name)
            self._handle = None
            self.current_name = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _destination(self) -> TextIO:
        if not self.log_file:
            return self.stream if self.stream is not None else sys.stdout

        if self.time_encoded:
            name = render_log_file_name(self.log_file, self.clock())
        else:
            name = self.log_file

        if name != self.current_name or self._handle is None:
            self._open(name)
        return self._handle

    def _open(self, name: str):
        self.close()
        try:
            self._handle = open(name, 'a')
        except OSError as e:
            raise OutputError(f"could not open log file '{name}' for writing: {e}") from e
        self.current_name = name
        logger.debug("Opened log file %s", name)
        self.status_console.print(f"Writing to '{name}'...", markup=False, highlight=False, soft_wrap=True)
