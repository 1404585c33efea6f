"""System metrics collector for load, CPU time, memory and disk usage.

Each source has a pure ``parse_*`` function working on text and a reader
method on ``SystemCollector`` that fetches the text. Sources are expected
to be trustworthy, so a missing file or malformed content is logged and
degrades the affected fields to zero instead of raising.
"""
import logging
import os
from typing import Callable, List, TypeVar

import psutil

from ..config import RunConfig
from .network_collector import NetworkCollector
from .system_models import (
    CpuTimes,
    DiskUsage,
    LoadAverage,
    MemoryInfo,
    Readings,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

CPU_TIME_FIELDS = (
    'user', 'nice', 'system', 'idle', 'iowait',
    'irq', 'softirq', 'steal', 'guest', 'guest_nice',
)

# /proc/meminfo label -> MemoryInfo field
MEMINFO_LABELS = {
    'MemTotal': 'mem_total',
    'MemFree': 'mem_free',
    'Buffers': 'buffers',
    'Cached': 'cached',
    'SwapTotal': 'swap_total',
    'SwapFree': 'swap_free',
}


def _leading_values(tokens: List[str], convert: Callable[[str], T], limit: int) -> List[T]:
    """Convert tokens in order, stopping at the first one that does not parse."""
    values = []
    for token in tokens[:limit]:
        try:
            values.append(convert(token))
        except ValueError:
            break
    return values


def _counter(token: str) -> int:
    value = int(token)
    if value < 0:
        raise ValueError(f"negative counter: {token}")
    return value


def parse_loadavg(text: str) -> LoadAverage:
    """Parse the first line of /proc/loadavg."""
    lines = text.splitlines()
    tokens = lines[0].split() if lines else []
    values = _leading_values(tokens, float, 3)
    if len(values) < 3:
        logger.warning("Short load average line: %r", lines[0] if lines else '')
    return LoadAverage(*values)


def parse_cpu_times(text: str) -> CpuTimes:
    """Parse the aggregate line of /proc/stat.

    The leading label (normally ``cpu``) is discarded; up to ten counters
    follow. Older kernels report fewer, the missing ones stay zero.
    """
    lines = text.splitlines()
    tokens = lines[0].split()[1:] if lines else []
    values = _leading_values(tokens, _counter, len(CPU_TIME_FIELDS))
    if len(values) < len(CPU_TIME_FIELDS):
        logger.debug("CPU time line has %d of %d counters", len(values), len(CPU_TIME_FIELDS))
    return CpuTimes(**dict(zip(CPU_TIME_FIELDS, values)))


def parse_meminfo(text: str) -> MemoryInfo:
    """Parse /proc/meminfo. Line order does not matter, unknown labels are ignored."""
    values = {}
    for line in text.splitlines():
        parts = line.split()
        if not parts or not parts[0].endswith(':'):
            continue
        name = MEMINFO_LABELS.get(parts[0][:-1])
        if name is None:
            continue
        parsed = _leading_values(parts[1:], int, 1)
        if not parsed:
            logger.warning("Unparsable meminfo line: %r", line)
            continue
        values[name] = parsed[0]
    return MemoryInfo(**values)


class SystemCollector:
    """Collects load, CPU time, memory, disk and network readings."""

    def __init__(self, config: RunConfig):
        """Initialize the system collector."""
        self.config = config
        self.network = NetworkCollector(config)

    def _read_source(self, name: str, parser: Callable[[str], T], default: T) -> T:
        path = os.path.join(self.config.proc_root, name)
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                text = f.read()
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            return default
        return parser(text)

    def read_load_average(self) -> LoadAverage:
        return self._read_source('loadavg', parse_loadavg, LoadAverage())

    def read_cpu_times(self) -> CpuTimes:
        return self._read_source('stat', parse_cpu_times, CpuTimes())

    def read_memory(self) -> MemoryInfo:
        return self._read_source('meminfo', parse_meminfo, MemoryInfo())

    def read_disk_usage(self) -> DiskUsage:
        """Get filesystem usage for the configured stat path.

        psutil computes total as blocks * frsize, used as
        (blocks - bfree) * frsize and free as bavail * frsize.
        """
        try:
            usage = psutil.disk_usage(self.config.stat_path)
        except OSError as e:
            logger.warning("Cannot stat %s: %s", self.config.stat_path, e)
            return DiskUsage()
        return DiskUsage(total=usage.total, used=usage.used, available=usage.free)

    def collect(self) -> Readings:
        """Run every reader once."""
        return Readings(
            load=self.read_load_average(),
            cpu=self.read_cpu_times(),
            memory=self.read_memory(),
            disk=self.read_disk_usage(),
            network=self.network.read_counters(),
        )
