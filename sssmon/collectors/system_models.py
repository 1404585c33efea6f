"""Typed results returned by the source readers.

Every field defaults to zero, so a reader that cannot parse its source
simply returns the model with the fields it did manage to fill.
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LoadAverage:
    """Load averages from /proc/loadavg."""
    load_1m: float = 0.0
    load_5m: float = 0.0
    load_15m: float = 0.0


@dataclass(frozen=True)
class CpuTimes:
    """Cumulative CPU ticks from the aggregate line of /proc/stat."""
    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0


@dataclass(frozen=True)
class MemoryInfo:
    """Raw /proc/meminfo counters, in kibibytes."""
    mem_total: int = 0
    mem_free: int = 0
    buffers: int = 0
    cached: int = 0
    swap_total: int = 0
    swap_free: int = 0


@dataclass(frozen=True)
class DiskUsage:
    """Filesystem usage in bytes."""
    total: int = 0
    used: int = 0
    available: int = 0


@dataclass(frozen=True)
class NetworkCounters:
    """Cumulative byte counters for one interface."""
    received: int = 0
    sent: int = 0


@dataclass(frozen=True)
class Readings:
    """Output of one pass over all readers."""
    load: LoadAverage = field(default_factory=LoadAverage)
    cpu: CpuTimes = field(default_factory=CpuTimes)
    memory: MemoryInfo = field(default_factory=MemoryInfo)
    disk: DiskUsage = field(default_factory=DiskUsage)
    network: NetworkCounters = field(default_factory=NetworkCounters)
