"""Sample record, assembly from reader outputs, and line serialization."""
from dataclasses import dataclass
from typing import Optional

from ..collectors.system_models import Readings

KIBIBYTE = 1024

# Output column name -> Sample attribute, in output order
FIELDS = (
    ('date', 'wall_time_ms'),
    ('time_delta', 'time_delta'),
    ('cpu_load_1m', 'cpu_load_1m'),
    ('cpu_load_5m', 'cpu_load_5m'),
    ('cpu_load_15m', 'cpu_load_15m'),
    ('cpu_time_user', 'cpu_time_user'),
    ('cpu_time_nice', 'cpu_time_nice'),
    ('cpu_time_system', 'cpu_time_system'),
    ('cpu_time_idle', 'cpu_time_idle'),
    ('cpu_time_iowait', 'cpu_time_iowait'),
    ('cpu_time_irq', 'cpu_time_irq'),
    ('cpu_time_softirq', 'cpu_time_softirq'),
    ('cpu_time_steal', 'cpu_time_steal'),
    ('cpu_time_guest', 'cpu_time_guest'),
    ('cpu_time_guest_nice', 'cpu_time_guest_nice'),
    ('memory_total', 'memory_total'),
    ('memory_used', 'memory_used'),
    ('swap_total', 'swap_total'),
    ('swap_used', 'swap_used'),
    ('disk_total', 'disk_total'),
    ('disk_used', 'disk_used'),
    ('disk_available', 'disk_available'),
    ('network_received', 'network_received'),
    ('network_sent', 'network_sent'),
)

FIELD_NAMES = tuple(name for name, _ in FIELDS)


@dataclass(frozen=True)
class Sample:
    """One snapshot of host metrics.

    Times are in milliseconds, memory, swap and disk sizes in bytes.
    CPU times are cumulative ticks since boot, not rates.
    """
    wall_time_ms: int = 0
    monotonic_time: int = 0
    time_delta: int = 0
    cpu_load_1m: float = 0.0
    cpu_load_5m: float = 0.0
    cpu_load_15m: float = 0.0
    cpu_time_user: int = 0
    cpu_time_nice: int = 0
    cpu_time_system: int = 0
    cpu_time_idle: int = 0
    cpu_time_iowait: int = 0
    cpu_time_irq: int = 0
    cpu_time_softirq: int = 0
    cpu_time_steal: int = 0
    cpu_time_guest: int = 0
    cpu_time_guest_nice: int = 0
    memory_total: int = 0
    memory_used: int = 0
    swap_total: int = 0
    swap_used: int = 0
    disk_total: int = 0
    disk_used: int = 0
    disk_available: int = 0
    network_received: int = 0
    network_sent: int = 0


def assemble_sample(readings: Readings, wall_time_ms: int, monotonic_time: int,
                    previous_monotonic: Optional[int] = None) -> Sample:
    """Combine reader outputs into a Sample.

    ``time_delta`` is zero when there is no previous tick. Used memory and
    swap may come out negative if the host reports inconsistent numbers;
    they are passed through as is.
    """
    time_delta = 0 if previous_monotonic is None else monotonic_time - previous_monotonic
    load, cpu, mem = readings.load, readings.cpu, readings.memory
    memory_used = mem.mem_total - mem.mem_free - mem.buffers - mem.cached
    swap_used = mem.swap_total - mem.swap_free

    return Sample(
        wall_time_ms=wall_time_ms,
        monotonic_time=monotonic_time,
        time_delta=time_delta,
        cpu_load_1m=load.load_1m,
        cpu_load_5m=load.load_5m,
        cpu_load_15m=load.load_15m,
        cpu_time_user=cpu.user,
        cpu_time_nice=cpu.nice,
        cpu_time_system=cpu.system,
        cpu_time_idle=cpu.idle,
        cpu_time_iowait=cpu.iowait,
        cpu_time_irq=cpu.irq,
        cpu_time_softirq=cpu.softirq,
        cpu_time_steal=cpu.steal,
        cpu_time_guest=cpu.guest,
        cpu_time_guest_nice=cpu.guest_nice,
        memory_total=mem.mem_total * KIBIBYTE,
        memory_used=memory_used * KIBIBYTE,
        swap_total=mem.swap_total * KIBIBYTE,
        swap_used=swap_used * KIBIBYTE,
        disk_total=readings.disk.total,
        disk_used=readings.disk.used,
        disk_available=readings.disk.available,
        network_received=readings.network.received,
        network_sent=readings.network.sent,
    )


def _format_value(value) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def format_line(sample: Sample) -> str:
    """Render a Sample as one space-separated, newline-terminated line."""
    return ' '.join(_format_value(getattr(sample, attr)) for _, attr in FIELDS) + '\n'
