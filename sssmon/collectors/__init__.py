from .network_collector import NetworkCollector, parse_net_dev
from .system_collector import (
    SystemCollector,
    parse_cpu_times,
    parse_loadavg,
    parse_meminfo,
)
from .system_models import (
    CpuTimes,
    DiskUsage,
    LoadAverage,
    MemoryInfo,
    NetworkCounters,
    Readings,
)
