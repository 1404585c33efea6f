import os
from collections import namedtuple

import psutil
import pytest

from sssmon.config import RunConfig

LOADAVG = "0.52 0.58 0.59 2/1234 5678\n"
STAT = (
    "cpu  10 20 30 40 50 60 70 80 90 100\n"
    "cpu0 5 10 15 20 25 30 35 40 45 50\n"
    "intr 12345 0 0\n"
)
MEMINFO = (
    "MemTotal:       16000000 kB\n"
    "MemFree:         4000000 kB\n"
    "MemAvailable:    9000000 kB\n"
    "Buffers:          500000 kB\n"
    "Cached:          3000000 kB\n"
    "SwapCached:            0 kB\n"
    "SwapTotal:       2000000 kB\n"
    "SwapFree:        1500000 kB\n"
)
NET_DEV = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed\n"
    "    lo:    9000      90    0    0    0     0          0         0     9000      90    0    0    0     0       0          0\n"
    "  eth0:  100 2 0 0 0 0 0 0  500 4 0 0 0 0 0 0\n"
)

DiskTuple = namedtuple('sdiskusage', ['total', 'used', 'free', 'percent'])
FAKE_DISK = DiskTuple(total=1000 * 4096, used=400 * 4096, free=550 * 4096, percent=40.0)


def write_proc(root, loadavg=LOADAVG, stat=STAT, meminfo=MEMINFO, net_dev=NET_DEV):
    """Lay out a fake /proc tree; a None source is left out."""
    os.makedirs(os.path.join(root, 'net'), exist_ok=True)
    for name, text in (('loadavg', loadavg), ('stat', stat),
                       ('meminfo', meminfo), (os.path.join('net', 'dev'), net_dev)):
        if text is not None:
            with open(os.path.join(root, name), 'w') as f:
                f.write(text)
    return str(root)


@pytest.fixture
def proc_root(tmp_path):
    return write_proc(tmp_path / 'proc')


@pytest.fixture
def fake_disk(monkeypatch):
    monkeypatch.setattr(psutil, 'disk_usage', lambda path: FAKE_DISK)
    return FAKE_DISK


@pytest.fixture
def config(proc_root, tmp_path):
    return RunConfig(proc_root=proc_root, stat_path=str(tmp_path))
