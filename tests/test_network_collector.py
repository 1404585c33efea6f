from sssmon.collectors import NetworkCollector, NetworkCounters, parse_net_dev
from sssmon.config import RunConfig

from .conftest import NET_DEV, write_proc


def test_matching_row():
    text = "eth0: 100 0 0 0 0 0 0 0 500 0 0 0 0 0 0 0\n"
    assert parse_net_dev(text, 'eth0') == NetworkCounters(received=100, sent=500)


def test_no_matching_row():
    assert parse_net_dev(NET_DEV, 'wlan0') == NetworkCounters()


def test_prefix_of_other_interface_does_not_match():
    text = "eth01: 1 0 0 0 0 0 0 0 2 0 0 0 0 0 0 0\n"
    assert parse_net_dev(text, 'eth0') == NetworkCounters()


def test_first_match_wins():
    text = ("eth0: 1 0 0 0 0 0 0 0 2 0 0 0 0 0 0 0\n"
            "eth0: 3 0 0 0 0 0 0 0 4 0 0 0 0 0 0 0\n")
    assert parse_net_dev(text, 'eth0') == NetworkCounters(received=1, sent=2)


def test_no_space_after_colon():
    text = "eth0:4294967296 0 0 0 0 0 0 0 77 0 0 0 0 0 0 0\n"
    assert parse_net_dev(text, 'eth0') == NetworkCounters(received=4294967296, sent=77)


def test_short_row_is_treated_as_no_match():
    assert parse_net_dev("eth0: 100 0 0 0 0\n", 'eth0') == NetworkCounters()


def test_header_rows_never_match():
    assert parse_net_dev(NET_DEV, 'face') == NetworkCounters()


def test_collector_reads_configured_interface(tmp_path):
    root = write_proc(tmp_path / 'proc')
    collector = NetworkCollector(RunConfig(proc_root=root, network_interface='lo'))
    assert collector.read_counters() == NetworkCounters(received=9000, sent=9000)


def test_collector_missing_table(tmp_path):
    collector = NetworkCollector(RunConfig(proc_root=str(tmp_path / 'nowhere')))
    assert collector.read_counters() == NetworkCounters()
