"""Main entry point for the sss-mon sampler."""
import argparse
import logging
import sys

from . import __version__
from .config import ConfigManager, MAX_LOG_FILE_NAME_LENGTH
from .core.data_manager import CollectionLoop
from .core.errors import ConfigError, SssMonError
from .core.sample import FIELD_NAMES
from .logging_setup import setup_logging
from .output.sink import OutputSink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

FIELD_HELP = """\
For each sample, a space-separated list of the following fields is written
to stdout or a log file, terminated by a newline:
  date                  Unix timestamp (in milliseconds).
  time_delta            Time since the last sample (in milliseconds). Zero
                        marks the first sample since (re-)starting sss-mon.
  cpu_load_1m           CPU load average (1 minute average).
  cpu_load_5m           CPU load average (5 minute average).
  cpu_load_15m          CPU load average (15 minute average).
  cpu_time_user         CPU time spent in user mode.
  cpu_time_nice         CPU time spent in user mode with low priority.
  cpu_time_system       CPU time spent in system mode.
  cpu_time_idle         CPU time spent in the idle task.
  cpu_time_iowait       CPU time waiting for I/O to complete.
  cpu_time_irq          CPU time servicing interrupts.
  cpu_time_softirq      CPU time servicing softirqs.
  cpu_time_steal        Time stolen by other operating systems when
                        running virtualized.
  cpu_time_guest        CPU time running a virtual CPU for guests.
  cpu_time_guest_nice   CPU time running a niced guest.
  memory_total          Total usable RAM (in bytes).
  memory_used           Memory currently in use (in bytes).
  swap_total            Total swap space (in bytes).
  swap_used             Swap space currently in use (in bytes).
  disk_total            Total disk space (in bytes).
  disk_used             Disk space currently in use (in bytes).
  disk_available        Disk space available to non-privileged users
                        (in bytes).
  network_received      Total bytes received.
  network_sent          Total bytes sent.

CPU data is read from /proc/loadavg and /proc/stat, memory data from
/proc/meminfo and network data from /proc/net/dev. Disk usage comes from
statvfs() on the stat path.
"""


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value!r} is negative")
    return number


def positive_int(value: str) -> int:
    number = non_negative_int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value!r} is less than one")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sss-mon",
        description=(
            "sss-mon gathers the current CPU load, memory usage, disk usage "
            "and network traffic and writes it to stdout or a log file. It runs "
            "until killed unless a number of iterations is given."
        ),
        epilog=FIELD_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("log_file", nargs="?", default=None, metavar="LOGFILE",
                        help="write data to LOGFILE instead of stdout; the name may "
                             "contain strftime directives and is re-derived before "
                             f"each write (at most {MAX_LOG_FILE_NAME_LENGTH} characters)")
    parser.add_argument("-f", "--field-names", action="store_true",
                        help="print the space-separated field names and exit")
    parser.add_argument("-n", "--iterations", type=non_negative_int, default=None,
                        help="number of samples to gather, 0 runs until killed (default: 0)")
    parser.add_argument("-i", "--network-interface", default=None, metavar="INTERFACE",
                        help="interface in /proc/net/dev to report (default: eth0)")
    parser.add_argument("-p", "--period", type=positive_int, default=None,
                        help="sampling period in seconds (default: 1)")
    parser.add_argument("-s", "--stat-path", default=None, metavar="PATH",
                        help="file or directory whose file system is reported (default: .)")
    parser.add_argument("-c", "--config", default=None, metavar="FILE",
                        help="YAML configuration file")
    parser.add_argument("-v", "--verbose", dest="log_level", action="store_const",
                        const="DEBUG", default=None, help="enable debug logging")
    parser.add_argument("-V", "--version", action="version",
                        version=f"sss-mon {__version__}")
    return parser


def main(argv=None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.field_names:
        print(" ".join(FIELD_NAMES))
        return EXIT_OK

    setup_logging(args.log_level or "INFO")
    try:
        config = ConfigManager.build_config(ConfigManager.load_config(args.config), args)
        config.check_stat_path()
    except ConfigError as e:
        logger.error("%s", e)
        return EXIT_CONFIG_ERROR
    setup_logging(config.log_level)

    sink = OutputSink(config.log_file)
    loop = CollectionLoop(config, sink=sink)
    try:
        loop.run()
    except SssMonError as e:
        logger.error("%s", e)
        return EXIT_RUNTIME_ERROR
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    finally:
        sink.close()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
