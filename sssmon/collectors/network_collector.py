"""Network traffic collector reading /proc/net/dev."""
import logging
import os

from ..config import RunConfig
from .system_models import NetworkCounters

logger = logging.getLogger(__name__)

# Positions among the values after the interface name
RECEIVED_COLUMN = 0
SENT_COLUMN = 8


def parse_net_dev(text: str, interface: str) -> NetworkCounters:
    """Find the row for ``interface`` and return its byte counters.

    Only the first matching row is considered. A row that is too short to
    hold the sent column is treated like a missing interface.
    """
    for line in text.splitlines():
        name, sep, rest = line.partition(':')
        if not sep or name.strip() != interface:
            continue
        values = rest.split()
        if len(values) <= SENT_COLUMN:
            logger.warning("Row for interface %s has only %d columns", interface, len(values))
            return NetworkCounters()
        try:
            return NetworkCounters(
                received=int(values[RECEIVED_COLUMN]),
                sent=int(values[SENT_COLUMN]),
            )
        except ValueError:
            logger.warning("Unparsable counters for interface %s: %r", interface, line)
            return NetworkCounters()
    logger.debug("Interface %s not found", interface)
    return NetworkCounters()


class NetworkCollector:
    """Collects byte counters for the configured network interface."""

    def __init__(self, config: RunConfig):
        """Initialize the network collector."""
        self.config = config
        self.path = os.path.join(config.proc_root, 'net', 'dev')

    def read_counters(self) -> NetworkCounters:
        try:
            with open(self.path, 'r', encoding='utf-8', errors='replace') as f:
                text = f.read()
        except OSError as e:
            logger.warning("Cannot read %s: %s", self.path, e)
            return NetworkCounters()
        return parse_net_dev(text, self.config.network_interface)
