"""Collection loop driving the readers, the assembler and the output sink."""
import enum
import logging
import time
from typing import Callable, Optional

from ..collectors.system_collector import SystemCollector
from ..config import RunConfig
from ..output.sink import OutputSink
from .sample import Sample, assemble_sample

logger = logging.getLogger(__name__)


def wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class LoopState(enum.Enum):
    INIT = "init"
    SAMPLING = "sampling"
    WAITING_FOR_TICK = "waiting_for_tick"
    STOPPED = "stopped"


class CollectionLoop:
    """Samples the host on a fixed period, one tick at a time.

    Wake-ups are scheduled from the monotonic timestamp of the previous
    sample plus the period, so processing time does not accumulate as
    drift. Only that timestamp is kept between ticks.
    """

    def __init__(self, config: RunConfig, collector: Optional[SystemCollector] = None,
                 sink: Optional[OutputSink] = None,
                 wall_clock: Callable[[], int] = wall_clock_ms,
                 monotonic_clock: Callable[[], int] = monotonic_ms,
                 sleep: Callable[[float], None] = time.sleep):
        """Initialize the loop with its collaborators."""
        self.config = config
        self.collector = collector or SystemCollector(config)
        self.sink = sink or OutputSink(config.log_file)
        self.wall_clock = wall_clock
        self.monotonic_clock = monotonic_clock
        self.sleep = sleep
        self.state = LoopState.INIT
        self.iteration = 0
        self.previous_monotonic: Optional[int] = None

    def _set_state(self, state: LoopState):
        logger.debug("Loop state %s -> %s", self.state.value, state.value)
        self.state = state

    def tick(self) -> Sample:
        """Read, assemble and write one sample."""
        self._set_state(LoopState.SAMPLING)
        # Timestamps are taken before reading so the tick grid starts here
        wall_time_ms = self.wall_clock()
        monotonic_time = self.monotonic_clock()
        readings = self.collector.collect()
        sample = assemble_sample(
            readings,
            wall_time_ms=wall_time_ms,
            monotonic_time=monotonic_time,
            previous_monotonic=self.previous_monotonic,
        )
        self.sink.write(sample)
        self.previous_monotonic = sample.monotonic_time
        self.iteration += 1
        return sample

    def finished(self) -> bool:
        return 0 < self.config.iterations <= self.iteration

    def wait_for_next_tick(self):
        """Sleep until one period after the previous sample."""
        self._set_state(LoopState.WAITING_FOR_TICK)
        deadline = self.previous_monotonic + self.config.period * 1000
        remaining = deadline - self.monotonic_clock()
        if remaining > 0:
            self.sleep(remaining / 1000)
        else:
            logger.debug("Tick overran its period by %d ms", -remaining)

    def run(self) -> int:
        """Run until the iteration limit is reached; returns the tick count."""
        logger.info("Sampling every %ds (interface %s, stat path %s)",
                    self.config.period, self.config.network_interface, self.config.stat_path)
        while True:
            self.tick()
            if self.finished():
                break
            self.wait_for_next_tick()
        self._set_state(LoopState.STOPPED)
        logger.info("Stopped after %d samples", self.iteration)
        return self.iteration
