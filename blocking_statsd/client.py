from __future__ import annotations

import logging
import time as _time
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator, Optional, Tuple

from .encoder import MetricPoint, MetricType, Number
from .errors import ErrorHandler, StatsDClientError
from .interface import StatsDClient
from .sampler import Sampler
from .tags import Tags, normalize_tags
from .transport import DatagramTransport

log = logging.getLogger(__name__)


class ClientState(Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class BlockingStatsDClient(StatsDClient):
    """StatsD client (UDP) that sends each metric as its own datagram.

    The connection is opened on construction; failing to open it raises
    StatsDClientError. After that nothing raises: every failure while
    encoding, sending or closing is passed to `error_handler` (a no-op
    unless one is given) and the call returns normally.

    Calls are synchronous and take no locks. Do not call stop() while other
    threads are still sending.
    """

    def __init__(
        self,
        prefix: Optional[str],
        hostname: str,
        port: int,
        constant_tags: Tags = None,
        error_handler: Optional[ErrorHandler] = None,
        sampler: Optional[Sampler] = None,
        transport_factory: Callable[[str, int], DatagramTransport] = DatagramTransport,
    ):
        self._prefix = prefix or ""
        self._constant_tags: Tuple[str, ...] = normalize_tags(constant_tags)
        self._handler: ErrorHandler = error_handler or (lambda exc: None)
        self._sampler = sampler or Sampler()
        self._state = ClientState.UNOPENED

        try:
            self._transport = transport_factory(hostname, port)
        except Exception as e:
            raise StatsDClientError("Failed to start StatsD client") from e
        self._state = ClientState.OPEN
        log.debug("StatsD client connected to %s:%s", hostname, port)

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def constant_tags(self) -> Tuple[str, ...]:
        return self._constant_tags

    @property
    def error_handler(self) -> ErrorHandler:
        return self._handler

    @property
    def state(self) -> ClientState:
        return self._state

    def __enter__(self) -> "BlockingStatsDClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def stop(self) -> None:
        """Close the socket. Only the first call does anything."""
        if self._state is not ClientState.OPEN:
            return
        self._state = ClientState.CLOSED
        try:
            self._transport.close()
        except Exception as e:
            self._handler(e)
        log.debug("StatsD client stopped")

    # Counters

    def count(self, aspect: str, delta: int, tags: Tags = (), sample_rate: float = 1.0) -> None:
        self._record(aspect, delta, MetricType.COUNTER, tags, sample_rate)

    def increment(self, aspect: str, tags: Tags = (), sample_rate: float = 1.0) -> None:
        self.count(aspect, 1, tags, sample_rate)

    def decrement(self, aspect: str, tags: Tags = (), sample_rate: float = 1.0) -> None:
        self.count(aspect, -1, tags, sample_rate)

    increment_counter = increment
    decrement_counter = decrement

    # Gauges, timers, histograms

    def gauge(self, aspect: str, value: Number, tags: Tags = (), sample_rate: float = 1.0) -> None:
        self._record(aspect, value, MetricType.GAUGE, tags, sample_rate)

    def time(self, aspect: str, value_ms: Number, tags: Tags = (), sample_rate: float = 1.0) -> None:
        self._record(aspect, value_ms, MetricType.TIMER, tags, sample_rate)

    def histogram(self, aspect: str, value: Number, tags: Tags = (), sample_rate: float = 1.0) -> None:
        self._record(aspect, value, MetricType.HISTOGRAM, tags, sample_rate)

    record_gauge_value = gauge
    timer = time
    record_execution_time = time
    record_histogram_value = histogram

    @contextmanager
    def timed(self, aspect: str, tags: Tags = (), sample_rate: float = 1.0) -> Iterator[None]:
        """Time the wrapped block and record it in whole milliseconds."""
        t0 = _time.monotonic()
        try:
            yield
        finally:
            self.time(aspect, int((_time.monotonic() - t0) * 1000.0), tags, sample_rate)

    def _record(
        self,
        aspect: str,
        value: Number,
        metric_type: MetricType,
        tags: Tags,
        sample_rate: float,
    ) -> None:
        try:
            if not self._sampler.should_emit(sample_rate):
                return
            if self._state is not ClientState.OPEN:
                raise StatsDClientError("StatsD client is closed")
            point = MetricPoint(aspect, metric_type, value, sample_rate, normalize_tags(tags))
            self._transport.send(point.encode(self._prefix, self._constant_tags).encode("utf-8"))
        except Exception as e:
            # Never fail the caller due to monitoring.
            self._handler(e)
