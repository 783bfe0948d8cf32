"""Hand-off from BLE notifications to the measurement accumulator.

Bleak runs notification callbacks on the event loop, so the callback cannot
wait for the reassembler. Chunks are pushed onto a bounded per-session queue
(dropping the oldest pending chunk when full) and a single consumer task
reassembles, decodes and delivers weights in arrival order.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Protocol

from .const import NOTIFICATION_QUEUE_SIZE
from .decode import WeightMeasurement, decode_weight
from .exceptions import AcaiaDecodeError
from .frames import FrameReassembler

_LOGGER = logging.getLogger(__name__)

MEASUREMENT_WEIGHT = "weight"


class Accumulator(Protocol):
    """Receiver of decoded measurements."""

    def emit(self, measurement_name: str, fields: dict[str, Any]) -> None:
        """Record one measurement."""


class MeasurementSink:
    """Forward every decoded weight to the accumulator, one call per frame."""

    def __init__(self, accumulator: Accumulator) -> None:
        """Initialize."""
        self._accumulator = accumulator
        self.delivered = 0

    def deliver(self, measurement: WeightMeasurement) -> None:
        """Emit a weight measurement."""
        self._accumulator.emit(MEASUREMENT_WEIGHT, {"value": measurement.value})
        self.delivered += 1


class WeightPipeline:
    """Per-session queue, reassembler and consumer task."""

    def __init__(
        self,
        sink: MeasurementSink,
        *,
        validate_checksum: bool = False,
        max_pending: int = NOTIFICATION_QUEUE_SIZE,
    ) -> None:
        """Initialize."""
        self._sink = sink
        self._reassembler = FrameReassembler(validate_checksum=validate_checksum)
        self._queue: asyncio.Queue[bytes] = asyncio.Queue(maxsize=max_pending)
        self._task: asyncio.Task | None = None
        self.chunks_dropped = 0
        self.frames_ignored = 0
        self.decode_errors = 0
        self.delivery_errors = 0

    @property
    def running(self) -> bool:
        """Return True while the consumer task is alive."""
        return self._task is not None and not self._task.done()

    @property
    def stats(self) -> dict[str, int]:
        """Return counters for diagnostics."""
        return {
            "frames_emitted": self._reassembler.frames_emitted,
            "checksum_failures": self._reassembler.checksum_failures,
            "frames_ignored": self.frames_ignored,
            "decode_errors": self.decode_errors,
            "delivery_errors": self.delivery_errors,
            "chunks_dropped": self.chunks_dropped,
            "measurements_delivered": self._sink.delivered,
            "pending_chunks": self._queue.qsize(),
        }

    def feed_notification(self, _: Any, data: bytearray) -> None:
        """Queue a notification without blocking the caller."""
        if not data:
            return
        if self._queue.full():
            self._queue.get_nowait()
            self.chunks_dropped += 1
            _LOGGER.debug("Notification queue full, dropped oldest chunk")
        self._queue.put_nowait(bytes(data))

    def start(self) -> None:
        """Start the consumer task on the running loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self.run())

    def cancel(self) -> None:
        """Cancel the consumer task from a sync context and drop pending state."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._discard_pending()

    async def stop(self) -> None:
        """Cancel the consumer task and discard pending chunks."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._discard_pending()

    def _discard_pending(self) -> None:
        """Drop queued chunks and any partially assembled frame."""
        while not self._queue.empty():
            self._queue.get_nowait()
        self._reassembler.reset()

    async def run(self) -> None:
        """Consume chunks until cancelled."""
        while True:
            chunk = await self._queue.get()
            self.process(chunk)

    def process(self, chunk: bytes) -> None:
        """Reassemble a chunk and deliver the weights it completes."""
        for frame in self._reassembler.feed(chunk):
            if not frame.is_weight:
                self.frames_ignored += 1
                continue
            try:
                measurement = decode_weight(frame.payload)
            except AcaiaDecodeError as err:
                self.decode_errors += 1
                _LOGGER.debug("Dropping frame: %s", err)
                continue
            _LOGGER.debug("weight: %s", measurement.value)
            try:
                self._sink.deliver(measurement)
            except Exception:
                self.delivery_errors += 1
                _LOGGER.exception("Error delivering weight")
