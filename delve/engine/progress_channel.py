"""Bounded progress channel connecting the generator to a progress consumer.

The generator thread sends one StepProgress per milestone; the consumer
reads them on its own thread. The queue is bounded (1 slot by default), so
a slow consumer holds the producer back instead of messages piling up.
Either side may close the channel; the other side then sees
ChannelClosedError.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterator

from delve.core.errors import ChannelClosedError, GenerationCancelled
from delve.core.progress import StepProgress

logger = logging.getLogger(__name__)

_POLL_SECONDS = 0.05


class ProgressChannel:
    """SPSC (single-producer, single-consumer) bounded queue of StepProgress."""

    __slots__ = ("_queue", "_closed")

    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise ValueError("Channel capacity must be >= 1")
        self._queue: queue.Queue[StepProgress] = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def capacity(self) -> int:
        return self._queue.maxsize

    def close(self) -> None:
        """Mark the channel closed; pending messages can still be drained."""
        self._closed.set()

    def send(self, progress: StepProgress, timeout: float | None = None) -> None:
        """Blocking enqueue (backpressure while full).

        Raises ChannelClosedError once the channel is closed, and
        ``queue.Full`` if *timeout* elapses first.
        """
        remaining = timeout
        while True:
            if self._closed.is_set():
                raise ChannelClosedError("Progress channel closed by consumer")
            wait = _POLL_SECONDS if remaining is None else min(_POLL_SECONDS, remaining)
            try:
                self._queue.put(progress, timeout=wait)
                return
            except queue.Full:
                if remaining is not None:
                    remaining -= wait
                    if remaining <= 0:
                        raise

    def receive(self, timeout: float | None = None) -> StepProgress:
        """Blocking dequeue.

        Raises ChannelClosedError when the channel is closed and drained, and
        ``queue.Empty`` if *timeout* elapses first.
        """
        remaining = timeout
        while True:
            wait = _POLL_SECONDS if remaining is None else min(_POLL_SECONDS, remaining)
            try:
                return self._queue.get(timeout=wait)
            except queue.Empty:
                if self._closed.is_set() and self._queue.empty():
                    raise ChannelClosedError("Progress channel closed by producer") from None
                if remaining is not None:
                    remaining -= wait
                    if remaining <= 0:
                        raise

    def __iter__(self) -> Iterator[StepProgress]:
        """Yield messages until a done message or the channel closes."""
        while True:
            try:
                progress = self.receive()
            except ChannelClosedError:
                return
            yield progress
            if progress.is_done():
                return


class ProgressReporter:
    """Producer-side helper: numbers milestones and honours cancellation.

    A vanished consumer is not a generation failure: the reporter logs it,
    stops sending and lets generation carry on.
    """

    __slots__ = ("_channel", "_steps", "_current", "_cancel", "_disconnected")

    def __init__(
        self,
        steps: tuple[str, ...],
        channel: ProgressChannel | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self._channel = channel
        self._steps = steps
        self._current = 0
        self._cancel = cancel
        self._disconnected = False

    @property
    def step_count(self) -> int:
        return len(self._steps)

    @property
    def current_step(self) -> int:
        return self._current

    @property
    def disconnected(self) -> bool:
        return self._disconnected

    def check_cancelled(self) -> None:
        if self._cancel is not None and self._cancel.is_set():
            raise GenerationCancelled(f"Generation cancelled after step {self._current}/{self.step_count}")

    def milestone(self) -> StepProgress:
        """Report completion of the next step and return the message sent.

        Cancellation is checked before a non-final step is delivered, so a
        cancelled run never sends a step it will not follow up. The final
        step is always delivered.
        """
        if self._current >= self.step_count:
            raise RuntimeError(f"All {self.step_count} steps have already been reported")
        if self._current + 1 < self.step_count:
            self.check_cancelled()
        self._current += 1
        progress = StepProgress(self._steps[self._current - 1], self._current, self.step_count)
        logger.debug("Milestone %s", progress)

        if self._channel is not None and not self._disconnected:
            try:
                self._channel.send(progress)
            except ChannelClosedError:
                self._disconnected = True
                logger.warning("Progress consumer went away at %s; continuing without progress", progress)
        return progress
