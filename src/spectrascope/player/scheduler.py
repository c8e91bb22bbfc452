"""
Frame scheduling.

A FrameScheduler hands out one-shot frame requests the way a browser's
animation frame queue does, so the render loop can be driven by a real
clock or by a deterministic fake in tests.
"""

import abc
import itertools
from typing import Callable

import pygame

FrameCallback = Callable[[float], None]


class FrameScheduler(abc.ABC):
    """One-shot frame requests identified by integer handles."""

    @abc.abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Run `callback(timestamp)` on the next frame; return a handle."""
        pass

    @abc.abstractmethod
    def cancel_frame(self, handle: int):
        """Drop a pending request. Unknown or already-fired handles are ignored."""
        pass

    @property
    @abc.abstractmethod
    def pending(self) -> int:
        """Number of requests waiting for a frame."""
        pass

    @abc.abstractmethod
    def tick(self) -> int:
        """Fire the requests due on this frame; return how many ran."""
        pass


class ClockFrameScheduler(FrameScheduler):
    """
    Scheduler paced by pygame.time.Clock.

    The host loop calls tick() once per iteration; requests made while a
    tick is running wait for the following tick.
    """

    def __init__(self, fps: int = 60):
        self.fps = fps
        self.clock = pygame.time.Clock()
        self._callbacks: dict[int, FrameCallback] = {}
        self._due: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int):
        self._callbacks.pop(handle, None)
        # A callback may cancel another one due on the same tick
        self._due.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks) + len(self._due)

    def tick(self) -> int:
        """
        Wait for the next frame and run the callbacks due on it.

        Returns:
            Number of callbacks run.
        """
        self.clock.tick(self.fps)
        timestamp = pygame.time.get_ticks() / 1000.0

        self._due = self._callbacks
        self._callbacks = {}

        ran = 0
        try:
            while self._due:
                handle = next(iter(self._due))
                callback = self._due.pop(handle)
                callback(timestamp)
                ran += 1
        finally:
            # Anything left over after an error goes back in the queue
            self._callbacks.update(self._due)
            self._due = {}
        return ran
