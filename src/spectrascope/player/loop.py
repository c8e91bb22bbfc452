"""
Playback-synchronized render loop.

While audio plays, every frame draws the active visualizer at the
transport's current time and requests the next frame. Pausing cancels
the single outstanding request.
"""

import logging
from typing import Protocol

from spectrascope.core.audio import AudioBuffer
from spectrascope.player.scheduler import FrameScheduler
from spectrascope.player.transport import Transport, TransportListener
from spectrascope.visualizers.scene import Canvas

logger = logging.getLogger(__name__)


class Drawer(Protocol):
    def draw_all(self, buffer: AudioBuffer, time: float): ...


class PlaybackRenderLoop:
    """
    Idle/Scheduled frame loop with at most one pending request.
    """

    def __init__(
        self,
        drawer: Drawer,
        scheduler: FrameScheduler,
        transport: Transport,
        canvas: Canvas | None = None,
        buffer: AudioBuffer | None = None,
    ):
        self.drawer = drawer
        self.scheduler = scheduler
        self.transport = transport
        self.canvas = canvas
        self.buffer = buffer

        self._handle: int | None = None
        self._listener: TransportListener | None = None
        self.frames_drawn = 0
        self.frames_failed = 0

    @property
    def is_scheduled(self) -> bool:
        return self._handle is not None

    @property
    def ready(self) -> bool:
        return self.canvas is not None and self.buffer is not None and self.drawer is not None

    def attach(self):
        """Follow the transport's play/pause signals."""
        if self._listener is None:
            self._listener = self.transport.add_listener(on_play=self.play, on_pause=self.pause)

    def detach(self):
        if self._listener is not None:
            self.transport.remove_listener(self._listener)
            self._listener = None

    def bind(self, canvas: Canvas | None = None, buffer: AudioBuffer | None = None):
        """
        Swap the canvas and buffer. Losing either one stops the loop.
        """
        self.canvas = canvas
        self.buffer = buffer
        if not self.ready:
            self.cancel()

    def play(self):
        if self.is_scheduled or not self.ready:
            return
        self._draw_frame()
        self._request()

    def pause(self):
        self.cancel()

    def cancel(self):
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None

    def teardown(self):
        self.cancel()
        self.detach()

    def _request(self):
        self._handle = self.scheduler.request_frame(self._on_frame)

    def _on_frame(self, timestamp: float):
        self._handle = None
        if not self.ready:
            return
        self._draw_frame()
        self._request()

    def _draw_frame(self):
        time = self.transport.current_time
        try:
            self.drawer.draw_all(self.buffer, time)
            self.frames_drawn += 1
        except Exception:
            # One bad frame must not stop the loop
            self.frames_failed += 1
            logger.exception("Frame draw failed at t=%.3fs", time)
