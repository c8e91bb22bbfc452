"""Frame scheduling, playback transport and the render loop."""

from spectrascope.player.loop import PlaybackRenderLoop
from spectrascope.player.scheduler import ClockFrameScheduler, FrameScheduler
from spectrascope.player.transport import ManualTransport, MixerTransport, Transport

__all__ = [
    "ClockFrameScheduler",
    "FrameScheduler",
    "ManualTransport",
    "MixerTransport",
    "PlaybackRenderLoop",
    "Transport",
]
