"""
Playback transport: the clock the render loop reads and the source of
play/pause signals.
"""

import abc
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

import pygame

logger = logging.getLogger(__name__)

Signal = Callable[[], None]


@dataclass
class TransportListener:
    """Callbacks fired on play/pause state changes."""

    on_play: Signal | None = None
    on_pause: Signal | None = None


class Transport(abc.ABC):
    """
    Play/pause state plus a playback clock.

    Listeners fire only when the state actually changes.
    """

    def __init__(self, duration: float):
        self.duration = duration
        self._playing = False
        self._listeners: list[TransportListener] = []

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    @abc.abstractmethod
    def current_time(self) -> float:
        """Playback position in seconds, within [0, duration]."""
        pass

    @abc.abstractmethod
    def _start(self):
        pass

    @abc.abstractmethod
    def _stop(self):
        pass

    @abc.abstractmethod
    def seek(self, time: float):
        pass

    def add_listener(
        self,
        on_play: Signal | None = None,
        on_pause: Signal | None = None,
    ) -> TransportListener:
        listener = TransportListener(on_play=on_play, on_pause=on_pause)
        self._listeners.append(listener)
        return listener

    def remove_listener(self, listener: TransportListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def play(self):
        if self._playing:
            return
        if self.current_time >= self.duration:
            self.seek(0.0)
        self._start()
        self._playing = True
        for listener in list(self._listeners):
            if listener.on_play:
                listener.on_play()

    def pause(self):
        if not self._playing:
            return
        self._stop()
        self._playing = False
        for listener in list(self._listeners):
            if listener.on_pause:
                listener.on_pause()

    def toggle(self):
        if self._playing:
            self.pause()
        else:
            self.play()

    def poll(self):
        """Pause once playback has reached the end of the track."""
        if self._playing and self.current_time >= self.duration:
            logger.debug("Reached end of track at %.2fs", self.duration)
            self.pause()


class ManualTransport(Transport):
    """Transport whose clock only moves when advance() is called."""

    def __init__(self, duration: float, start: float = 0.0):
        super().__init__(duration)
        self._time = start

    @property
    def current_time(self) -> float:
        return self._time

    def _start(self):
        pass

    def _stop(self):
        pass

    def seek(self, time: float):
        self._time = min(max(0.0, time), self.duration)

    def advance(self, dt: float):
        if self._playing:
            self._time = min(self._time + dt, self.duration)
            self.poll()


class MixerTransport(Transport):
    """
    Transport backed by pygame.mixer.music.

    get_pos() counts milliseconds since the last play() call, so the
    position is tracked as a seek offset plus that count.
    """

    def __init__(self, audio_path: Union[str, Path], duration: float):
        super().__init__(duration)
        self.audio_path = Path(audio_path)
        self._offset = 0.0
        self._started = False

        if not pygame.mixer.get_init():
            pygame.mixer.init()
        pygame.mixer.music.load(str(self.audio_path))

    @property
    def current_time(self) -> float:
        if not self._playing:
            return self._offset
        pos_ms = pygame.mixer.music.get_pos()
        if pos_ms < 0 or not pygame.mixer.music.get_busy():
            # Mixer stops on its own once the track runs out
            return self.duration
        return min(self._offset + pos_ms / 1000.0, self.duration)

    def _start(self):
        pygame.mixer.music.play(start=self._offset)
        self._started = True

    def _stop(self):
        self._offset = self.current_time
        pygame.mixer.music.stop()

    def seek(self, time: float):
        self._offset = min(max(0.0, time), self.duration)
        if self._playing:
            pygame.mixer.music.play(start=self._offset)

    def close(self):
        if self._started:
            pygame.mixer.music.stop()
        pygame.mixer.music.unload()
