"""
Live spectrum player.

Loads an audio file, plays it through pygame.mixer and draws the
selected preset in a resizable window in sync with playback.
"""

import argparse
import logging
import sys
from pathlib import Path

import pygame

from spectrascope.config import MAX_COUNT, MIN_COUNT, PlayerConfig, load_config
from spectrascope.core.audio import AudioBuffer, load_audio
from spectrascope.player.loop import PlaybackRenderLoop
from spectrascope.player.scheduler import ClockFrameScheduler, FrameScheduler
from spectrascope.player.transport import MixerTransport, Transport
from spectrascope.visualizers import VisualizerFactory, available_presets
from spectrascope.visualizers.scene import Canvas

logger = logging.getLogger(__name__)


class VisualizerApp:
    """
    Wires canvas, preset factory, transport and render loop together.

    Window creation is deferred to run() so the wiring can be driven
    headless.
    """

    def __init__(
        self,
        config: PlayerConfig,
        buffer: AudioBuffer,
        transport: Transport,
        scheduler: FrameScheduler,
    ):
        self.config = config
        self.buffer = buffer
        self.transport = transport
        self.scheduler = scheduler

        self.canvas = Canvas(config.width, config.height, config.background)
        self.factory = VisualizerFactory(self.canvas)
        self.factory.select(config.preset, config.count, config.fill)

        self.loop = PlaybackRenderLoop(
            self.factory,
            scheduler,
            transport,
            canvas=self.canvas,
            buffer=buffer,
        )
        self.loop.attach()
        self.running = False

    def select_preset(self, name: str):
        """Switch presets without leaving a frame request behind."""
        was_scheduled = self.loop.is_scheduled
        self.loop.cancel()
        self.factory.select(name, self.config.count, self.config.fill)
        self.config.preset = name
        if was_scheduled:
            self.loop.play()

    def set_count(self, count: int):
        count = min(max(count, MIN_COUNT), MAX_COUNT)
        if count == self.config.count:
            return
        self.factory.update_count(count)
        self.config.count = count
        logger.info("Bar count set to %d", count)

    def resize(self, width: int, height: int):
        self.canvas.set_dimensions(width, height)
        if self.factory.active is not None:
            self.factory.active.init(height, width)

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_SPACE:
                self.transport.toggle()
            elif event.key == pygame.K_UP:
                self.set_count(self.config.count * 2)
            elif event.key == pygame.K_DOWN:
                self.set_count(self.config.count // 2)

    def run(self):
        """Open the window and pump events/frames until closed."""
        pygame.display.set_mode(
            (self.config.width, self.config.height),
            pygame.RESIZABLE,
        )
        pygame.display.set_caption("spectrascope")

        self.running = True
        self.transport.play()
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)

                self.transport.poll()
                self.scheduler.tick()
                # The display surface is replaced on resize
                self.canvas.render(pygame.display.get_surface())
                pygame.display.flip()
        finally:
            self.close()

    def close(self):
        self.loop.teardown()
        self.transport.pause()
        self.factory.clear()


def build_config(args: argparse.Namespace) -> PlayerConfig:
    """Config file (if any) overridden by explicit command line flags."""
    config = load_config(args.config) if args.config else PlayerConfig()

    overrides = {
        "preset": args.preset,
        "count": args.count,
        "fill": args.fill,
        "width": args.width,
        "height": args.height,
        "fps": args.fps,
        "background": args.background,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)

    return config.validate()


def main(argv: list[str] | None = None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Play an audio file with a live spectrum visualization"
    )

    parser.add_argument(
        "audio",
        type=Path,
        nargs="?",
        help="Input audio file (wav, mp3, flac, ogg)",
    )

    parser.add_argument(
        "-p", "--preset",
        type=str,
        default=None,
        help="Visualizer preset (default: flat_bar)",
    )

    parser.add_argument(
        "-n", "--count",
        type=int,
        default=None,
        help="Number of bars, a power of two (default: 64)",
    )

    parser.add_argument(
        "--fill",
        type=str,
        default=None,
        help="Bar color (default: #10b981)",
    )

    parser.add_argument(
        "--background",
        type=str,
        default=None,
        help="Background color (default: #0b0b12)",
    )

    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Window width (default: 1280)",
    )

    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Window height (default: 720)",
    )

    parser.add_argument(
        "-f", "--fps",
        type=int,
        default=None,
        help="Frames per second (default: 60)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (individual flags override it)",
    )

    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="Print the available presets and exit",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_presets:
        for name in available_presets():
            print(name)
        return

    if args.audio is None:
        parser.error("the following arguments are required: audio")

    if not args.audio.exists():
        print(f"Error: Audio file not found: {args.audio}", file=sys.stderr)
        sys.exit(1)

    if args.config and not args.config.exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Loading audio: %s", args.audio)
    buffer = load_audio(args.audio)
    logger.info(
        "Duration: %.2fs, %d channel(s) @ %d Hz",
        buffer.duration,
        buffer.n_channels,
        buffer.sample_rate,
    )

    pygame.init()
    try:
        transport = MixerTransport(args.audio, buffer.duration)
        scheduler = ClockFrameScheduler(config.fps)
        app = VisualizerApp(config, buffer, transport, scheduler)
        app.run()
        transport.close()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
