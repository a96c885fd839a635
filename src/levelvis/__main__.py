#!/usr/bin/env python3
"""
Waveform Visualiser Preview
===========================

Preview the amplitude visualiser of the dictation app against an audio file.
The file's loudness stands in for the microphone level.

Modes:
- Video (default): render the pixel visualiser to an MP4 with the audio attached.
- Snapshot: write a single PNG frame of the pixel visualiser.
- Terminal: play the levels in real time through the terminal meter.

Usage:
    python -m levelvis input.wav --output preview.mp4
    python -m levelvis input.wav --snapshot frame.png --at 3.5
    python -m levelvis input.wav --terminal
"""

import argparse
import logging
import os
import sys
import time

import cv2
from moviepy import AudioFileClip, VideoClip
from rich.console import Console
from rich.live import Live
from rich.panel import Panel

from levelvis.audio_analyser import AudioAnalyser, AudioLoadError, LevelReplay
from levelvis.config import VisualiserSettings
from levelvis.constants import (
    DEFAULT_BAR_COUNT,
    DEFAULT_BASE_COLOR,
    DEFAULT_SIZE,
    DEFAULT_TICK_PERIOD,
    IDLE_THRESHOLD,
)
from levelvis.level_smoother import LevelSmoother
from levelvis.raster_renderer import RasterRenderer
from levelvis.text_renderer import TextRenderer
from levelvis.visualiser import WaveformVisualiser

logger = logging.getLogger("levelvis")

SAMPLE_INTERVAL = 0.02  # seconds between samples fed in terminal mode


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Preview the waveform visualiser against an audio file.")
    parser.add_argument("input", help="Path to input audio file (WAV/MP3)")
    parser.add_argument("--output", "-o", default="preview.mp4", help="Path to output video file")
    parser.add_argument("--snapshot", help="Write a single PNG frame to this path instead of a video")
    parser.add_argument("--at", type=float, default=0.0, help="Timestamp of the snapshot frame in seconds")
    parser.add_argument("--terminal", action="store_true", help="Play the levels through the terminal meter")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE[0], help="Frame width")
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE[1], help="Frame height")
    parser.add_argument("--bars", type=int, default=DEFAULT_BAR_COUNT, help="Number of bars")
    parser.add_argument("--tick", type=float, default=DEFAULT_TICK_PERIOD, help="Animation tick period in seconds")
    parser.add_argument("--color", default=DEFAULT_BASE_COLOR, help="Base bar color (#RRGGBB)")
    parser.add_argument(
        "--idle-threshold", type=float, default=IDLE_THRESHOLD, help="Amplitude below which idle motion plays"
    )
    parser.add_argument("--duration", type=float, help="Limit duration in seconds (optional)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def settings_from_args(args):
    return VisualiserSettings(
        bar_count=args.bars,
        tick_period=args.tick,
        base_color=args.color,
        idle_threshold=args.idle_threshold,
    )


def write_snapshot(analyser, settings, args):
    renderer = RasterRenderer(settings.base_color, args.width, args.height)
    replay = LevelReplay(analyser, LevelSmoother(settings), settings.tick_period)

    frame = renderer.render(replay.advance_to(args.at))
    # OpenCV writes BGR
    if not cv2.imwrite(args.snapshot, cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)):
        sys.exit(f"[!] Could not write snapshot: {args.snapshot}")
    logger.info(f"[+] Done! Saved to {args.snapshot}")


def write_video(analyser, settings, args, duration):
    replay = LevelReplay(analyser, LevelSmoother(settings), settings.tick_period)
    renderer = RasterRenderer(settings.base_color, args.width, args.height)
    fps = 1.0 / settings.tick_period

    logger.info(f"[+] Preparing render: {args.width}x{args.height} @ {fps:g}fps")
    logger.info(f"[+] Duration: {duration:.2f} seconds")

    def make_frame(t):
        # moviepy may ask for the same time twice; each tick is fed only once
        return renderer.render(replay.advance_to(t))

    video_clip = VideoClip(make_frame, duration=duration)

    # Attach original audio
    audio_clip = AudioFileClip(args.input)
    audio_clip = audio_clip.subclipped(0, duration)
    video_clip = video_clip.with_audio(audio_clip)

    logger.info("[+] Rendering video... (This may take a while)")
    video_clip.write_videofile(
        args.output,
        fps=fps,
        codec="libx264",
        audio_codec="aac",
        threads=4,
        preset="medium",
        logger="bar",
    )
    logger.info(f"[+] Done! Saved to {args.output}")


def play_terminal(analyser, settings, duration):
    console = Console()
    renderer = TextRenderer()

    with Live(console=console, refresh_per_second=1.0 / settings.tick_period, transient=True) as live:

        def show(frame):
            live.update(Panel(frame, title="[white]Waveform[/white]", border_style="blue", expand=False))

        visualiser = WaveformVisualiser(renderer, settings, on_frame=show)
        visualiser.start_listening()
        started = time.monotonic()
        try:
            while visualiser.is_active:
                elapsed = time.monotonic() - started
                if elapsed >= duration:
                    break
                visualiser.set_amplitude(analyser.level_at(elapsed))
                time.sleep(SAMPLE_INTERVAL)
        except KeyboardInterrupt:
            logger.info("[i] Interrupted.")
        finally:
            visualiser.stop_listening()
            visualiser.scheduler.join(timeout=1.0)

    if visualiser.last_error() is not None:
        sys.exit(f"[!] Visualiser stopped: {visualiser.last_error()}")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    # 1. Validation
    if not os.path.exists(args.input):
        sys.exit(f"[!] Input file not found: {args.input}")
    try:
        settings = settings_from_args(args)
    except ValueError as e:
        sys.exit(f"[!] {e}")

    # 2. Measure Audio
    try:
        analyser = AudioAnalyser(args.input)
    except AudioLoadError as e:
        sys.exit(f"[!] {e}")

    duration = analyser.duration
    if args.duration and args.duration < duration:
        duration = args.duration
        logger.info(f"[i] Truncating duration to {duration} seconds.")

    # 3. Render
    if args.snapshot:
        write_snapshot(analyser, settings, args)
    elif args.terminal:
        play_terminal(analyser, settings, duration)
    else:
        write_video(analyser, settings, args, duration)


if __name__ == "__main__":
    main()
