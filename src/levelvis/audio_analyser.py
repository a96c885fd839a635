import logging

import librosa
import numpy as np

from levelvis.constants import HOP_LENGTH, N_FFT

logger = logging.getLogger(__name__)


class AudioLoadError(Exception):
    """Raised when an audio file cannot be loaded."""


class AudioAnalyser:
    """
    Turns an audio file into a timeline of amplitude samples.

    This stands in for the microphone capture of the desktop app, so the
    visualiser can be previewed against real audio.
    """

    def __init__(self, filepath):
        logger.info(f"[+] Loading audio: {filepath}...")
        try:
            # Load audio with original sampling rate
            self.y, self.sr = librosa.load(filepath, sr=None)
            self.duration = librosa.get_duration(y=self.y, sr=self.sr)
        except Exception as e:
            raise AudioLoadError(f"Error loading audio file: {e}") from e

        logger.info("[+] Measuring audio levels...")
        self.levels = self._calculate_levels(self.y)

    @staticmethod
    def _calculate_levels(y):
        """
        Compute Root Mean Square (Energy/Volume) per frame, scaled into [0, 1].
        """
        if y.size == 0:
            return np.zeros(1)
        rms = librosa.feature.rms(y=y, frame_length=N_FFT, hop_length=HOP_LENGTH)[0]
        if not np.any(rms):
            return rms
        # Normalize so the loudest frame maps to 1.0
        return librosa.util.normalize(rms, axis=0)

    def level_at(self, t):
        """
        Returns the amplitude sample for timestamp `t` (seconds).
        """
        if t <= 0:
            return float(self.levels[0])

        # Convert time to frame index
        frame_index = int(librosa.time_to_frames(t, sr=self.sr, hop_length=HOP_LENGTH))

        # Boundary checks
        frame_index = min(frame_index, len(self.levels) - 1)
        return float(self.levels[frame_index])


class LevelReplay:
    """
    Feeds an analyser's levels into a smoother one tick at a time, as the live app would.
    Each tick is applied once, however often a frame time is requested.
    """

    def __init__(self, analyser, smoother, tick_period):
        self.analyser = analyser
        self.smoother = smoother
        self.tick_period = tick_period
        self.ticks_done = 0

    def advance_to(self, t):
        last_tick = int(round(t / self.tick_period, 6))
        while self.ticks_done <= last_tick:
            now = self.ticks_done * self.tick_period
            self.smoother.set_amplitude(self.analyser.level_at(now))
            self.smoother.advance_idle(now)
            self.ticks_done += 1
        return self.smoother.bar_levels()
