import math
import threading

import numpy as np

from levelvis.config import VisualiserSettings
from levelvis.constants import FALLOFF_DEPTH, IDLE_BASE_LEVEL, IDLE_CYCLE, IDLE_SWING


def clamp_level(level):
    """Clamp a raw sample into [0, 1]; NaN counts as silence."""
    level = float(level)
    if math.isnan(level):
        return 0.0
    return min(max(level, 0.0), 1.0)


def idle_phase(now):
    """Position of wall-clock time `now` within the idle cycle, in [0, 1)."""
    return (now % IDLE_CYCLE) / IDLE_CYCLE


class LevelSmoother:
    """
    Owns the smoothed amplitude and the per-bar levels of one visualiser.

    Samples are smoothed twice: once into the overall amplitude, then into each
    bar through a falloff profile peaking at the centre. This gives a coherent
    swell instead of independent jitter per bar. When the amplitude is below the
    idle threshold, ``advance_idle`` blends in a gentle sinusoid so the display
    never looks frozen.

    All state is guarded by a single lock, held only for the arithmetic.
    """

    def __init__(self, settings=None):
        self.settings = settings or VisualiserSettings()
        n = self.settings.bar_count

        self._lock = threading.Lock()
        self._amplitude = 0.0
        self._levels = np.full(n, IDLE_BASE_LEVEL)

        # Per-bar constants
        self._positions = np.arange(n) / (n - 1)
        center_distance = np.abs(self._positions - 0.5) * 2.0  # 0 at centre, 1 at edges
        self._falloff = 1.0 - center_distance * FALLOFF_DEPTH
        self._frequencies = 2.0 + self._positions * 2.0  # Bars animate slightly out of phase

    @property
    def bar_count(self):
        return len(self._positions)

    @property
    def amplitude(self):
        with self._lock:
            return self._amplitude

    def bar_levels(self):
        """Snapshot copy of the bar levels."""
        with self._lock:
            return self._levels.copy()

    def set_amplitude(self, level):
        """Blend a new sample into the amplitude and the bar levels."""
        level = clamp_level(level)
        s = self.settings

        with self._lock:
            self._amplitude = s.amplitude_smoothing * self._amplitude + (1 - s.amplitude_smoothing) * level
            target = self._falloff * self._amplitude
            levels = s.bar_smoothing * self._levels + (1 - s.bar_smoothing) * target
            self._levels = np.clip(levels, 0.0, 1.0)

    def advance_idle(self, now):
        """
        Blend idle motion into the bars if the signal is below the idle threshold.
        Returns True if idle motion was applied.
        """
        s = self.settings
        phase = idle_phase(now)

        with self._lock:
            if self._amplitude >= s.idle_threshold:
                return False

            idle = IDLE_BASE_LEVEL + IDLE_SWING * np.sin(self._frequencies * np.pi * (self._positions + phase))
            levels = s.idle_smoothing * self._levels + (1 - s.idle_smoothing) * idle
            self._levels = np.clip(levels, 0.0, 1.0)
            return True
