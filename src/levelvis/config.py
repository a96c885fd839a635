"""
Runtime settings for a waveform visualiser.

The module constants in ``levelvis.constants`` are the defaults; a
``VisualiserSettings`` instance lets the owning surface override them.
"""

import re
from dataclasses import dataclass, fields

from levelvis.constants import (
    AMPLITUDE_SMOOTHING,
    BAR_SMOOTHING,
    DEFAULT_BAR_COUNT,
    DEFAULT_BASE_COLOR,
    DEFAULT_TICK_PERIOD,
    IDLE_SMOOTHING,
    IDLE_THRESHOLD,
)

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")

# Option names used by the desktop preferences file
_OPTION_ALIASES = {
    "barCount": "bar_count",
    "tickPeriod": "tick_period",
    "baseColor": "base_color",
    "idleThreshold": "idle_threshold",
}


@dataclass(frozen=True)
class VisualiserSettings:
    """Tunable knobs for one visualiser instance."""

    bar_count: int = DEFAULT_BAR_COUNT
    tick_period: float = DEFAULT_TICK_PERIOD
    base_color: str = DEFAULT_BASE_COLOR
    idle_threshold: float = IDLE_THRESHOLD
    amplitude_smoothing: float = AMPLITUDE_SMOOTHING
    bar_smoothing: float = BAR_SMOOTHING
    idle_smoothing: float = IDLE_SMOOTHING

    def __post_init__(self):
        if self.bar_count < 2:
            raise ValueError(f"bar_count must be at least 2, got {self.bar_count}")
        if self.tick_period <= 0:
            raise ValueError(f"tick_period must be positive, got {self.tick_period}")
        if not _HEX_COLOR.match(self.base_color):
            raise ValueError(f"base_color must look like #RRGGBB, got {self.base_color!r}")
        for name in ("idle_threshold", "amplitude_smoothing", "bar_smoothing", "idle_smoothing"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

    @classmethod
    def from_mapping(cls, mapping):
        """
        Build settings from a plain dict, e.g. a preferences section.
        Accepts both snake_case field names and the camelCase option names;
        values are coerced to the field types, so strings from a config file work.
        """
        types = {f.name: f.type for f in fields(cls)}
        kwargs = {}
        for key, value in mapping.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in types:
                raise ValueError(f"Unknown visualiser option: {key}")
            try:
                kwargs[name] = types[name](value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid value for {key}: {value!r}") from e
        return cls(**kwargs)
