"""
Level-to-color mapping shared by the raster and text renderers.
"""

from levelvis.constants import (
    COOL_COLOR,
    HOT_COLOR,
    MAX_BRIGHTNESS,
    MID_COLOR,
    MIN_BRIGHTNESS,
    WARM_COLOR,
)


def color_for(level):
    """Returns a hex color for an audio level."""
    if level > 0.8:
        return HOT_COLOR
    if level > 0.5:
        return WARM_COLOR
    if level > 0.3:
        return MID_COLOR
    return COOL_COLOR


def hex_to_rgb(color):
    """Convert '#RRGGBB' to an (r, g, b) tuple."""
    color = color.lstrip("#")
    return tuple(int(color[i : i + 2], 16) for i in (0, 2, 4))


def dim(rgb):
    """Half-intensity version of a color, used for the baseline."""
    return tuple(c >> 1 for c in rgb)


def adjust_brightness(rgb, factor):
    """
    Scale each channel by `factor`.
    The factor is clamped to [0.2, 1.0] so bars never go fully black or over-saturate.
    """
    factor = min(max(factor, MIN_BRIGHTNESS), MAX_BRIGHTNESS)
    return tuple(int(c * factor) for c in rgb)


def brightness_factor(offset, bar_height):
    """Brightness for a row `offset` pixels away from the centre line of a bar."""
    factor = 1.0 - offset / (bar_height + 1)
    return min(max(factor, MIN_BRIGHTNESS), MAX_BRIGHTNESS)


def brightness_gradient(rgb, offset, bar_height):
    """Color of a bar row: brightest at the centre line, fading outwards."""
    return adjust_brightness(rgb, brightness_factor(offset, bar_height))
