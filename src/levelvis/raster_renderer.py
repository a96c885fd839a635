import cv2
import numpy as np

from levelvis.color_mapper import brightness_gradient, dim, hex_to_rgb
from levelvis.constants import (
    BAR_HEIGHT_RATIO,
    DEFAULT_BASE_COLOR,
    DEFAULT_SIZE,
    MIN_BAR_HEIGHT,
    MIN_BAR_WIDTH,
    NARROW_WIDTH,
    TINY_WIDTH,
)
from levelvis.level_smoother import clamp_level


class RasterRenderer:
    """
    Draws bar levels as mirrored equalizer bars on an RGB pixel buffer.

    Bars grow up and down from a dim centre line, brightest at the centre and
    fading towards their tips. Output depends only on the levels and the size,
    so identical input always gives an identical buffer.
    """

    def __init__(self, base_color=DEFAULT_BASE_COLOR, width=DEFAULT_SIZE[0], height=DEFAULT_SIZE[1]):
        self.w = width
        self.h = height

        # Colors (RGB)
        self.bg_color = (0, 0, 0)
        self.bar_color = hex_to_rgb(base_color)
        self.baseline_color = dim(self.bar_color)  # Reduced intensity

    def resize(self, width, height):
        self.w = width
        self.h = height

    def layout(self, width, bar_count):
        """
        Compute the bar slots for a surface `width` pixels wide.
        Returns a list of (level_index, x, bar_width) tuples, one per drawn slot.
        """
        # Reduce bar count when the surface is narrow to avoid excessive drawing
        effective_count = bar_count
        if width < NARROW_WIDTH:
            effective_count = max(1, bar_count // 2)

        bar_width = max(MIN_BAR_WIDTH, (width - effective_count) // effective_count)
        spacing = max(1, (width - bar_width * effective_count) // (effective_count + 1))

        slots = []
        for i in range(effective_count):
            # Skip every other bar if the surface is tiny
            if width < TINY_WIDTH and i % 2 == 1:
                continue
            level_index = min((i * bar_count) // effective_count, bar_count - 1)
            x = spacing + i * (bar_width + spacing)
            slots.append((level_index, x, bar_width))
        return slots

    def bar_height(self, level, height):
        """Pixel height of one side of a bar; out-of-range levels are clamped."""
        return int(clamp_level(level) * height * BAR_HEIGHT_RATIO)

    def render(self, bar_levels, active=False, *, width=None, height=None):
        """
        Render one frame as a (height, width, 3) uint8 array.
        `active` is accepted for interface parity; the raster looks the same in both states.
        """
        width = max(self.w if width is None else width, 0)
        height = max(self.h if height is None else height, 0)

        # 1. Setup Canvas
        frame = np.full((height, width, 3), self.bg_color, dtype=np.uint8)
        if width <= 0 or height <= 0:
            return frame

        # 2. Draw center line
        center_y = height // 2
        cv2.line(frame, (0, center_y), (width - 1, center_y), self.baseline_color, 1)

        # 3. Draw equalizer bars (mirrored top and bottom)
        for level_index, x, bar_width in self.layout(width, len(bar_levels)):
            bar_height = self.bar_height(bar_levels[level_index], height)
            if bar_height < MIN_BAR_HEIGHT:
                continue

            x_end = min(x + bar_width, width)
            if x >= x_end:
                continue

            for offset in range(bar_height + 1):
                color = brightness_gradient(self.bar_color, offset, bar_height)
                frame[center_y - offset, x:x_end] = color
                frame[center_y + offset, x:x_end] = color

        return frame
