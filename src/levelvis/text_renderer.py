from rich.text import Text

from levelvis.color_mapper import color_for
from levelvis.constants import (
    ACTIVE_TEXT_COLOR,
    EMPTY_GLYPH,
    FILLED_GLYPH,
    INACTIVE_TEXT_COLOR,
    TEXT_WIDTH,
)


class TextRenderer:
    """
    Renders bar levels as a one-line VU meter for the terminal.

    Each cell has a lit threshold falling linearly from 1.0 to 0.0 across the
    row, so the filled part sweeps further right as the levels rise.
    """

    def __init__(self, width=TEXT_WIDTH):
        self.width = width

    def render(self, bar_levels, active=False):
        """Returns a rich Text exactly `width` cells long."""
        base_color = ACTIVE_TEXT_COLOR if active else INACTIVE_TEXT_COLOR

        frame = Text()
        for i in range(self.width):
            threshold = 1.0 - i / self.width
            level = bar_levels[i % len(bar_levels)]

            if level >= threshold:
                frame.append(FILLED_GLYPH, style=color_for(level))
            else:
                frame.append(EMPTY_GLYPH, style=base_color)
        return frame

    def render_line(self, bar_levels, active=False):
        """The meter with its label, as shown in the terminal UI."""
        line = Text("Audio Level: ")
        line.append("[")
        line.append_text(self.render(bar_levels, active))
        line.append("]")
        return line
