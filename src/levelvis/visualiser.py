import time

from levelvis.animation import AnimationScheduler
from levelvis.config import VisualiserSettings
from levelvis.level_renderer import LevelRenderer
from levelvis.level_smoother import LevelSmoother


class WaveformVisualiser:
    """
    The amplitude display owned by one UI surface.

    The capture side calls ``set_amplitude`` from any thread; the UI glue calls
    ``start_listening`` / ``stop_listening``. While listening, every tick renders
    a fresh frame with the attached renderer and hands it to ``on_frame``.
    A fault while rendering stops the animation but never reaches the caller.
    """

    def __init__(self, renderer: LevelRenderer, settings=None, on_frame=None, logger=None, clock=time.time):
        self.settings = settings or VisualiserSettings()
        self.renderer = renderer
        self.on_frame = on_frame

        self.smoother = LevelSmoother(self.settings)
        self.scheduler = AnimationScheduler(
            self.smoother,
            self._redraw,
            tick_period=self.settings.tick_period,
            logger=logger,
            clock=clock,
        )

    @property
    def is_active(self):
        return self.scheduler.is_active

    @property
    def amplitude(self):
        return self.smoother.amplitude

    def bar_levels(self):
        return self.smoother.bar_levels()

    def last_error(self):
        return self.scheduler.last_error()

    def set_amplitude(self, level):
        self.smoother.set_amplitude(level)

    def start_listening(self):
        self.scheduler.start()

    def stop_listening(self):
        self.scheduler.stop()

    def render(self):
        """Render a fresh frame from the current bar levels."""
        return self.renderer.render(self.smoother.bar_levels(), active=self.is_active)

    def _redraw(self):
        frame = self.render()
        if self.on_frame is not None:
            self.on_frame(frame)
