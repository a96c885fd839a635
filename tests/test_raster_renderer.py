"""Tests for the pixel backend."""

from __future__ import annotations

import numpy as np
import pytest

from levelvis.color_mapper import dim, hex_to_rgb
from levelvis.constants import DEFAULT_BASE_COLOR
from levelvis.level_smoother import LevelSmoother
from levelvis.raster_renderer import RasterRenderer

WIDTH, HEIGHT = 200, 60


def _drawn_heights(frame: np.ndarray, renderer: RasterRenderer, bar_count: int) -> dict[int, tuple[int, int]]:
    """Map level index -> (pixels lit above centre, pixels lit below centre)."""
    height, width = frame.shape[:2]
    center_y = height // 2
    heights = {}
    for level_index, x, _ in renderer.layout(width, bar_count):
        column = frame[:, x].any(axis=1)
        heights[level_index] = (int(column[:center_y].sum()), int(column[center_y + 1 :].sum()))
    return heights


def test_frame_shape_and_type() -> None:
    renderer = RasterRenderer()
    frame = renderer.render([0.5] * 20, width=WIDTH, height=HEIGHT)
    assert frame.shape == (HEIGHT, WIDTH, 3)
    assert frame.dtype == np.uint8


def test_default_size_is_used_when_not_given() -> None:
    renderer = RasterRenderer(width=120, height=40)
    assert renderer.render([0.0] * 20).shape == (40, 120, 3)
    renderer.resize(90, 30)
    assert renderer.render([0.0] * 20).shape == (30, 90, 3)


def test_render_is_deterministic() -> None:
    renderer = RasterRenderer()
    levels = np.linspace(0.0, 1.0, 20)
    first = renderer.render(levels, width=WIDTH, height=HEIGHT)
    second = renderer.render(levels.copy(), width=WIDTH, height=HEIGHT)
    assert first.tobytes() == second.tobytes()


def test_silent_frame_only_has_a_dim_baseline() -> None:
    renderer = RasterRenderer()
    frame = renderer.render([0.0] * 20, width=WIDTH, height=HEIGHT)
    baseline = dim(hex_to_rgb(DEFAULT_BASE_COLOR))

    assert (frame[HEIGHT // 2] == baseline).all()
    frame[HEIGHT // 2] = 0
    assert not frame.any()


def test_bars_are_mirrored_around_the_centre() -> None:
    renderer = RasterRenderer()
    levels = [0.1 + 0.9 * (i % 5) / 4 for i in range(20)]
    frame = renderer.render(levels, width=WIDTH, height=HEIGHT)

    for level_index, (above, below) in _drawn_heights(frame, renderer, 20).items():
        assert above == below
        expected = renderer.bar_height(levels[level_index], HEIGHT)
        assert above == (expected if expected >= 2 else 0)


def test_bar_height_leaves_headroom() -> None:
    renderer = RasterRenderer()
    frame = renderer.render([1.0] * 20, width=WIDTH, height=HEIGHT)
    heights = _drawn_heights(frame, renderer, 20)
    assert all(above == int(HEIGHT * 0.45) for above, _ in heights.values())
    assert not frame[0].any()
    assert not frame[-1].any()


def test_short_bars_are_skipped() -> None:
    renderer = RasterRenderer()
    # 0.05 * 60 * 0.45 = 1.35 px
    frame = renderer.render([0.05] * 20, width=WIDTH, height=HEIGHT)
    frame[HEIGHT // 2] = 0
    assert not frame.any()


def test_gradient_is_brightest_at_the_centre() -> None:
    renderer = RasterRenderer()
    frame = renderer.render([1.0] * 20, width=WIDTH, height=HEIGHT)
    _, x, _ = renderer.layout(WIDTH, 20)[0]
    center_y = HEIGHT // 2

    column = frame[: center_y + 1, x].astype(int).sum(axis=1)
    lit = column[center_y - int(HEIGHT * 0.45) :]
    assert list(lit) == sorted(lit)
    assert tuple(frame[center_y, x]) == hex_to_rgb(DEFAULT_BASE_COLOR)


def test_center_bar_is_tallest_after_one_loud_sample() -> None:
    smoother = LevelSmoother()
    smoother.set_amplitude(1.0)
    renderer = RasterRenderer()

    frame = renderer.render(smoother.bar_levels(), width=WIDTH, height=HEIGHT)
    heights = {index: above for index, (above, _) in _drawn_heights(frame, renderer, 20).items()}

    tallest = max(heights.values())
    assert tallest > 0
    assert heights[9] == tallest or heights[10] == tallest
    assert heights[0] < tallest


def test_center_bar_is_tallest_while_speaking() -> None:
    smoother = LevelSmoother()
    for _ in range(20):
        smoother.set_amplitude(0.9)
    renderer = RasterRenderer()

    frame = renderer.render(smoother.bar_levels(), width=WIDTH, height=HEIGHT)
    heights = [above for above, _ in _drawn_heights(frame, renderer, 20).values()]
    assert max(heights) in (heights[9], heights[10])
    assert heights[0] < heights[9]
    assert heights[-1] < heights[10]


@pytest.mark.parametrize(("width", "slots"), [(200, 20), (100, 20), (99, 10), (60, 10), (49, 5)])
def test_narrow_surfaces_draw_fewer_bars(width, slots) -> None:
    renderer = RasterRenderer()
    layout = renderer.layout(width, 20)
    assert len(layout) == slots
    assert all(bar_width >= 2 for _, _, bar_width in layout)
    assert all(0 <= index < 20 for index, _, _ in layout)


def test_tiny_surface_renders_without_error() -> None:
    renderer = RasterRenderer()
    frame = renderer.render([1.0] * 20, width=8, height=10)
    assert frame.shape == (10, 8, 3)


@pytest.mark.parametrize("height", [60, 61, 7])
def test_out_of_range_levels_are_clamped(height) -> None:
    renderer = RasterRenderer()
    over = renderer.render([1.2] * 20, width=WIDTH, height=height)
    full = renderer.render([1.0] * 20, width=WIDTH, height=height)
    assert over.tobytes() == full.tobytes()

    under = renderer.render([-0.5] * 20, width=WIDTH, height=height)
    silent = renderer.render([0.0] * 20, width=WIDTH, height=height)
    assert under.tobytes() == silent.tobytes()


def test_nan_levels_draw_nothing() -> None:
    renderer = RasterRenderer()
    frame = renderer.render([float("nan")] * 20, width=WIDTH, height=HEIGHT)
    assert frame.tobytes() == renderer.render([0.0] * 20, width=WIDTH, height=HEIGHT).tobytes()


@pytest.mark.parametrize(("width", "height", "shape"), [(-5, 60, (60, 0, 3)), (200, -1, (0, 200, 3)), (0, 0, (0, 0, 3))])
def test_non_positive_sizes_give_an_empty_frame(width, height, shape) -> None:
    frame = RasterRenderer().render([0.5] * 20, width=width, height=height)
    assert frame.shape == shape
