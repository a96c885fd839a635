from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class LevelRenderer(Protocol):
    """
    Turns a snapshot of bar levels into one frame.

    The owning surface picks an implementation when it creates its visualiser:
    ``RasterRenderer`` for pixel canvases, ``TextRenderer`` for terminals.
    """

    def render(self, bar_levels: Sequence[float], active: bool = False) -> Any: ...
