"""
draw.py

Backend-neutral drawing primitives for the water column.

The renderer never talks to a graphics API directly. It produces plain
command objects (`FillRect`, `Line`, `Polyline`, `Polygon`, `Text`, `Blit`)
and hands them to a backend. A backend is any object with:

- `create_surface(width, height)` -> an offscreen surface
- `render(surface, commands)` -> draw the commands into that surface

`RecordingBackend` is the in-memory backend: its surfaces simply keep the
commands drawn into them. It is the default when no host backend is
given and is what the tests use to count static-layer builds. The pygame
backend lives in `rendering.py`.
"""
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Tuple

Color = Tuple[int, int, int]
Point = Tuple[float, float]


def hex_to_rgb(value: int) -> Color:
    """0xRRGGBB -> (r, g, b)."""
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def lerp_color(a: Color, b: Color, t: float) -> Color:
    """Linear blend from `a` (t=0) to `b` (t=1), truncated to ints."""
    return (
        int(a[0] + (b[0] - a[0]) * t),
        int(a[1] + (b[1] - a[1]) * t),
        int(a[2] + (b[2] - a[2]) * t),
    )


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    w: float
    h: float
    color: Color
    alpha: float = 1.0


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    color: Color
    width: int = 1
    alpha: float = 1.0


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Point, ...]
    color: Color
    width: int = 1
    alpha: float = 1.0


@dataclass(frozen=True)
class Polygon:
    points: Tuple[Point, ...]
    color: Color
    alpha: float = 1.0


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    color: Color
    size: int = 10
    alpha: float = 1.0
    font: str = 'Courier New'


@dataclass(frozen=True, eq=False)
class Blit:
    """Copy a cached surface onto the frame at (x, y)."""
    surface: Any
    x: float = 0.0
    y: float = 0.0


class DrawList:
    """Lazy, finite, restartable sequence of draw commands.

    Every `iter()` calls the factory again, so a frame can be replayed
    (e.g. rendered to the window and to a screenshot) without recomputing
    anything eagerly or sharing an exhausted generator.
    """

    def __init__(self, factory: Callable[[], Iterable]):
        self._factory = factory

    def __iter__(self) -> Iterator:
        return iter(self._factory())


class RecordingSurface:
    """Offscreen surface that stores the commands drawn into it."""

    def __init__(self, width, height):
        self.width = int(width)
        self.height = int(height)
        self.commands: List = []
        self.draw_calls = 0

    def record(self, commands: Iterable) -> None:
        self.commands.extend(commands)
        self.draw_calls += 1

    def get_size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def __repr__(self):
        return f'RecordingSurface({self.width}x{self.height}, commands={len(self.commands)})'


class RecordingBackend:
    """Backend whose surfaces record commands instead of rasterizing them."""

    def __init__(self):
        self.surfaces_created = 0
        self.render_calls = 0

    def create_surface(self, width, height) -> RecordingSurface:
        self.surfaces_created += 1
        return RecordingSurface(width, height)

    def render(self, surface: RecordingSurface, commands: Iterable) -> None:
        self.render_calls += 1
        surface.record(list(commands))
