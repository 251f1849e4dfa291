"""
depth.py

Depth <-> screen row mapping for the water column.

`DepthConverter` is the single source of truth for where a depth in feet
lands on screen. The renderer uses it to place thermoclines, depth markers
and the lakebed; fish, baitfish and HUD collaborators use `depth_to_y` and
the read-only `surface_y` / `water_floor_y` extents to stay consistent with
what is drawn.

Public API:
- `DepthConverter(height, max_depth, top_margin, bottom_margin)`
- `DepthConverter.depth_to_y(depth)` / `DepthConverter.y_to_depth(y)`
- `DepthConverter.resize(new_height, max_depth=None)`
- `depth_zone(depth)`

Only the owning renderer calls `resize`; everyone else reads.
"""
import logging
import math
from typing import Optional

import numpy as np

from .config import DEPTH_ZONES, WATER_COLUMN
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def _extent_problem(height, max_depth, top_margin, bottom_margin) -> Optional[str]:
    """Return a description of what is wrong with the extents, or None."""
    try:
        height = float(height)
        max_depth = float(max_depth)
    except (TypeError, ValueError):
        return f'height and max_depth must be numbers (got {height!r}, {max_depth!r})'
    if not math.isfinite(max_depth) or max_depth <= 0.0:
        return f'max_depth must be positive (got {max_depth})'
    if not math.isfinite(height) or height <= 0.0:
        return f'viewport height must be positive (got {height})'
    if height - bottom_margin <= top_margin:
        return (f'viewport height {height} leaves no water column between '
                f'top margin {top_margin} and bottom margin {bottom_margin}')
    return None


class DepthConverter:
    """Linear mapping between depth in feet and a vertical pixel coordinate.

    Rows grow downward: 0 ft sits at `surface_y` (the ice line) and
    `max_depth` sits at `water_floor_y`. The same fixed margins are used on
    construction and on every `resize`, so the mapping only depends on the
    current `(height, max_depth)` pair.

    Raises `ConfigurationError` when the initial configuration would give a
    degenerate or inverted mapping.
    """

    def __init__(self, height, max_depth=WATER_COLUMN['max_depth_ft'],
                 top_margin=WATER_COLUMN['top_margin_px'],
                 bottom_margin=WATER_COLUMN['bottom_margin_px']):
        if top_margin < 0 or bottom_margin < 0:
            raise ConfigurationError('margins must be non-negative')
        self.top_margin = float(top_margin)
        self.bottom_margin = float(bottom_margin)

        problem = _extent_problem(height, max_depth, self.top_margin, self.bottom_margin)
        if problem is not None:
            raise ConfigurationError(problem)
        self._apply(height, max_depth)

    def _apply(self, height, max_depth) -> None:
        self._height = float(height)
        self._max_depth = float(max_depth)
        self._surface_y = self.top_margin
        self._water_floor_y = self._height - self.bottom_margin

    @property
    def height(self) -> float:
        return self._height

    @property
    def max_depth(self) -> float:
        return self._max_depth

    @property
    def surface_y(self) -> float:
        """Row of the ice / water line (0 ft)."""
        return self._surface_y

    @property
    def water_floor_y(self) -> float:
        """Row of the configured maximum depth."""
        return self._water_floor_y

    @property
    def depth_scale(self) -> float:
        """Pixels per foot of water."""
        return (self._water_floor_y - self._surface_y) / self._max_depth

    def depth_to_y(self, depth):
        """Convert depth (ft) to a screen row.

        Values outside [0, max_depth] are extrapolated, not clamped; wave
        animation legitimately samples slightly above the surface and past
        the floor. Accepts scalars (returns float) or array-likes (returns
        ndarray of the same shape).
        """
        d = np.asarray(depth, dtype=float)
        y = self._surface_y + (self._water_floor_y - self._surface_y) * (d / self._max_depth)
        if y.ndim == 0:
            return float(y)
        return y

    def y_to_depth(self, y):
        """Convert a screen row back to depth (ft). Inverse of `depth_to_y`."""
        y_a = np.asarray(y, dtype=float)
        d = (y_a - self._surface_y) / self.depth_scale
        if d.ndim == 0:
            return float(d)
        return d

    def is_in_water(self, y):
        """True where `y` lies between the surface and the floor (inclusive)."""
        y_a = np.asarray(y, dtype=float)
        inside = (y_a >= self._surface_y) & (y_a <= self._water_floor_y)
        if inside.ndim == 0:
            return bool(inside)
        return inside

    def clamp_to_water(self, y):
        """Clamp rows into [surface_y, water_floor_y]."""
        out = np.clip(np.asarray(y, dtype=float), self._surface_y, self._water_floor_y)
        if out.ndim == 0:
            return float(out)
        return out

    def resize(self, new_height, max_depth=None) -> bool:
        """Recompute the extents for a new viewport height.

        Mutates the converter in place; rows previously computed by callers
        are stale afterwards. Idempotent for identical arguments. Invalid
        input leaves the converter untouched, logs a warning and returns
        False.
        """
        if max_depth is None:
            max_depth = self._max_depth
        problem = _extent_problem(new_height, max_depth, self.top_margin, self.bottom_margin)
        if problem is not None:
            logger.warning('DepthConverter.resize ignored: %s', problem)
            return False
        self._apply(new_height, max_depth)
        logger.debug('DepthConverter resized: height=%s max_depth=%s surface_y=%s floor_y=%s',
                     self._height, self._max_depth, self._surface_y, self._water_floor_y)
        return True

    def info(self) -> dict:
        """Water column dimensions for debug overlays."""
        return {
            'height': self._height,
            'max_depth': self._max_depth,
            'surface_y': self._surface_y,
            'water_floor_y': self._water_floor_y,
            'water_column_height': self._water_floor_y - self._surface_y,
            'depth_scale': round(self.depth_scale, 2),
            'top_margin': self.top_margin,
            'bottom_margin': self.bottom_margin,
        }

    def __repr__(self):
        return (f'DepthConverter(height={self._height:g}, max_depth={self._max_depth:g}, '
                f'surface_y={self._surface_y:g}, water_floor_y={self._water_floor_y:g})')


def depth_zone(depth, zones=DEPTH_ZONES) -> Optional[dict]:
    """Return the named zone containing `depth`, or None.

    Zones are half-open [min, max) except the deepest one, which also
    includes its upper bound so the floor itself reads as 'Bottom'.
    """
    d = float(depth)
    for i, zone in enumerate(zones):
        last = i == len(zones) - 1
        if zone['min'] <= d < zone['max'] or (last and d == zone['max']):
            return zone
    return None
