"""
renderer.py

Two-tier renderer for the water column.

Static layer: background gradient and lakebed silhouette, drawn into one
offscreen surface on creation and on every resize, then blitted as a single
command per frame.

Dynamic layer: thermocline waves and the animated ice line, regenerated
from the frame time on every tick and never cached.

Resize pipeline (order matters, a stale converter would be baked into the
cache until the next resize):
1. validate the new viewport extents
2. `DepthConverter.resize`
3. regenerate the lakebed profile
4. discard and recreate the depth markers
5. re-run the static pass

Steps 3-5 build into locals. Extents, profile, markers and surface are
committed together once the surface is rendered; on failure the converter
is restored to its previous height.

The renderer owns the converter's mutation; collaborators only read
`depth_to_y`, `surface_y` and `water_floor_y`.
"""
import logging
import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple

import numpy as np

from .config import ANIMATION, COLORS, DEPTH_MARKERS, TERRAIN, THERMOCLINES, WATER_COLUMN
from .depth import DepthConverter
from .draw import Blit, DrawList, FillRect, Line, Polygon, Polyline, RecordingBackend, Text, lerp_color
from .errors import ConfigurationError, SurfaceAllocationError
from .terrain import TerrainProfile, generate_bottom_profile, make_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThermoclineLayer:
    """Temperature layer at a fixed depth; `strength` in [0, 1]."""
    depth: float
    strength: float

    def __post_init__(self):
        if not math.isfinite(self.depth):
            raise ConfigurationError(f'thermocline depth must be finite (got {self.depth})')
        if not 0.0 <= self.strength <= 1.0:
            raise ConfigurationError(f'thermocline strength must be in [0, 1] (got {self.strength})')


class DepthMarker(NamedTuple):
    depth: float
    y: float
    label: str


class _FrameState(NamedTuple):
    static_surface: object
    width: int
    surface_y: float
    layers: Tuple[Tuple[ThermoclineLayer, float], ...]
    markers: Tuple[DepthMarker, ...]


def _as_layer(layer) -> ThermoclineLayer:
    if isinstance(layer, ThermoclineLayer):
        return layer
    if isinstance(layer, dict):
        return ThermoclineLayer(float(layer['depth']), float(layer['strength']))
    depth, strength = layer
    return ThermoclineLayer(float(depth), float(strength))


def _valid_extent(value) -> bool:
    try:
        return math.isfinite(float(value)) and int(value) > 0
    except (TypeError, ValueError):
        return False


class WaterColumnRenderer:
    """Owns the lakebed profile, thermoclines, depth markers and render layers.

    Parameters:
    - converter: shared `DepthConverter`; resized only through `resize`.
    - width, height: initial viewport in pixels.
    - thermoclines: iterable of `ThermoclineLayer`, `{'depth', 'strength'}`
      dicts or `(depth, strength)` pairs. Defaults to `config.THERMOCLINES`.
    - backend: object with `create_surface(w, h)` and `render(surface, cmds)`.
      Defaults to `RecordingBackend`.
    - rng: numpy Generator or seed for the lakebed walk.
    - terrain, colors, animation, markers: partial overrides of the matching
      `config` dictionaries.

    Construction runs the full build once (profile, markers, static pass).
    """

    def __init__(self, converter: DepthConverter, width, height, thermoclines=None,
                 backend=None, rng=None, terrain=None, colors=None, animation=None,
                 markers=None):
        if not _valid_extent(width) or not _valid_extent(height):
            raise ConfigurationError(f'viewport must be positive (got {width}x{height})')
        self.converter = converter
        self.width = int(width)
        self.height = int(height)

        self.terrain = dict(TERRAIN, **(terrain or {}))
        self.colors = dict(COLORS, **(colors or {}))
        self.animation = dict(ANIMATION, **(animation or {}))
        self.marker_style = dict(DEPTH_MARKERS, **(markers or {}))
        layers = THERMOCLINES if thermoclines is None else thermoclines
        self.thermoclines: Tuple[ThermoclineLayer, ...] = tuple(_as_layer(l) for l in layers)

        self.backend = backend if backend is not None else RecordingBackend()
        self._rng = make_rng(rng)

        self.static_builds = 0
        self._profile: Optional[TerrainProfile] = None
        self._markers: Tuple[DepthMarker, ...] = ()
        self._static_surface = None

        old_height = self.converter.height
        if old_height != self.height:
            if not self.converter.resize(self.height):
                raise ConfigurationError(f'converter rejected viewport height {self.height}')
        try:
            self._rebuild(self.width, self.height)
        except Exception:
            # the converter is shared; leave it as the caller passed it in
            self.converter.resize(old_height)
            raise
        logger.info('WaterColumn created: %dx%d, max depth %g ft, %d thermoclines',
                    self.width, self.height, self.converter.max_depth, len(self.thermoclines))

    @classmethod
    def create(cls, width=WATER_COLUMN['default_width'], height=WATER_COLUMN['default_height'],
               max_depth=WATER_COLUMN['max_depth_ft'], **kwargs) -> 'WaterColumnRenderer':
        """Build a renderer together with its own `DepthConverter`."""
        converter = DepthConverter(height, max_depth)
        return cls(converter, width, height, **kwargs)

    # ------------------------------------------------------------------ #
    #  read-only state
    # ------------------------------------------------------------------ #

    @property
    def profile(self) -> TerrainProfile:
        return self._profile

    @property
    def markers(self) -> Tuple[DepthMarker, ...]:
        return self._markers

    @property
    def static_surface(self):
        return self._static_surface

    @property
    def surface_y(self) -> float:
        return self.converter.surface_y

    @property
    def water_floor_y(self) -> float:
        return self.converter.water_floor_y

    def depth_to_y(self, depth):
        return self.converter.depth_to_y(depth)

    # ------------------------------------------------------------------ #
    #  resize / invalidation
    # ------------------------------------------------------------------ #

    def resize(self, width, height) -> bool:
        """Apply a viewport resize; returns False (and changes nothing) on bad input.

        Runs to completion before returning, so the next `draw` always sees a
        converter, profile and static surface from the same epoch. If the
        static pass fails the converter is put back to its previous height and
        the previous frame state is kept.
        """
        if not _valid_extent(width) or not _valid_extent(height):
            logger.warning('WaterColumn resize ignored: invalid viewport %sx%s', width, height)
            return False

        old_height = self.converter.height
        new_width, new_height = int(width), int(height)
        if not self.converter.resize(new_height, self.converter.max_depth):
            logger.warning('WaterColumn resize ignored: converter rejected height %s', height)
            return False

        try:
            self._rebuild(new_width, new_height)
        except Exception:
            self.converter.resize(old_height)
            logger.warning('WaterColumn resize to %dx%d failed, kept %dx%d',
                           new_width, new_height, self.width, self.height)
            raise
        logger.info('WaterColumn resize: %d x %d', self.width, self.height)
        return True

    def _rebuild(self, width, height) -> None:
        # everything is built into locals; nothing is committed until the
        # static surface has been allocated and rendered
        profile = self._generate_profile(width)
        markers = self._create_markers()
        commands = self._static_commands_for(profile, width, height)
        surface = self._render_static(commands, width, height)

        self.width, self.height = width, height
        self._profile = profile
        self._markers = markers
        self._static_surface = surface
        self.static_builds += 1
        logger.info('WaterColumn: static background rendered (%d commands)', len(commands))

    def _generate_profile(self, width) -> TerrainProfile:
        t = self.terrain
        return generate_bottom_profile(
            width, self.converter.water_floor_y,
            step=t['step_px'], overscan=t['overscan_px'], jitter=t['jitter_px'],
            max_step=t['max_step_px'], structure_probability=t['structure_probability'],
            rng=self._rng)

    def _create_markers(self) -> Tuple[DepthMarker, ...]:
        interval = float(self.marker_style['interval_ft'])
        if interval <= 0:
            return ()
        limit = self.converter.water_floor_y - self.marker_style['floor_clearance_px']
        depths = np.arange(0.0, self.converter.max_depth + 0.5 * interval, interval)
        depths = depths[depths <= self.converter.max_depth]
        ys = self.converter.depth_to_y(depths)
        return tuple(DepthMarker(float(d), float(y), f'{d:g}ft')
                     for d, y in zip(depths, ys) if y <= limit)

    # ------------------------------------------------------------------ #
    #  static pass
    # ------------------------------------------------------------------ #

    def static_commands(self):
        """Gradient bands, ground fill, contour line and structure blocks."""
        return self._static_commands_for(self._profile, self.width, self.height)

    def _static_commands_for(self, profile, width, height):
        return list(self._gradient_commands(width, height)) + \
            list(self._terrain_commands(profile, width, height))

    def _gradient_commands(self, width, height) -> Iterator[FillRect]:
        band = int(self.animation['band_px'])
        top = self.colors['water_surface']
        deep = self.colors['water_deep']
        for y in range(0, height, band):
            color = lerp_color(top, deep, y / height)
            yield FillRect(0, y, width, min(band, height - y), color)

    def _terrain_commands(self, profile, width, height):
        c = self.colors
        points = profile.points()
        if not points:
            return
        right = max(points[-1][0], float(width))
        ground = tuple(points) + ((right, float(height)), (0.0, float(height)))
        yield Polygon(ground, c['ground'])
        yield Polyline(tuple(points), c['contour'], c['contour_width'], c['contour_alpha'])

        size = self.terrain['structure_size_px']
        for sample in profile.structures():
            yield FillRect(sample.x - size / 2.0, sample.y - size, size, size,
                           c['structure'], c['structure_alpha'])

    def _render_static(self, commands, width, height):
        try:
            surface = self.backend.create_surface(width, height)
        except SurfaceAllocationError:
            logger.exception('WaterColumn: static surface allocation failed (%dx%d)', width, height)
            raise
        except (MemoryError, RuntimeError, ValueError, OSError) as exc:
            logger.exception('WaterColumn: static surface allocation failed (%dx%d)', width, height)
            raise SurfaceAllocationError(
                f'could not allocate {width}x{height} static surface') from exc
        self.backend.render(surface, commands)
        return surface

    # ------------------------------------------------------------------ #
    #  dynamic pass
    # ------------------------------------------------------------------ #

    def _snapshot(self) -> _FrameState:
        layers = tuple((layer, self.converter.depth_to_y(layer.depth)) for layer in self.thermoclines)
        return _FrameState(self._static_surface, self.width, self.converter.surface_y,
                           layers, self._markers)

    def dynamic_commands(self, time_ms):
        """Thermocline waves and ice line for the current state at `time_ms`."""
        state = self._snapshot()
        return list(self._thermocline_commands(state, time_ms)) + \
            list(self._surface_commands(state, time_ms))

    def draw(self, time_ms) -> DrawList:
        """Commands for one frame: static blit, dynamic layer, depth labels.

        Positions are captured now; a resize between `draw` and iteration
        does not leak into this frame.
        """
        state = self._snapshot()
        return DrawList(lambda: self._frame_commands(state, time_ms))

    def _frame_commands(self, state: _FrameState, time_ms):
        yield Blit(state.static_surface, 0, 0)
        yield from self._thermocline_commands(state, time_ms)
        yield from self._surface_commands(state, time_ms)
        yield from self._marker_commands(state)

    @staticmethod
    def _sample_xs(width, step) -> np.ndarray:
        xs = np.arange(0.0, width + step, step)
        return np.minimum(xs, float(width))

    def _thermocline_commands(self, state: _FrameState, time_ms) -> Iterator[Polyline]:
        a = self.animation
        xs = self._sample_xs(state.width, a['thermocline_step_px'])
        phase = xs + float(time_ms) * a['thermocline_time_scale']
        wave = np.sin(phase * a['thermocline_frequency'])
        for layer, y in state.layers:
            if layer.strength <= 0.0:
                continue
            ys = y + wave * a['thermocline_amplitude_px'] * layer.strength
            yield Polyline(tuple(zip(xs.tolist(), ys.tolist())), self.colors['thermocline'],
                           a['thermocline_width'], layer.strength * a['thermocline_alpha_scale'])

    def _surface_commands(self, state: _FrameState, time_ms):
        a = self.animation
        c = self.colors
        y = state.surface_y
        w = float(state.width)
        yield Line((0.0, y), (w, y), c['water_line'], a['water_line_width'])
        yield Line((0.0, y), (w, y), c['ice'], a['ice_width'], c['ice_alpha'])

        xs = self._sample_xs(state.width, a['ice_texture_step_px'])
        phase = xs + float(time_ms) * a['ice_texture_time_scale']
        ys = y + a['ice_texture_offset_px'] + \
            np.sin(phase * a['ice_texture_frequency']) * a['ice_texture_amplitude_px']
        yield Polyline(tuple(zip(xs.tolist(), ys.tolist())), c['ice_texture'],
                       a['ice_texture_width'], c['ice_texture_alpha'])

    def _marker_commands(self, state: _FrameState) -> Iterator[Text]:
        s = self.marker_style
        for marker in state.markers:
            yield Text(s['x_px'], marker.y - s['lift_px'], marker.label,
                       self.colors['marker_text'], s['font_size'], s['alpha'], s['font_name'])
