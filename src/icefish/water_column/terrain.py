"""Lakebed profile generation.

The contour is a bounded random walk: each sample nudges a running offset
from the floor baseline by at most `max_step` and the running offset is
clamped to `[-jitter, +jitter]`. Structure markers (rocks, logs) are drawn
independently per sample and never feed back into the walk.

Profiles are regenerated wholesale on every resize and never patched.
"""
import enum
from typing import Iterator, NamedTuple, Tuple

import numpy as np

from .config import TERRAIN
from .errors import ConfigurationError


class TerrainKind(enum.Enum):
    NORMAL = 'normal'
    STRUCTURE = 'structure'


class TerrainSample(NamedTuple):
    x: float
    y: float
    kind: TerrainKind


class TerrainProfile:
    """Immutable, x-sorted sequence of lakebed samples at a fixed step."""

    def __init__(self, xs, ys, structure_mask, step, floor_y, jitter):
        self._xs = np.array(xs, dtype=float)
        self._ys = np.array(ys, dtype=float)
        self._structure = np.array(structure_mask, dtype=bool)
        if not (self._xs.shape == self._ys.shape == self._structure.shape) or self._xs.ndim != 1:
            raise ValueError('xs, ys and structure_mask must be 1-D arrays of equal length')
        for a in (self._xs, self._ys, self._structure):
            a.setflags(write=False)
        self.step = float(step)
        self.floor_y = float(floor_y)
        self.jitter = float(jitter)

    @property
    def xs(self) -> np.ndarray:
        return self._xs

    @property
    def ys(self) -> np.ndarray:
        return self._ys

    @property
    def structure_mask(self) -> np.ndarray:
        return self._structure

    def __len__(self) -> int:
        return int(self._xs.shape[0])

    def __getitem__(self, i) -> TerrainSample:
        kind = TerrainKind.STRUCTURE if self._structure[i] else TerrainKind.NORMAL
        return TerrainSample(float(self._xs[i]), float(self._ys[i]), kind)

    def __iter__(self) -> Iterator[TerrainSample]:
        for i in range(len(self)):
            yield self[i]

    def structures(self) -> Tuple[TerrainSample, ...]:
        """Samples marked as structure, in x order."""
        return tuple(self[int(i)] for i in np.flatnonzero(self._structure))

    def points(self):
        """(x, y) pairs for line and polygon rendering."""
        return list(zip(self._xs.tolist(), self._ys.tolist()))

    def __repr__(self):
        return (f'TerrainProfile(n={len(self)}, step={self.step:g}, floor_y={self.floor_y:g}, '
                f'structures={int(self._structure.sum())})')


def make_rng(rng=None) -> np.random.Generator:
    """Accept a Generator, an integer seed or None."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def bounded_walk(deltas, limit) -> np.ndarray:
    """Accumulate `deltas`, clamping the running total to [-limit, limit].

    Clamping applies to the cumulative value after every step, so the walk
    can turn around at the band edge instead of sticking to it.
    """
    deltas = np.asarray(deltas, dtype=float)
    out = np.empty_like(deltas)
    offset = 0.0
    # bounded loop: one pass over the samples
    for i in range(deltas.shape[0]):
        offset = min(limit, max(-limit, offset + deltas[i]))
        out[i] = offset
    return out


def generate_bottom_profile(width, floor_y,
                            step=TERRAIN['step_px'],
                            overscan=TERRAIN['overscan_px'],
                            jitter=TERRAIN['jitter_px'],
                            max_step=TERRAIN['max_step_px'],
                            structure_probability=TERRAIN['structure_probability'],
                            rng=None) -> TerrainProfile:
    """Generate a lakebed profile covering [0, width + overscan).

    Parameters:
    - width: viewport width in pixels (> 0).
    - floor_y: baseline row of the lake floor (usually `converter.water_floor_y`).
    - step: horizontal spacing between samples.
    - overscan: extra pixels sampled past the right edge.
    - jitter: half-width of the band the offset walk is clamped to.
    - max_step: bound on the per-sample perturbation.
    - structure_probability: chance that a sample is marked STRUCTURE.
    - rng: `numpy.random.Generator`, integer seed or None.

    Returns: `TerrainProfile`. With width 800, step 20 and overscan 200 the
    profile holds 50 samples at x = 0, 20, ..., 980.
    """
    if width <= 0:
        raise ConfigurationError(f'width must be positive (got {width})')
    if step <= 0:
        raise ConfigurationError(f'step must be positive (got {step})')
    if overscan < 0 or jitter < 0 or max_step < 0:
        raise ConfigurationError('overscan, jitter and max_step must be non-negative')
    if not 0.0 <= structure_probability <= 1.0:
        raise ConfigurationError(f'structure_probability must be in [0, 1] (got {structure_probability})')

    gen = make_rng(rng)
    xs = np.arange(0, width + overscan, step, dtype=float)
    n = xs.shape[0]

    deltas = gen.uniform(-max_step, max_step, size=n)
    offsets = bounded_walk(deltas, jitter)
    structure = gen.random(n) < structure_probability

    return TerrainProfile(xs, float(floor_y) + offsets, structure, step, floor_y, jitter)
