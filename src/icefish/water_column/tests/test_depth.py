import logging

import numpy as np
import pytest

from icefish.water_column.depth import DepthConverter, depth_zone
from icefish.water_column.errors import ConfigurationError


def test_example_mapping():
    # 600 px with 40 px margins -> surface 40, floor 560
    dc = DepthConverter(600, 100, top_margin=40, bottom_margin=40)
    assert dc.surface_y == 40
    assert dc.water_floor_y == 560
    assert dc.depth_to_y(50) == 300


def test_endpoints_and_monotonic():
    dc = DepthConverter(874, 150)
    assert dc.depth_to_y(0) == dc.surface_y
    assert dc.depth_to_y(150) == pytest.approx(dc.water_floor_y)
    ys = dc.depth_to_y(np.linspace(0.0, 150.0, 301))
    assert ys.shape == (301,)
    assert np.all(np.diff(ys) >= 0.0)
    assert dc.surface_y < dc.water_floor_y


def test_out_of_range_is_not_clamped():
    dc = DepthConverter(600, 100, top_margin=40, bottom_margin=40)
    assert dc.depth_to_y(-5) < dc.surface_y
    assert dc.depth_to_y(110) > dc.water_floor_y
    assert dc.depth_to_y(-5) == pytest.approx(40 - 5 * 5.2)


def test_scalar_returns_float():
    dc = DepthConverter(600, 100)
    assert isinstance(dc.depth_to_y(10), float)
    assert isinstance(dc.y_to_depth(100), float)


def test_y_to_depth_inverts():
    dc = DepthConverter(700, 120)
    depths = np.array([0.0, 12.5, 60.0, 120.0])
    assert np.allclose(dc.y_to_depth(dc.depth_to_y(depths)), depths)


def test_resize_idempotent():
    dc = DepthConverter(600, 100)
    assert dc.resize(900, 150)
    first = (dc.surface_y, dc.water_floor_y)
    assert dc.resize(900, 150)
    assert (dc.surface_y, dc.water_floor_y) == first
    assert dc.max_depth == 150


def test_resize_keeps_margins_and_identity():
    dc = DepthConverter(600, 100, top_margin=40, bottom_margin=40)
    same = dc
    dc.resize(1000)
    assert same is dc
    assert dc.surface_y == 40
    assert dc.water_floor_y == 960
    assert dc.max_depth == 100


@pytest.mark.parametrize('height,max_depth', [(600, 0), (600, -10), (0, 100), (-1, 100), (80, 100), (600, float('nan'))])
def test_invalid_construction_rejected(height, max_depth):
    with pytest.raises(ConfigurationError):
        DepthConverter(height, max_depth, top_margin=40, bottom_margin=40)


def test_invalid_resize_is_noop_with_warning(caplog):
    dc = DepthConverter(600, 100)
    before = dc.info()
    with caplog.at_level(logging.WARNING, logger='icefish.water_column.depth'):
        assert dc.resize(600, 0) is False
        assert dc.resize(-50, 100) is False
    assert dc.info() == before
    assert 'resize ignored' in caplog.text


def test_is_in_water_and_clamp():
    dc = DepthConverter(600, 100, top_margin=40, bottom_margin=40)
    assert dc.is_in_water(40)
    assert dc.is_in_water(560)
    assert not dc.is_in_water(20)
    mask = dc.is_in_water(np.array([0.0, 300.0, 600.0]))
    assert mask.tolist() == [False, True, False]
    assert dc.clamp_to_water(10) == 40
    assert dc.clamp_to_water(700) == 560
    assert dc.clamp_to_water(300) == 300


def test_depth_scale_and_info():
    dc = DepthConverter(600, 100, top_margin=40, bottom_margin=40)
    assert dc.depth_scale == pytest.approx(5.2)
    info = dc.info()
    assert info['water_column_height'] == 520
    assert info['depth_scale'] == 5.2


def test_depth_zone_lookup():
    assert depth_zone(0)['name'] == 'Surface'
    assert depth_zone(20)['name'] == 'Thermocline'
    assert depth_zone(35)['name'] == 'Mid-Water'
    assert depth_zone(150)['name'] == 'Bottom'
    assert depth_zone(151) is None
    assert depth_zone(-1) is None
