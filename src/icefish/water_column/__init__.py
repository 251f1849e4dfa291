"""Water column: depth mapping, lakebed generation and two-tier rendering."""
from .depth import DepthConverter, depth_zone
from .errors import ConfigurationError, SurfaceAllocationError
from .renderer import DepthMarker, ThermoclineLayer, WaterColumnRenderer
from .terrain import TerrainKind, TerrainProfile, TerrainSample, generate_bottom_profile

__all__ = [
    'ConfigurationError',
    'DepthConverter',
    'DepthMarker',
    'SurfaceAllocationError',
    'TerrainKind',
    'TerrainProfile',
    'TerrainSample',
    'ThermoclineLayer',
    'WaterColumnRenderer',
    'depth_zone',
    'generate_bottom_profile',
]
