"""Exception types raised by the water column renderer."""


class ConfigurationError(ValueError):
    """Invalid depth or viewport configuration (would invert the mapping)."""


class SurfaceAllocationError(RuntimeError):
    """The backend could not allocate the cached static surface."""
