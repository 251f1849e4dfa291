import pygame
import pytest

from icefish.water_column import rendering
from icefish.water_column.draw import Blit, FillRect, Line, Polygon, Polyline
from icefish.water_column.errors import SurfaceAllocationError
from icefish.water_column.renderer import WaterColumnRenderer
from icefish.water_column.rendering import PygameBackend


def close(a, b, tol=3):
    return all(abs(int(x) - int(y)) <= tol for x, y in zip(a, b))


def test_opaque_fill():
    backend = PygameBackend()
    surf = backend.create_surface(20, 20)
    backend.render(surf, [FillRect(0, 0, 20, 20, (10, 20, 30))])
    assert tuple(surf.get_at((5, 5)))[:3] == (10, 20, 30)


def test_translucent_fill_blends():
    backend = PygameBackend()
    surf = backend.create_surface(20, 20)
    surf.fill((0, 0, 0))
    backend.render(surf, [FillRect(0, 0, 10, 10, (200, 0, 0), alpha=0.5)])
    assert close(tuple(surf.get_at((5, 5)))[:3], (100, 0, 0))
    assert tuple(surf.get_at((15, 15)))[:3] == (0, 0, 0)


def test_lines_and_polylines():
    backend = PygameBackend()
    surf = backend.create_surface(40, 40)
    surf.fill((0, 0, 0))
    backend.render(surf, [
        Line((0, 5), (39, 5), (255, 255, 255), 1),
        Polyline(((0.0, 20.0), (39.0, 20.0)), (0, 0, 255), 1, 0.5),
    ])
    assert tuple(surf.get_at((10, 5)))[:3] == (255, 255, 255)
    assert close(tuple(surf.get_at((10, 20)))[:3], (0, 0, 128))


def test_polygon_and_blit():
    backend = PygameBackend()
    src = backend.create_surface(10, 10)
    src.fill((1, 2, 3))
    dst = backend.create_surface(30, 30)
    dst.fill((0, 0, 0))
    backend.render(dst, [
        Polygon(((0, 20), (29, 20), (29, 29), (0, 29)), (139, 115, 85)),
        Blit(src, 0, 0),
    ])
    assert tuple(dst.get_at((5, 5)))[:3] == (1, 2, 3)
    assert tuple(dst.get_at((15, 25)))[:3] == (139, 115, 85)


def test_unknown_command_rejected():
    backend = PygameBackend()
    surf = backend.create_surface(5, 5)
    with pytest.raises(TypeError):
        backend.render(surf, ['not a command'])


def test_allocation_failure(monkeypatch):
    def boom(*args, **kwargs):
        raise pygame.error('out of video memory')

    monkeypatch.setattr(rendering.pygame, 'Surface', boom)
    with pytest.raises(SurfaceAllocationError):
        PygameBackend().create_surface(100, 100)


def test_renderer_frame_on_pygame():
    backend = PygameBackend()
    r = WaterColumnRenderer.create(320, 240, 100, backend=backend, rng=0)
    assert isinstance(r.static_surface, pygame.Surface)
    screen = pygame.Surface((320, 240))
    backend.render(screen, r.draw(0))
    # ground below the lakebed
    assert tuple(screen.get_at((100, 238)))[:3] == (139, 115, 85)
    # mid-water gradient band at half height
    assert tuple(screen.get_at((300, 120)))[:3] == (74, 95, 66)
