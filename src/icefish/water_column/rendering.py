"""
rendering.py

pygame backend for the water column draw commands.

- `PygameBackend.create_surface(w, h)` allocates the opaque offscreen
  surface the renderer caches its static layer in.
- `PygameBackend.render(target, commands)` rasterizes any iterable of
  commands from `draw.py` onto a pygame surface (the cached surface or the
  display).

Translucent primitives are drawn into an SRCALPHA scratch surface sized to
the primitive's bounding box and blitted, since pygame.draw writes colors
without blending.
"""
import logging
import math

import pygame

from .draw import Blit, FillRect, Line, Polygon, Polyline, Text
from .errors import SurfaceAllocationError

logger = logging.getLogger(__name__)


def _rgba(color, alpha):
    return (int(color[0]), int(color[1]), int(color[2]), int(round(max(0.0, min(1.0, alpha)) * 255)))


def _bounds(points, pad):
    """Integer (x, y, w, h) box around `points`, grown by `pad` on each side."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x0 = int(math.floor(min(xs))) - pad
    y0 = int(math.floor(min(ys))) - pad
    x1 = int(math.ceil(max(xs))) + pad
    y1 = int(math.ceil(max(ys))) + pad
    return x0, y0, x1 - x0 + 1, y1 - y0 + 1


def _shift(points, dx, dy):
    return [(p[0] + dx, p[1] + dy) for p in points]


class PygameBackend:
    """Executes draw commands with pygame."""

    def __init__(self):
        self._fonts = {}

    def create_surface(self, width, height) -> pygame.Surface:
        try:
            return pygame.Surface((int(width), int(height)))
        except (pygame.error, ValueError, MemoryError) as exc:
            raise SurfaceAllocationError(f'pygame could not allocate a {width}x{height} surface') from exc

    def render(self, target: pygame.Surface, commands) -> None:
        for cmd in commands:
            handler = self._DISPATCH.get(type(cmd))
            if handler is None:
                raise TypeError(f'unsupported draw command: {cmd!r}')
            handler(self, target, cmd)

    def font(self, name, size) -> pygame.font.Font:
        key = (name, int(size))
        font = self._fonts.get(key)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont(name, int(size))
            logger.debug('loaded font %s %dpx', name, int(size))
            self._fonts[key] = font
        return font

    # ------------------------------------------------------------------ #

    @staticmethod
    def _blend(target, box, draw):
        """Run `draw(scratch, dx, dy)` on an SRCALPHA scratch and blit it at `box`."""
        x, y, w, h = box
        if w <= 0 or h <= 0:
            return
        scratch = pygame.Surface((w, h), pygame.SRCALPHA)
        draw(scratch, -x, -y)
        target.blit(scratch, (x, y))

    def _fill_rect(self, target, cmd: FillRect):
        rect = pygame.Rect(int(round(cmd.x)), int(round(cmd.y)), int(round(cmd.w)), int(round(cmd.h)))
        if cmd.alpha >= 1.0:
            target.fill(cmd.color, rect)
            return
        scratch = pygame.Surface(rect.size, pygame.SRCALPHA)
        scratch.fill(_rgba(cmd.color, cmd.alpha))
        target.blit(scratch, rect.topleft)

    def _line(self, target, cmd: Line):
        if cmd.alpha >= 1.0:
            pygame.draw.line(target, cmd.color, cmd.start, cmd.end, cmd.width)
            return
        color = _rgba(cmd.color, cmd.alpha)
        self._blend(target, _bounds((cmd.start, cmd.end), cmd.width),
                    lambda s, dx, dy: pygame.draw.line(
                        s, color, (cmd.start[0] + dx, cmd.start[1] + dy),
                        (cmd.end[0] + dx, cmd.end[1] + dy), cmd.width))

    def _polyline(self, target, cmd: Polyline):
        if len(cmd.points) < 2:
            return
        if cmd.alpha >= 1.0:
            pygame.draw.lines(target, cmd.color, False, cmd.points, cmd.width)
            return
        color = _rgba(cmd.color, cmd.alpha)
        self._blend(target, _bounds(cmd.points, cmd.width),
                    lambda s, dx, dy: pygame.draw.lines(s, color, False, _shift(cmd.points, dx, dy), cmd.width))

    def _polygon(self, target, cmd: Polygon):
        if len(cmd.points) < 3:
            return
        if cmd.alpha >= 1.0:
            pygame.draw.polygon(target, cmd.color, cmd.points)
            return
        color = _rgba(cmd.color, cmd.alpha)
        self._blend(target, _bounds(cmd.points, 1),
                    lambda s, dx, dy: pygame.draw.polygon(s, color, _shift(cmd.points, dx, dy)))

    def _text(self, target, cmd: Text):
        image = self.font(cmd.font, cmd.size).render(cmd.text, True, cmd.color)
        if cmd.alpha < 1.0:
            image.set_alpha(int(round(cmd.alpha * 255)))
        target.blit(image, (int(round(cmd.x)), int(round(cmd.y))))

    def _blit(self, target, cmd: Blit):
        target.blit(cmd.surface, (int(round(cmd.x)), int(round(cmd.y))))

    _DISPATCH = {
        FillRect: _fill_rect,
        Line: _line,
        Polyline: _polyline,
        Polygon: _polygon,
        Text: _text,
        Blit: _blit,
    }
