"""
viewer.py

Interactive pygame window for the water column.

Runs the cooperative frame loop: window resize events are applied to the
renderer (converter, lakebed, markers, static cache) before the next frame
is drawn, and every tick renders `renderer.draw(ticks)` to the display.

Command line:

    icefish-water --width 1024 --height 600 --max-depth 150 --seed 7
"""
import argparse
import logging
import sys

import pygame

from .config import WATER_COLUMN
from .errors import ConfigurationError, SurfaceAllocationError
from .renderer import WaterColumnRenderer
from .rendering import PygameBackend
from .utils import safe_log_exception

logger = logging.getLogger(__name__)


def run_viewer(width=WATER_COLUMN['default_width'], height=WATER_COLUMN['default_height'],
               max_depth=WATER_COLUMN['max_depth_ft'], seed=None, fps=60, max_frames=None) -> int:
    """Open a resizable window and animate the water column.

    Returns the number of frames drawn. `max_frames` stops the loop early
    (used for smoke runs without a user to close the window).
    """
    pygame.init()
    try:
        pygame.display.set_mode((int(width), int(height)), pygame.RESIZABLE)
        pygame.display.set_caption('icefish - water column')
        backend = PygameBackend()
        renderer = WaterColumnRenderer.create(width, height, max_depth, backend=backend, rng=seed)
        clock = pygame.time.Clock()

        frames = 0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    renderer.resize(event.w, event.h)

            screen = pygame.display.get_surface()
            backend.render(screen, renderer.draw(pygame.time.get_ticks()))
            pygame.display.flip()
            clock.tick(fps)

            frames += 1
            if max_frames is not None and frames >= max_frames:
                running = False
        logger.info('viewer closed after %d frames', frames)
        return frames
    finally:
        pygame.quit()


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='icefish-water', description='Animated ice fishing water column.')
    p.add_argument('--width', type=int, default=WATER_COLUMN['default_width'])
    p.add_argument('--height', type=int, default=WATER_COLUMN['default_height'])
    p.add_argument('--max-depth', type=float, default=WATER_COLUMN['max_depth_ft'], help='lake depth in feet')
    p.add_argument('--seed', type=int, default=None, help='seed for the lakebed profile')
    p.add_argument('--fps', type=int, default=60)
    p.add_argument('--frames', type=int, default=None, help='stop after this many frames')
    p.add_argument('--verbose', action='store_true', help='debug logging')
    return p


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s'
    )
    try:
        run_viewer(args.width, args.height, args.max_depth, seed=args.seed,
                   fps=args.fps, max_frames=args.frames)
    except (ConfigurationError, SurfaceAllocationError) as exc:
        safe_log_exception('water column viewer failed', exc,
                           width=args.width, height=args.height, max_depth=args.max_depth)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
