# -*- coding: utf-8 -*-

"""
water_column/config.py

This module centralizes the configuration parameters for the water column
renderer of the icefish simulation. Keeping the depth mapping, lakebed
generation, colors and animation constants in one place keeps the renderer,
the pygame viewer and any collaborator (fish placement, HUD readouts) in
agreement about where things are drawn.

Contents:
---------
1. WATER_COLUMN:
   - Lake depth and the fixed top/bottom pixel margins used by the
     `DepthConverter`. The margins are applied identically on construction
     and on every resize.

2. TERRAIN:
   - Lakebed sampling step, overscan past the right edge, the jitter band
     the random walk is clamped to, the per-step perturbation bound and the
     probability that a sample carries structure (rocks, logs).

3. THERMOCLINES:
   - Temperature layers drawn as faint animated lines. `strength` in [0, 1]
     scales both the line opacity and the wave amplitude.

4. COLORS:
   - RGB tuples for the gradient, lakebed, ice and overlay text.

5. ANIMATION:
   - Gradient band height and the wave parameters for thermoclines and the
     ice texture line. Time values are in milliseconds.

6. DEPTH_MARKERS:
   - Spacing and placement of the depth labels along the left edge.

7. DEPTH_ZONES:
   - Named depth bands for Lake Champlain, used by HUD collaborators.

Usage:
------
    from icefish.water_column.config import WATER_COLUMN, TERRAIN

    converter = DepthConverter(600, WATER_COLUMN['max_depth_ft'])

Constructors take these values as defaults; pass keyword arguments to
override a single scene without touching the module.
"""
from .draw import hex_to_rgb

# ───────────────────────────────────────────────────────────────────────────────
# 1) DEPTH MAPPING (feet <-> pixels)
# ───────────────────────────────────────────────────────────────────────────────
WATER_COLUMN = {
    'max_depth_ft': 150.0,      # Lake depth shown at the water floor (ft)
    'top_margin_px': 40,        # Rows above the ice line (sky / HUD strip)
    'bottom_margin_px': 40,     # Rows reserved below the floor for the lakebed
    'default_width': 1024,      # Initial viewport width (px)
    'default_height': 600,      # Initial viewport height (px)
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) LAKEBED PROFILE
# ───────────────────────────────────────────────────────────────────────────────
TERRAIN = {
    'step_px': 20,                  # Horizontal spacing between samples
    'overscan_px': 200,             # Samples continue past the right edge
    'jitter_px': 10.0,              # Offset walk is clamped to [-jitter, +jitter]
    'max_step_px': 1.0,             # Per-sample perturbation bound
    'structure_probability': 0.10,  # Chance a sample carries a structure block
    'structure_size_px': 10,        # Side of the structure block
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) TEMPERATURE LAYERS
# ───────────────────────────────────────────────────────────────────────────────
THERMOCLINES = (
    {'depth': 25.0, 'strength': 0.3},
    {'depth': 45.0, 'strength': 0.5},
    {'depth': 85.0, 'strength': 0.2},
)

# ───────────────────────────────────────────────────────────────────────────────
# 4) COLORS (RGB)
# ───────────────────────────────────────────────────────────────────────────────
COLORS = {
    'water_surface': hex_to_rgb(0x5a6f4a),  # army green near the ice
    'water_deep': hex_to_rgb(0x3a4f3a),     # olive at depth
    'contour': hex_to_rgb(0x444444),
    'contour_alpha': 0.8,
    'contour_width': 2,
    'structure': hex_to_rgb(0x666666),
    'structure_alpha': 0.5,
    'ground': hex_to_rgb(0x8b7355),         # brown earth below the contour
    'thermocline': hex_to_rgb(0x0099ff),
    'water_line': hex_to_rgb(0x000000),
    'ice': hex_to_rgb(0xffffff),
    'ice_alpha': 0.8,
    'ice_texture': hex_to_rgb(0x5a6f4a),
    'ice_texture_alpha': 0.5,
    'marker_text': hex_to_rgb(0x00ff00),
}

# ───────────────────────────────────────────────────────────────────────────────
# 5) ANIMATION
# ───────────────────────────────────────────────────────────────────────────────
ANIMATION = {
    # static gradient
    'band_px': 10,

    # thermocline waves: y + sin((x + t * time_scale) * frequency) * amplitude * strength
    'thermocline_step_px': 10,
    'thermocline_frequency': 0.02,
    'thermocline_time_scale': 0.001,
    'thermocline_amplitude_px': 6.0,
    'thermocline_alpha_scale': 0.3,
    'thermocline_width': 1,

    # ice line
    'water_line_width': 2,
    'ice_width': 6,
    'ice_texture_step_px': 5,
    'ice_texture_frequency': 0.01,
    'ice_texture_time_scale': 0.002,
    'ice_texture_amplitude_px': 2.0,
    'ice_texture_offset_px': 2.0,
    'ice_texture_width': 2,
}

# ───────────────────────────────────────────────────────────────────────────────
# 6) DEPTH MARKERS
# ───────────────────────────────────────────────────────────────────────────────
DEPTH_MARKERS = {
    'interval_ft': 25,
    'floor_clearance_px': 10,   # labels closer than this to the floor are dropped
    'x_px': 5,
    'lift_px': 6,               # label baseline sits slightly above its row
    'font_size': 10,
    'font_name': 'Courier New',
    'alpha': 0.7,
}

# ───────────────────────────────────────────────────────────────────────────────
# 7) DEPTH ZONES (ft)
# ───────────────────────────────────────────────────────────────────────────────
DEPTH_ZONES = (
    {'key': 'surface', 'name': 'Surface', 'min': 0.0, 'max': 15.0},
    {'key': 'thermocline', 'name': 'Thermocline', 'min': 15.0, 'max': 35.0},
    {'key': 'middle', 'name': 'Mid-Water', 'min': 35.0, 'max': 80.0},
    {'key': 'deep', 'name': 'Deep Structure', 'min': 80.0, 'max': 120.0},
    {'key': 'bottom', 'name': 'Bottom', 'min': 120.0, 'max': 150.0},
)
