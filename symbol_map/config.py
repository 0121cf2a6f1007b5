# symbol_map/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the symbol
map chart. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC MAP.
Instead, pass a configuration dictionary to the SymbolMap instance.
================================================================================
"""

# --- Size Scale ---
# Symbol radius range in pixels. The scale is square-root based so that the
# circle AREA grows linearly with the value.
SIZE_RANGE_PX = (5.0, 15.0)

# --- Color Scale ---
# Depth (km) is mapped onto a light-pink to magenta ramp, interpolated in Lab.
COLOR_DOMAIN = (0.0, 200.0)
COLOR_RANGE = ("#fde0dd", "#c51b8a")

# The record field the color scale reads. The size scale goes through the
# configurable value accessor instead.
COLOR_FIELD = "depth"

# --- Drag Rotation ---
# Dragging across the full surface width rotates by half a turn.
DRAG_ANGLE_RANGE_DEG = (-180.0, 180.0)

# --- Landmass ---
# Name of the object inside a TopoJSON topology holding the land outline.
LAND_OBJECT_NAME = "land"

# Maximum edge length, in degrees, before a geometry is projected. Long
# straight edges in lon/lat are curves on screen.
PATH_DENSIFY_DEGREES = 2.0

# --- Status Line Messages ---
DEFAULT_STATUS_MESSAGE = "Hover over a circle for more details"
HOVER_STATUS_TEMPLATE = "{place}, received an earthquake with a magnitude of {mag} at {time}"
MAP_LOADED_MESSAGE = "Map data loaded."
VALUES_LOADED_MESSAGE = "Symbol data loaded."
DRAWING_MESSAGE = "Drawing map... please wait."
MISSING_DATA_WARNING = "Unable to draw symbol map: missing data."

# --- Mark Style Sheet ---
# Class-based styles applied when painting marks. A mark with several classes
# merges them in the order listed here, later classes winning.
STYLE_SHEET = {
    "country": {
        "fill": (221, 221, 221),
        "stroke": (255, 255, 255),
        "stroke_width": 1,
    },
    "symbol": {
        "stroke": (255, 255, 255),
        "stroke_width": 1,
        "opacity": 0.8,
    },
    "highlight": {
        "stroke": (0, 0, 0),
        "stroke_width": 2,
        "opacity": 1.0,
    },
}

BACKGROUND_COLOR = (255, 255, 255)
