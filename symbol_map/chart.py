# symbol_map/chart.py

"""
================================================================================
SYMBOL MAP CHART
================================================================================
This module contains the SymbolMap class: a reusable chart that draws sized,
colored circles for geotagged records over a landmass outline, rotates the
projection when the user drags across it, and describes the hovered record
in a status line.

Data Contract:
---------------
- Inputs (on initialization):
    - scene (Scene): the registry the draw entry point resolves surfaces from.
    - config (dict): optional overrides of the internal defaults.
    - logger: optional logging.Logger for runtime messages.
    - status (StatusLine): optional shared status line.
- Configuration (each setter returns the chart, each getter the value):
    - lookup, projection, radius (size scale), color (color scale),
      map (landmass geometry), values (records), value (value accessor).
- Public Methods:
    - draw(surface_id): the full draw.
- Side Effects: Creates and updates marks on the target surface, registers
  pointer handlers, updates the status line, logs.
- Invariants:
    - draw() is a no-op (with a warning) while the map or values are missing.
    - The size scale's domain is computed during the full draw only; drag
      redraws reuse it.
    - A drag redraw never creates, removes or rebinds marks.
================================================================================
"""
import logging
import math
from typing import Callable, Iterable, Mapping, Optional

from . import config as DEFAULTS
from . import topology
from .interaction import DragRotateController
from .projection import GeoPath, NaturalEarthProjection
from .scales import LabColorScale, SqrtScale, extent
from .status import StatusLine
from .surface import ChartSurface, PathMark, Scene, SymbolMark


def default_value(record: Mapping):
    """Reads the 'value' field of a record."""
    return record["value"]


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


class SymbolMap:
    """
    A world symbol map. Configure it with the setters, then call draw() with
    the id of a surface registered in the scene.
    """

    def __init__(self, scene: Scene, config: Optional[dict] = None,
                 logger: Optional[logging.Logger] = None, status: Optional[StatusLine] = None):
        self.scene = scene
        self.logger = logger or logging.getLogger(__name__)
        self.user_config = config or {}

        # --- Consolidate Configuration ---
        self.settings = {
            'size_range_px': self.user_config.get('size_range_px', DEFAULTS.SIZE_RANGE_PX),
            'color_domain': self.user_config.get('color_domain', DEFAULTS.COLOR_DOMAIN),
            'color_range': self.user_config.get('color_range', DEFAULTS.COLOR_RANGE),
            'color_field': self.user_config.get('color_field', DEFAULTS.COLOR_FIELD),
            'drag_angle_range_deg': self.user_config.get('drag_angle_range_deg', DEFAULTS.DRAG_ANGLE_RANGE_DEG),
            'land_object_name': self.user_config.get('land_object_name', DEFAULTS.LAND_OBJECT_NAME),
            'path_densify_degrees': self.user_config.get('path_densify_degrees', DEFAULTS.PATH_DENSIFY_DEGREES),
            'default_status_message': self.user_config.get('default_status_message', DEFAULTS.DEFAULT_STATUS_MESSAGE),
            'hover_status_template': self.user_config.get('hover_status_template', DEFAULTS.HOVER_STATUS_TEMPLATE),
        }

        # --- Chart State ---
        self._lookup = {}
        self._projection = NaturalEarthProjection()
        self._radius = SqrtScale(range=self.settings['size_range_px'])
        self._color = LabColorScale(self.settings['color_domain'], self.settings['color_range'])
        self._map = None
        self._values = None
        self._value: Callable = default_value

        # --- Render State (set by the full draw) ---
        self._surface: Optional[ChartSurface] = None
        self._land_feature = None

        self.status = status or StatusLine(self.settings['default_status_message'])
        self.drag = DragRotateController(self._on_rotate, self.settings['drag_angle_range_deg'])

    # --- Getters / Setters ---
    def get_lookup(self) -> dict:
        return self._lookup

    def set_lookup(self, rows: Iterable[Mapping]) -> "SymbolMap":
        """
        Adds region rows to the lookup. Each row maps its id to its name and,
        if it has a code, the code to its id. Later rows win on collisions.
        """
        for row in rows:
            self._lookup[row["id"]] = str(row["name"]).strip()
            code = row.get("code")
            if code is not None:
                self._lookup[str(code).strip().upper()] = row["id"]
        self.logger.info("Updated lookup information.")
        return self

    def get_projection(self) -> NaturalEarthProjection:
        return self._projection

    def set_projection(self, projection: NaturalEarthProjection) -> "SymbolMap":
        self._projection = projection
        return self

    def get_radius(self):
        return self._radius

    def set_radius(self, radius) -> "SymbolMap":
        self._radius = radius
        return self

    def get_color(self):
        return self._color

    def set_color(self, color) -> "SymbolMap":
        self._color = color
        return self

    def get_map(self):
        return self._map

    def set_map(self, land) -> "SymbolMap":
        """Sets the landmass: a TopoJSON topology or a GeoJSON object. Required before drawing."""
        self._map = land
        self.status.update(DEFAULTS.MAP_LOADED_MESSAGE)
        return self

    def get_values(self):
        return self._values

    def set_values(self, values) -> "SymbolMap":
        """Sets the symbol records. Required before drawing."""
        self._values = values
        self.status.update(DEFAULTS.VALUES_LOADED_MESSAGE)
        return self

    def get_value(self) -> Callable:
        return self._value

    def set_value(self, accessor: Callable) -> "SymbolMap":
        """Sets how the size value is read from a record."""
        self._value = accessor
        return self

    # --- Full Draw ---
    def draw(self, surface_id: str):
        """Draws the map onto the surface registered under surface_id."""
        if self._map is None or self._values is None:
            self.logger.warning(DEFAULTS.MISSING_DATA_WARNING)
            return

        surface = self.scene.get(surface_id)
        if surface is None:
            self.logger.warning(f"Unable to draw symbol map: no surface with id '{surface_id}'.")
            return

        self.logger.info(f"Drawing symbol map on '{surface_id}' with {len(self._values)} symbols.")
        self.status.update(DEFAULTS.DRAWING_MESSAGE)

        bbox = surface.get_bounding_rect()
        self._surface = surface
        self._setup_projection(bbox.width, bbox.height)
        self._register_handlers(surface)
        self._update_size_domain()
        self._create_marks(surface)

    def _setup_projection(self, width: float, height: float):
        """Fits the projection and the drag scale to the surface size."""
        self._projection.set_scale(width / 2 / math.pi)
        self._projection.set_translate((width / 2, height / 2))
        self.drag.configure(width)

    def _register_handlers(self, surface: ChartSurface):
        surface.on("mousedown", lambda position: self.drag.pointer_down(position[0]))
        surface.on("mouseup", lambda position: self.drag.pointer_up(position[0]))
        surface.on("mousemove", lambda position: self.drag.pointer_move(position[0]))

    def _update_size_domain(self):
        low, high = extent(self._values, self._value)
        if low is None:
            self.logger.warning("Symbol values have no numeric extent; keeping the previous size domain.")
            return
        if not hasattr(self._radius, "set_domain"):
            # A plain function was supplied as the size scale; it has no domain to fit.
            return
        self._radius.set_domain((low, high))
        self.logger.debug(f"Size domain set to [{low}, {high}].")

    def _resolve_land(self):
        if topology.is_topology(self._map):
            return topology.feature(self._map, self.settings['land_object_name'])
        return self._map

    def _create_marks(self, surface: ChartSurface):
        """Binds one landmass path and one circle per record, reusing existing marks."""
        self._land_feature = self._resolve_land()

        country = surface.group("country")
        if len(country) == 0:
            country.append(PathMark())
        country.truncate(1)
        land = country.marks[0]
        land.datum = self._land_feature
        land.classed("country", True)
        self._position_land(land)

        dots = surface.group("dots")
        dots.truncate(len(self._values))
        for index, record in enumerate(self._values):
            if index < len(dots):
                mark = dots.marks[index]
                mark.datum = record
            else:
                mark = dots.append(SymbolMark(record))
            mark.classed("symbol", True)
            mark.on("mouseover", self._show_highlight)
            mark.on("mouseout", self._hide_highlight)
            self._position_symbol(mark)

    # --- Drag Redraw ---
    def _on_rotate(self, angle: float):
        self._projection.set_rotate((angle, 0))
        self._update()

    def _update(self):
        """Repositions the existing marks under the current projection."""
        if self._surface is None:
            return
        for land in self._surface.group("country"):
            self._position_land(land)
        for mark in self._surface.group("dots"):
            self._position_symbol(mark)

    def _position_land(self, land: PathMark):
        # Always follows the current projection.
        path = GeoPath(self._projection, self.settings['path_densify_degrees'])
        land.attr(shape=path(land.datum))

    def _position_symbol(self, mark: SymbolMark):
        record = mark.datum
        # The projection takes (longitude, latitude) and returns (x, y).
        cx, cy = self._projection(record["longitude"], record["latitude"])
        value = self._value(record)
        # A record without a value gets no visible circle.
        radius = 0.0 if _is_missing(value) else self._radius(value)
        mark.attr(
            cx=cx,
            cy=cy,
            r=radius,
            fill=self._color(record.get(self.settings['color_field'])),
        )

    # --- Hover Feedback ---
    def _show_highlight(self, mark: SymbolMark):
        mark.classed("highlight", True).classed("symbol", True)
        record = mark.datum
        self.status.update(self.settings['hover_status_template'].format(
            place=record.get("place"),
            mag=record.get("mag"),
            time=record.get("time"),
        ))

    def _hide_highlight(self, mark: SymbolMark):
        mark.classed("highlight", False).classed("symbol", True)
        self.status.update()
