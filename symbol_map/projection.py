# symbol_map/projection.py

"""
================================================================================
GEOGRAPHIC PROJECTION
================================================================================
This module maps (longitude, latitude) pairs in degrees onto screen pixels
using the Natural Earth projection, and renders GeoJSON polygon/line geometry
through the same projection so that outlines and point symbols line up.

Data Contract:
---------------
- NaturalEarthProjection
    - Parameters: scale (pixels per projected unit), translate (pixel offset
      of the projection center), rotate ((lambda, phi) in degrees; only the
      longitude rotation is supported).
    - __call__(lon, lat) -> (x, y) screen coordinates.
    - project_many(lons, lats) -> (xs, ys) NumPy arrays.
    - project_unrotated(lons, lats): the raw forward step shared by
      project_many and GeoPath; override it to swap the projection.
    - invert(x, y) -> (lon, lat).
- GeoPath
    - __call__(geojson) -> PathShape with projected polygons and lines.
- Side Effects: None.
- Invariants: Rotation wraps visually; the stored angle is never clamped.
================================================================================
"""
import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
import shapely
from shapely.affinity import translate as shift_geometry
from shapely.geometry import GeometryCollection, box, shape
from shapely.validation import make_valid

from . import config as DEFAULTS

# The lon/lat rectangle every geometry is clipped to before projecting.
_WORLD_BOX = box(-180.0, -90.0, 180.0, 90.0)

# Newton iteration limits for the inverse projection.
_INVERT_EPSILON = 1e-6
_INVERT_MAX_ITERATIONS = 25


def wrap_longitude(lon):
    """Wraps longitudes outside [-180, 180] back into the visible range."""
    lon = np.asarray(lon, dtype=float)
    wrapped = np.mod(lon + 180.0, 360.0) - 180.0
    return np.where((lon >= -180.0) & (lon <= 180.0), lon, wrapped)


def _natural_earth_raw(lam: np.ndarray, phi: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Forward Natural Earth polynomial; inputs and outputs in radians."""
    phi2 = phi * phi
    phi4 = phi2 * phi2
    x = lam * (0.8707 - 0.131979 * phi2 + phi4 * (-0.013791 + phi4 * (0.003971 * phi2 - 0.001529 * phi4)))
    y = phi * (1.007226 + phi2 * (0.015085 + phi4 * (-0.044475 + 0.028874 * phi2 - 0.005916 * phi4)))
    return x, y


def _natural_earth_raw_invert(x: float, y: float) -> Tuple[float, float]:
    """Inverse of the Natural Earth polynomial using Newton's method on y."""
    phi = y
    for _ in range(_INVERT_MAX_ITERATIONS):
        phi2 = phi * phi
        phi4 = phi2 * phi2
        delta = (
            phi * (1.007226 + phi2 * (0.015085 + phi4 * (-0.044475 + 0.028874 * phi2 - 0.005916 * phi4))) - y
        ) / (
            1.007226 + phi2 * (0.015085 * 3 + phi4 * (-0.044475 * 7 + 0.028874 * 9 * phi2 - 0.005916 * 11 * phi4))
        )
        phi -= delta
        if abs(delta) <= _INVERT_EPSILON:
            break
    phi2 = phi * phi
    lam = x / (0.8707 + phi2 * (-0.131979 + phi2 * (-0.013791 + phi2 * phi2 * phi2 * (0.003971 - 0.001529 * phi2))))
    return lam, phi


class NaturalEarthProjection:
    """
    A rotatable, scalable whole-world projection. Setters return the
    projection itself so configuration can be chained.
    """

    def __init__(self, scale: float = 150.0, translate: Sequence[float] = (480.0, 250.0)):
        self._scale = float(scale)
        self._translate = (float(translate[0]), float(translate[1]))
        self._rotate = (0.0, 0.0)

    # --- Parameters ---
    def scale(self) -> float:
        return self._scale

    def set_scale(self, scale: float) -> "NaturalEarthProjection":
        self._scale = float(scale)
        return self

    def translate(self) -> Tuple[float, float]:
        return self._translate

    def set_translate(self, translate: Sequence[float]) -> "NaturalEarthProjection":
        self._translate = (float(translate[0]), float(translate[1]))
        return self

    def rotate(self) -> Tuple[float, float]:
        return self._rotate

    def set_rotate(self, rotation: Sequence[float]) -> "NaturalEarthProjection":
        """Sets the rotation as (lambda, phi) degrees. Only phi == 0 is supported."""
        lam = float(rotation[0])
        phi = float(rotation[1]) if len(rotation) > 1 else 0.0
        if phi != 0.0:
            raise ValueError("Only longitude rotation is supported; the latitude rotation must be 0.")
        self._rotate = (lam, 0.0)
        return self

    # --- Forward / Inverse ---
    def project_unrotated(self, lons, lats) -> Tuple[np.ndarray, np.ndarray]:
        """
        Projects longitude/latitude arrays (degrees, already rotated and in
        [-180, 180]) to screen coordinates. Subclasses replace this to change
        the projection; rotation and path rendering both go through it.
        """
        lam = np.radians(np.asarray(lons, dtype=float))
        phi = np.radians(np.asarray(lats, dtype=float))
        x, y = _natural_earth_raw(lam, phi)
        tx, ty = self._translate
        return tx + x * self._scale, ty - y * self._scale

    def project_many(self, lons, lats) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorized forward projection of longitude/latitude arrays (degrees)."""
        return self.project_unrotated(wrap_longitude(np.asarray(lons, dtype=float) + self._rotate[0]), lats)

    def __call__(self, lon: float, lat: float) -> Tuple[float, float]:
        xs, ys = self.project_many(lon, lat)
        return float(xs), float(ys)

    def invert(self, x: float, y: float) -> Tuple[float, float]:
        """Maps a screen point back to (longitude, latitude) in degrees."""
        tx, ty = self._translate
        lam, phi = _natural_earth_raw_invert((x - tx) / self._scale, (ty - y) / self._scale)
        lon = float(wrap_longitude(math.degrees(lam) - self._rotate[0]))
        return lon, math.degrees(phi)


@dataclass
class PathShape:
    """
    Screen-space shape descriptor produced by GeoPath.

    polygons: list of (exterior, holes) where each ring is an (N, 2) array.
    lines: list of (N, 2) arrays.
    """
    polygons: List[Tuple[np.ndarray, List[np.ndarray]]] = field(default_factory=list)
    lines: List[np.ndarray] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.polygons and not self.lines

    def ring_count(self) -> int:
        return sum(1 + len(holes) for _, holes in self.polygons) + len(self.lines)


def _geometries(geojson) -> list:
    """Flattens a GeoJSON Feature/FeatureCollection/geometry into shapely geometries."""
    kind = geojson.get("type")
    if kind == "FeatureCollection":
        result = []
        for feature in geojson.get("features", []):
            result.extend(_geometries(feature))
        return result
    if kind == "Feature":
        geometry = geojson.get("geometry")
        return _geometries(geometry) if geometry else []
    return [shape(geojson)]


class GeoPath:
    """Renders GeoJSON geometry through a projection into a PathShape."""

    def __init__(self, projection: NaturalEarthProjection, densify_degrees: float = DEFAULTS.PATH_DENSIFY_DEGREES):
        self.projection = projection
        self.densify_degrees = densify_degrees

    def __call__(self, geojson) -> PathShape:
        result = PathShape()
        for geometry in _geometries(geojson):
            # Clipping a polygon at the box edge can leave boundary slivers; drop them.
            keep_lines = geometry.area == 0
            for piece in self._cut(geometry):
                self._append(result, piece, keep_lines)
        return result

    def _cut(self, geometry) -> list:
        """
        Rotates a lon/lat geometry and splits it at the antimeridian. The
        rotated geometry is intersected with the world box and with its copies
        shifted by one full turn each way.
        """
        if not geometry.is_valid:
            geometry = make_valid(geometry)

        angle = float(wrap_longitude(self.projection.rotate()[0]))
        rotated = shift_geometry(geometry, xoff=angle)

        pieces = []
        for offset in (-360.0, 0.0, 360.0):
            clipped = shift_geometry(rotated, xoff=offset).intersection(_WORLD_BOX)
            if not clipped.is_empty:
                pieces.append(shapely.segmentize(clipped, self.densify_degrees))
        return pieces

    def _project_ring(self, coords) -> np.ndarray:
        array = np.asarray(coords, dtype=float)[:, :2]
        # The geometry is already rotated, so project without rotation.
        xs, ys = self.projection.project_unrotated(array[:, 0], array[:, 1])
        return np.column_stack((xs, ys))

    def _append(self, result: PathShape, geometry, keep_lines: bool = True):
        kind = geometry.geom_type
        if kind == "Polygon":
            exterior = self._project_ring(geometry.exterior.coords)
            holes = [self._project_ring(ring.coords) for ring in geometry.interiors]
            result.polygons.append((exterior, holes))
        elif kind == "LineString":
            if keep_lines and len(geometry.coords) >= 2:
                result.lines.append(self._project_ring(geometry.coords))
        elif kind in ("MultiPolygon", "MultiLineString") or isinstance(geometry, GeometryCollection):
            for part in geometry.geoms:
                self._append(result, part, keep_lines)
        # Points produced by clipping at the box edge have no outline to draw.
