# symbol_map/topology.py

"""
================================================================================
TOPOJSON DECODING
================================================================================
Landmass outlines are usually distributed as TopoJSON: shared, quantized and
delta-encoded arcs referenced by index from each geometry. This module turns a
named object of a topology back into plain GeoJSON that the projection's path
renderer understands.

Data Contract:
---------------
- Inputs:
    - topology (dict): a parsed TopoJSON document ("type": "Topology").
    - obj (dict or str): a geometry object of the topology, or its name in
      topology["objects"].
- Outputs:
    - feature(): a GeoJSON Feature, or a FeatureCollection for a
      GeometryCollection object.
- Side Effects: None.
- Invariants: Arc sharing is preserved in the output coordinates; consecutive
  arcs in a ring are joined on their shared end point.
================================================================================
"""
from typing import List, Union

import numpy as np


def is_topology(data) -> bool:
    """True if the data looks like a parsed TopoJSON topology."""
    return isinstance(data, dict) and data.get("type") == "Topology"


def _decode_arcs(topology: dict) -> List[np.ndarray]:
    """Decodes every arc to absolute lon/lat coordinates."""
    transform = topology.get("transform")
    decoded = []
    for arc in topology.get("arcs", []):
        points = np.asarray(arc, dtype=float).reshape(-1, 2) if arc else np.empty((0, 2))
        if transform and len(points):
            # Quantized arcs store the first point absolutely and the rest as deltas.
            points = np.cumsum(points, axis=0)
            points = points * np.asarray(transform["scale"], dtype=float) + np.asarray(transform["translate"], dtype=float)
        decoded.append(points)
    return decoded


def _decode_point(topology: dict, position) -> List[float]:
    transform = topology.get("transform")
    x, y = float(position[0]), float(position[1])
    if transform:
        x = x * transform["scale"][0] + transform["translate"][0]
        y = y * transform["scale"][1] + transform["translate"][1]
    return [x, y]


class _Decoder:
    """Stitches arc indices of one topology into GeoJSON coordinates."""

    def __init__(self, topology: dict):
        self.topology = topology
        self.arcs = _decode_arcs(topology)

    def line(self, arc_indices) -> List[List[float]]:
        points: List[List[float]] = []
        for index in arc_indices:
            # Negative indices refer to the reversed arc ~index.
            arc = self.arcs[~index][::-1] if index < 0 else self.arcs[index]
            if points:
                points.pop()
            points.extend(arc.tolist())
        if len(points) < 2:
            # A line needs two positions; duplicate a lone point.
            points.extend(points[:1] * (2 - len(points)))
        return points

    def ring(self, arc_indices) -> List[List[float]]:
        points = self.line(arc_indices)
        while len(points) < 4:
            points.append(points[0])
        return points

    def geometry(self, obj: dict):
        kind = obj.get("type")
        if kind == "GeometryCollection":
            return {"type": kind, "geometries": [self.geometry(g) for g in obj.get("geometries", [])]}
        if kind == "Point":
            coordinates = _decode_point(self.topology, obj["coordinates"])
        elif kind == "MultiPoint":
            coordinates = [_decode_point(self.topology, p) for p in obj["coordinates"]]
        elif kind == "LineString":
            coordinates = self.line(obj["arcs"])
        elif kind == "MultiLineString":
            coordinates = [self.line(arcs) for arcs in obj["arcs"]]
        elif kind == "Polygon":
            coordinates = [self.ring(arcs) for arcs in obj["arcs"]]
        elif kind == "MultiPolygon":
            coordinates = [[self.ring(arcs) for arcs in polygon] for polygon in obj["arcs"]]
        elif kind is None:
            return None
        else:
            raise ValueError(f"Unsupported TopoJSON geometry type: '{kind}'")
        return {"type": kind, "coordinates": coordinates}

    def feature(self, obj: dict) -> dict:
        feature = {
            "type": "Feature",
            "properties": obj.get("properties", {}),
            "geometry": self.geometry(obj),
        }
        if "id" in obj:
            feature["id"] = obj["id"]
        return feature


def feature(topology: dict, obj: Union[dict, str]) -> dict:
    """
    Converts a TopoJSON object to GeoJSON. A GeometryCollection becomes a
    FeatureCollection with one Feature per member; any other object becomes a
    single Feature.
    """
    if isinstance(obj, str):
        try:
            obj = topology["objects"][obj]
        except KeyError:
            raise KeyError(f"Topology has no object named '{obj}'") from None

    decoder = _Decoder(topology)
    if obj.get("type") == "GeometryCollection":
        return {
            "type": "FeatureCollection",
            "features": [decoder.feature(g) for g in obj.get("geometries", [])],
        }
    return decoder.feature(obj)
