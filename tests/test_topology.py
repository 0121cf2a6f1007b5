import pytest

from symbol_map import topology


def test_decodes_quantized_arcs():
    topo = {
        "type": "Topology",
        "transform": {"scale": [1, 1], "translate": [0, 0]},
        "objects": {"land": {"type": "Polygon", "arcs": [[0]]}},
        "arcs": [[[0, 0], [1, 0], [0, 1], [-1, 0], [0, -1]]],
    }
    feature = topology.feature(topo, "land")
    assert feature["type"] == "Feature"
    assert feature["geometry"]["coordinates"] == [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]


def test_quantized_arcs_apply_scale_and_translate():
    topo = {
        "type": "Topology",
        "transform": {"scale": [0.5, 2], "translate": [-10, 5]},
        "objects": {"pt": {"type": "Point", "coordinates": [4, 1]}},
        "arcs": [],
    }
    assert topology.feature(topo, "pt")["geometry"]["coordinates"] == [-8.0, 7.0]


def test_line_stitching_drops_shared_points():
    topo = {
        "type": "Topology",
        "objects": {"border": {"type": "LineString", "arcs": [0, 1]}},
        "arcs": [[[0, 0], [1, 0]], [[1, 0], [2, 0]]],
    }
    coords = topology.feature(topo, "border")["geometry"]["coordinates"]
    assert coords == [[0, 0], [1, 0], [2, 0]]


def test_negative_index_reverses_arc():
    topo = {
        "type": "Topology",
        "objects": {"border": {"type": "LineString", "arcs": [~0]}},
        "arcs": [[[0, 0], [1, 0], [2, 0]]],
    }
    coords = topology.feature(topo, "border")["geometry"]["coordinates"]
    assert coords == [[2, 0], [1, 0], [0, 0]]


def test_multipolygon_land(land_topology):
    land = topology.feature(land_topology, "land")
    geometry = land["geometry"]
    assert geometry["type"] == "MultiPolygon"
    assert len(geometry["coordinates"]) == 2
    assert geometry["coordinates"][0][0][0] == [-20, -10]


def test_geometry_collection_becomes_feature_collection():
    topo = {
        "type": "Topology",
        "objects": {
            "countries": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "arcs": [[0]], "id": 840, "properties": {"name": "A"}},
                    {"type": "Polygon", "arcs": [[1]], "id": 124},
                ],
            }
        },
        "arcs": [
            [[0, 0], [1, 0], [1, 1], [0, 0]],
            [[2, 2], [3, 2], [3, 3], [2, 2]],
        ],
    }
    collection = topology.feature(topo, "countries")
    assert collection["type"] == "FeatureCollection"
    assert [f["id"] for f in collection["features"]] == [840, 124]
    assert collection["features"][0]["properties"] == {"name": "A"}


def test_missing_object_raises_key_error(land_topology):
    with pytest.raises(KeyError):
        topology.feature(land_topology, "countries")


def test_is_topology(land_topology):
    assert topology.is_topology(land_topology)
    assert not topology.is_topology({"type": "FeatureCollection", "features": []})
    assert not topology.is_topology(None)
