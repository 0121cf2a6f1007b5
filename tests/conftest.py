import os

# Pygame must not open a real window during tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from symbol_map import ChartSurface, Scene, SymbolMap

SURFACE_WIDTH = 960
SURFACE_HEIGHT = 500


@pytest.fixture(scope="session", autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def land_topology() -> dict:
    """Two unquantized land polygons, one of them touching the antimeridian."""
    return {
        "type": "Topology",
        "objects": {
            "land": {"type": "MultiPolygon", "arcs": [[[0]], [[1]]]},
        },
        "arcs": [
            [[-20, -10], [20, -10], [20, 30], [-20, 30], [-20, -10]],
            [[150, -40], [180, -40], [180, -10], [150, -10], [150, -40]],
        ],
    }


@pytest.fixture
def quakes() -> list:
    return [
        {"longitude": -149.9, "latitude": 61.3, "depth": 35.4, "mag": 4.5, "place": "Anchorage", "time": "T1", "value": 4.5},
        {"longitude": 141.9, "latitude": 37.8, "depth": 44.1, "mag": 5.0, "place": "Namie", "time": "T2", "value": 5.0},
        {"longitude": 122.5, "latitude": -7.3, "depth": 552.1, "mag": 7.0, "place": "Flores Sea", "time": "T3", "value": 7.0},
        {"longitude": -72.0, "latitude": -33.8, "depth": 24.6, "mag": 4.9, "place": "Valparaiso", "time": "T4", "value": 4.9},
    ]


@pytest.fixture
def scene() -> Scene:
    scene = Scene()
    scene.add(ChartSurface("map", (0, 0, SURFACE_WIDTH, SURFACE_HEIGHT)))
    return scene


@pytest.fixture
def surface(scene) -> ChartSurface:
    return scene.get("map")


@pytest.fixture
def chart(scene) -> SymbolMap:
    return SymbolMap(scene)


@pytest.fixture
def drawn_chart(chart, land_topology, quakes) -> SymbolMap:
    chart.set_map(land_topology).set_values(quakes)
    chart.draw("map")
    return chart
