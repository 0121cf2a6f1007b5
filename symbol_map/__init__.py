# symbol_map/__init__.py

# This file makes the 'symbol_map' directory a Python package.
# We also use it to define the public API of the package.

from .chart import SymbolMap, default_value
from .projection import GeoPath, NaturalEarthProjection
from .scales import LabColorScale, LinearScale, SqrtScale, extent
from .status import StatusLine
from .surface import ChartSurface, Scene

__all__ = [
    "SymbolMap",
    "default_value",
    "GeoPath",
    "NaturalEarthProjection",
    "LabColorScale",
    "LinearScale",
    "SqrtScale",
    "extent",
    "StatusLine",
    "ChartSurface",
    "Scene",
]
