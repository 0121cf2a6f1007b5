# symbol_map/scales.py

"""
================================================================================
SCALE FUNCTIONS
================================================================================
This module contains the numeric mapping utilities used by the chart: a
square-root size scale, a plain linear scale and a color scale that
interpolates in the perceptually uniform CIELAB space.

It is designed to be a pure, stateless utility with no dependencies on Pygame,
so the scales can be tested and reused outside of the renderer.

Data Contract:
---------------
- Inputs (on initialization):
    - domain: (min, max) of the input values.
    - range: (min, max) of the output values (or two hex colors).
- Public Methods:
    - __call__(value): maps a value. Scales are NOT clamped; inputs outside
      the domain extrapolate.
    - domain() / set_domain(domain): read or replace the input domain.
- Side Effects: None.
- Invariants: A degenerate domain (min == max) maps every input to the start
  of the range.
================================================================================
"""
import math
import warnings
from typing import Callable, Iterable, Optional, Tuple

import numpy as np
from skimage.color import lab2rgb, rgb2lab

from . import config as DEFAULTS


def extent(records: Iterable, accessor: Callable) -> Tuple[Optional[float], Optional[float]]:
    """
    Returns the (min, max) of accessor(record) across the records.
    Missing and NaN values are ignored. If no numeric value is found, the
    result is (None, None).
    """
    values = []
    for record in records:
        value = accessor(record)
        if value is None:
            continue
        value = float(value)
        if math.isnan(value):
            continue
        values.append(value)

    if not values:
        return None, None
    array = np.asarray(values, dtype=float)
    return float(array.min()), float(array.max())


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parses '#rrggbb' or shorthand '#rgb' (with or without '#') into an (R, G, B) tuple."""
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) != 6:
        raise ValueError(f"Expected a 3- or 6-digit hex color, got '{color}'")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


def _normalize(value, d0: float, d1: float):
    """Position of value in [d0, d1] as a fraction, 0 for a degenerate domain."""
    span = d1 - d0
    if span == 0:
        return value * 0.0
    return (value - d0) / span


class LinearScale:
    """A linear mapping from a numeric domain to a numeric range."""

    def __init__(self, domain=(0.0, 1.0), range=(0.0, 1.0)):
        self._domain = (float(domain[0]), float(domain[1]))
        self._range = (float(range[0]), float(range[1]))

    def __call__(self, value):
        t = _normalize(value, *self._domain)
        r0, r1 = self._range
        return r0 + t * (r1 - r0)

    def domain(self) -> Tuple[float, float]:
        return self._domain

    def set_domain(self, domain) -> "LinearScale":
        self._domain = (float(domain[0]), float(domain[1]))
        return self

    def range(self) -> Tuple[float, float]:
        return self._range

    def set_range(self, range) -> "LinearScale":
        self._range = (float(range[0]), float(range[1]))
        return self


class SqrtScale(LinearScale):
    """
    A power scale with exponent 0.5. The domain and the input are both
    square-rooted (sign preserved) before the linear mapping, so the output
    radius grows with the square root of the value and circle area grows
    linearly with it.
    """

    def __init__(self, domain=(0.0, 1.0), range=DEFAULTS.SIZE_RANGE_PX):
        super().__init__(domain, range)

    @staticmethod
    def _sqrt(value):
        return np.sign(value) * np.sqrt(np.abs(value))

    def __call__(self, value):
        d0, d1 = self._domain
        t = _normalize(self._sqrt(value), self._sqrt(d0), self._sqrt(d1))
        r0, r1 = self._range
        result = r0 + t * (r1 - r0)
        # Keep plain floats for scalar input.
        return float(result) if np.ndim(result) == 0 else result


class LabColorScale:
    """
    Maps a numeric domain onto a two-color ramp. The colors are interpolated
    in CIELAB rather than RGB, so mid-range values are not muddier than the
    endpoints. Outputs are (R, G, B) integer tuples.
    """

    def __init__(self, domain=DEFAULTS.COLOR_DOMAIN, colors=DEFAULTS.COLOR_RANGE):
        self._domain = (float(domain[0]), float(domain[1]))
        self.set_range(colors)

    def __call__(self, value) -> Tuple[int, int, int]:
        if value is None or math.isnan(float(value)):
            # Undefined input has no position on the ramp.
            return (0, 0, 0)

        t = _normalize(float(value), *self._domain)
        lab = self._lab_start + t * (self._lab_end - self._lab_start)

        # Extrapolated values can leave the sRGB gamut; lab2rgb clips them.
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            rgb = lab2rgb(lab.reshape(1, 1, 3)).reshape(3)

        rgb = np.clip(np.round(rgb * 255.0), 0, 255).astype(int)
        return tuple(int(c) for c in rgb)

    def domain(self) -> Tuple[float, float]:
        return self._domain

    def set_domain(self, domain) -> "LabColorScale":
        self._domain = (float(domain[0]), float(domain[1]))
        return self

    def range(self) -> Tuple[str, str]:
        return self._colors

    def set_range(self, colors) -> "LabColorScale":
        self._colors = (colors[0], colors[1])
        endpoints = np.array([[hex_to_rgb(c) for c in self._colors]], dtype=float) / 255.0
        lab = rgb2lab(endpoints).reshape(2, 3)
        self._lab_start = lab[0]
        self._lab_end = lab[1]
        return self
