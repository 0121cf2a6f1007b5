# symbol_map/io.py

"""
================================================================================
INPUT LOADERS
================================================================================
Readers that turn files on disk into the already-validated inputs the chart
expects: region-name rows for the lookup, earthquake records for the symbols
and a parsed topology for the landmass.

Data Contract:
---------------
- read_region_names(path): tab-separated file with id, name, code columns ->
  list of {"id": int, "name": str, "code": str}.
- read_quakes(path): comma-separated earthquake feed (latitude, longitude,
  depth, mag, place, time, ...) -> list of record dicts with float
  coordinates. Rows without coordinates are dropped.
- read_topology(path): JSON file -> dict.
- Side Effects: Reads files; logs counts.
- Errors: FileNotFoundError, json.JSONDecodeError and pandas parser errors
  propagate to the caller, which reports them.
================================================================================
"""
import json
import logging
from typing import Dict, List, Mapping

import pandas as pd

logger = logging.getLogger(__name__)

QUAKE_NUMERIC_COLUMNS = ("latitude", "longitude", "depth", "mag")


def parse_region_name(row: Mapping) -> Dict:
    """Normalizes one region-name row: integer id, trimmed name, trimmed uppercase code."""
    return {
        "id": int(row["id"]),
        "name": str(row["name"]).strip(),
        "code": str(row["code"]).strip().upper(),
    }


def read_region_names(path: str) -> List[Dict]:
    """Reads the region-name table (TSV) into normalized rows."""
    frame = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)
    missing = {"id", "name", "code"} - set(frame.columns)
    if missing:
        raise ValueError(f"Region name table '{path}' is missing columns: {sorted(missing)}")
    rows = [parse_region_name(row) for row in frame.to_dict("records")]
    logger.info(f"Loaded {len(rows)} region names from '{path}'.")
    return rows


def read_quakes(path: str) -> List[Dict]:
    """Reads an earthquake CSV into records for the symbol layer."""
    frame = pd.read_csv(path)
    for column in QUAKE_NUMERIC_COLUMNS:
        if column in frame.columns:
            frame[column] = pd.to_numeric(frame[column], errors="coerce")

    before = len(frame)
    frame = frame.dropna(subset=["latitude", "longitude"])
    if len(frame) < before:
        logger.warning(f"Dropped {before - len(frame)} rows without coordinates from '{path}'.")

    # Missing values become None rather than NaN so records stay plain Python.
    frame = frame.astype(object).where(frame.notna(), None)
    records = frame.to_dict("records")
    logger.info(f"Loaded {len(records)} earthquake records from '{path}'.")
    return records


def read_topology(path: str) -> Dict:
    """Reads a TopoJSON (or GeoJSON) document."""
    with open(path, 'r') as f:
        data = json.load(f)
    logger.info(f"Loaded {data.get('type', 'unknown')} geometry from '{path}'.")
    return data
