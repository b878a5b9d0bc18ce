# pipeline/fares.py
"""
Synthetic monthly fares for the fare map pages.

Prices are placeholders drawn uniformly from an inclusive range on every run;
nothing here relates to real pricing and nothing is persisted.
"""
import logging
import random
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

import config
from pipeline.etl import AIRPORT_FIELDS

logger = logging.getLogger(__name__)


def month_labels(start: Optional[date] = None, count: int = config.FARE_MONTHS) -> List[str]:
    """Sequential MM/YYYY labels beginning with the month of `start` (today by default)."""
    start = start or date.today()
    periods = pd.period_range(start=pd.Timestamp(start).to_period("M"), periods=count, freq="M")
    return [p.strftime("%m/%Y") for p in periods]


def generate_fares(low: int, high: int, start: Optional[date] = None,
                   rng: Optional[random.Random] = None) -> List[Dict]:
    if low > high:
        raise ValueError(f"Invalid fare range: {low}-{high}")
    rng = rng or random.Random()
    return [{"month": label, "fare": rng.randint(low, high)} for label in month_labels(start)]


def build_fare_airports(airports: List[Dict], price_range: Tuple[int, int],
                        start: Optional[date] = None,
                        rng: Optional[random.Random] = None) -> List[Dict]:
    """Copy each airport record and attach its own twelve months of fares."""
    low, high = price_range
    rng = rng or random.Random()
    result = []
    for ap in airports:
        entry = {field: ap.get(field) for field in AIRPORT_FIELDS}
        entry["fares"] = generate_fares(low, high, start=start, rng=rng)
        result.append(entry)
    logger.info(f"💸 Generated fares for {len(result)} airports ({low}-{high})")
    return result


def load_airports_file(path) -> List[Dict]:
    """
    Load a user supplied airport list (CSV or JSON records).

    Required columns: code, name, state, lat, lon, image. Rows without
    coordinates are dropped since they can't be placed on the map.
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        df = pd.read_json(path, orient="records")
    else:
        df = pd.read_csv(path)

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in AIRPORT_FIELDS if c not in df.columns]
    if missing:
        raise ValueError(f"{path} is missing required columns: {', '.join(missing)}")

    df = df[AIRPORT_FIELDS].copy()
    df["lat"] = pd.to_numeric(df["lat"], errors="coerce")
    df["lon"] = pd.to_numeric(df["lon"], errors="coerce")
    dropped = df[df["lat"].isna() | df["lon"].isna()]
    if not dropped.empty:
        logger.warning(f"Dropping {len(dropped)} airports without coordinates: {list(dropped['code'])}")
    df = df.dropna(subset=["lat", "lon"])

    for col in ("name", "state", "image"):
        df[col] = df[col].fillna("").astype(str)
    df["code"] = df["code"].astype(str).str.strip().str.upper()

    return df.to_dict(orient="records")
