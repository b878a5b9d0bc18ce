# pipeline/etl.py
import json
import logging
import math
from typing import Any, Dict, List, Optional
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)

# OpenSky state vector positions:
# 0: icao24, 1: callsign, 2: origin_country, 3: time_position, 4: last_contact,
# 5: longitude, 6: latitude, 7: baro_altitude, 8: on_ground, 9: velocity, 10: heading, 11: vertical_rate
STATE_FIELDS = [
    "icao24", "callsign", "origin_country", "time_position", "last_contact",
    "longitude", "latitude", "baro_altitude", "on_ground", "velocity",
    "heading", "vertical_rate",
]

AIRPORT_FIELDS = ["code", "name", "state", "lat", "lon", "image"]


def _safe_get_float(obj: dict, *path, default=None):
    """Traverse nested dict keys and try to coerce to float or return default."""
    cur = obj
    for p in path:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(p)
    if cur is None or isinstance(cur, bool):
        return default
    try:
        return float(cur)
    except (TypeError, ValueError):
        return default


def _safe_get_str(obj: dict, *path, default=None):
    cur = obj
    for p in path:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(p)
    if cur is None:
        return default
    return str(cur)


def _first_present(*values):
    # 0.0 is a valid coordinate
    for value in values:
        if value is not None:
            return value
    return None


def _finite_or_none(value):
    # NaN and Infinity decode fine in Python but are not JSON, treat them as missing
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def project_state(record: list) -> Dict[str, Any]:
    """Turn one positional state vector into a named record; short vectors yield None slots."""
    flight = {field: (_finite_or_none(record[i]) if i < len(record) else None)
              for i, field in enumerate(STATE_FIELDS)}
    callsign = flight["callsign"]
    flight["callsign"] = "" if callsign is None else str(callsign).strip()
    return flight


def project_states(payload: Any) -> List[Dict[str, Any]]:
    """
    Map the OpenSky response object into a compact list of flights.
    Missing or null `states` gives an empty list rather than an error.
    """
    if not isinstance(payload, dict):
        return []
    states = payload.get("states")
    if not isinstance(states, list):
        return []

    flights = []
    for record in states:
        if not isinstance(record, list):
            logger.debug(f"Skipping non-positional state record: {record!r}")
            continue
        flights.append(project_state(record))
    return flights


def parse_states_body(body: str) -> List[Dict[str, Any]]:
    """Decode the raw states body; an unparseable body projects to no flights."""
    try:
        payload = json.loads(body)
    except ValueError as e:
        logger.warning(f"Could not decode OpenSky payload, using empty flight list: {e}")
        return []
    return project_states(payload)


def wikipedia_title(ap: Dict[str, Any]) -> Optional[str]:
    """Article title from the airport's wikipedia link, falling back to its full name."""
    link = _safe_get_str(ap, "urls", "wikipedia") or _safe_get_str(ap, "urls", "wikipediaUrl")
    if link:
        path = urlparse(link).path
        if "/wiki/" in path:
            return unquote(path.split("/wiki/", 1)[1]).replace("_", " ")
    return _safe_get_str(ap, "fullName") or _safe_get_str(ap, "name")


def normalize_airport(code: str, ap: Dict[str, Any], image: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Accepts multiple possible airport JSON shapes and extracts best-effort fields.
    Returns None when no coordinates can be found, since the airport can't be placed on the map.
    """
    lat = _first_present(_safe_get_float(ap, "location", "lat"),
                         _safe_get_float(ap, "position", "latitude"),
                         _safe_get_float(ap, "lat"))
    lon = _first_present(_safe_get_float(ap, "location", "lon"),
                         _safe_get_float(ap, "position", "longitude"),
                         _safe_get_float(ap, "lon"))
    if lat is None or lon is None:
        logger.warning(f"No coordinates for {code}, skipping")
        return None

    name = _safe_get_str(ap, "fullName") or _safe_get_str(ap, "shortName") \
        or _safe_get_str(ap, "name") or code
    state = _safe_get_str(ap, "municipalityName") or _safe_get_str(ap, "city") \
        or _safe_get_str(ap, "country", "code") or ""

    return {
        "code": (_safe_get_str(ap, "iata") or code).upper(),
        "name": name,
        "state": state,
        "lat": lat,
        "lon": lon,
        "image": image or "",
    }
