# pipeline/render.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

import config

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

# Characters that could close a <script> element or open an HTML comment/entity
_JSON_SCRIPT_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
}

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


def embed_json(data: Any) -> str:
    """
    Compact JSON that is safe to drop inside a <script> element.

    The escapes are valid both in JSON strings and in JS literals, so the same
    text works for `type="application/json"` blocks and inline assignments.
    """
    text = json.dumps(data, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    return text.translate(_JSON_SCRIPT_ESCAPES)


def render_flights_page(flights: List[Dict]) -> str:
    template = _env.get_template("flights.html")
    return template.render(flights_json=embed_json(flights))


def render_error_page(status_label: str, body: str) -> str:
    """Error page embedding the head of the upstream response (escaped by autoescape)."""
    lines = body.split("\n")[:config.FETCH_STRATEGY['error_body_lines']]
    template = _env.get_template("error.html")
    return template.render(status=status_label, body="\n".join(lines))


def render_fares_page(airports: List[Dict]) -> str:
    template = _env.get_template("fares.html")
    return template.render(airports_json=embed_json(airports))


def write_page(path, html: str) -> Path:
    """Overwrite `path` with the rendered page."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    logger.debug(f"Wrote {len(html)} characters to {path}")
    return path
