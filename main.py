"""
SkyMap Pages - generate static Leaflet map pages from aviation data.

    skymap flights      live OpenSky states -> index.html
    skymap fares        demo airports with synthetic fares
    skymap fares-full   Alaska Airlines airports (AeroDataBox + Wikipedia) with synthetic fares
"""

import argparse
import importlib.util
import logging
import sys

logger = logging.getLogger(__name__)

REQUIRED_MODULES = ['requests', 'jinja2', 'dotenv']


def check_dependencies(modules=None):
    """Return the first required module that can't be imported, or None"""
    modules = modules or REQUIRED_MODULES
    for name in modules:
        if importlib.util.find_spec(name) is None:
            return name
    return None


def run_flights(out):
    from api.opensky_api import OpenSkyAPI
    from pipeline.etl import parse_states_body
    from pipeline.render import render_error_page, render_flights_page, write_page

    response = OpenSkyAPI().fetch_states()
    if not response.ok:
        # Soft failure: the page itself reports the problem
        logger.warning(
            f"OpenSky API returned HTTP {response.status_label}. Writing an error page to {out}."
        )
        write_page(out, render_error_page(response.status_label, response.body))
        return 0

    flights = parse_states_body(response.body)
    write_page(out, render_flights_page(flights))
    logger.info(f"Wrote {out} with {len(flights)} flights.")
    return 0


def _load_airports(airports_file, default):
    from pipeline.fares import load_airports_file

    if airports_file:
        return load_airports_file(airports_file)
    return list(default)


def run_fares(out, airports_file=None):
    import config
    from pipeline.fares import build_fare_airports
    from pipeline.render import render_fares_page, write_page

    airports = _load_airports(airports_file, config.DEMO_AIRPORTS)
    data = build_fare_airports(airports, config.FARE_RANGES['demo'])
    write_page(out, render_fares_page(data))
    logger.info(f"Wrote {out} with {len(data)} airports.")
    return 0


def collect_airport_metadata(codes, client=None, wiki=None):
    """Sequentially look up each code; airports whose lookup fails are skipped."""
    from api.aerodatabox_api import AeroDataBoxAPI
    from api.wikipedia_api import WikipediaAPI
    from pipeline.etl import normalize_airport, wikipedia_title

    client = client or AeroDataBoxAPI()
    wiki = wiki or WikipediaAPI()

    airports = []
    for code in codes:
        info = client.get_airport_info(code)
        if not info:
            logger.warning(f"⚠️ No metadata for {code}, skipping")
            continue
        image = wiki.get_image_url(wikipedia_title(info))
        record = normalize_airport(code, info, image)
        if record:
            airports.append(record)

    logger.info(f"🌎 Resolved {len(airports)}/{len(codes)} airports")
    return airports


def run_fares_full(out, codes=None, airports_file=None):
    import config
    from pipeline.fares import build_fare_airports
    from pipeline.render import render_fares_page, write_page

    if airports_file:
        airports = _load_airports(airports_file, [])
    else:
        airports = collect_airport_metadata(codes or config.ALASKA_AIRPORT_CODES)

    data = build_fare_airports(airports, config.FARE_RANGES['full'])
    write_page(out, render_fares_page(data))
    logger.info(f"Wrote {out} with {len(data)} airports.")
    return 0


def _parse_codes(value):
    return [c.strip().upper() for c in value.split(',') if c.strip()]


def build_parser(default_out='index.html'):
    ap = argparse.ArgumentParser(prog='skymap', description='Generate static Leaflet map pages')
    sub = ap.add_subparsers(dest='command', required=True)

    flights = sub.add_parser('flights', help='live flight states from OpenSky')
    flights.add_argument('--out', default=default_out)

    fares = sub.add_parser('fares', help='demo airports with synthetic fares')
    fares.add_argument('--out', default=default_out)
    fares.add_argument('--airports', help='CSV or JSON airport list to use instead of the demo set')

    full = sub.add_parser('fares-full', help='Alaska Airlines airports with synthetic fares')
    full.add_argument('--out', default=default_out)
    full.add_argument('--codes', type=_parse_codes, help='comma separated IATA codes')
    full.add_argument('--airports', help='CSV or JSON airport list, skips the metadata lookups')
    return ap


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    # Only the live flights command verifies its stack before doing anything
    if argv[:1] == ['flights']:
        missing = check_dependencies()
        if missing:
            print(f"ERROR: required module not found: {missing}", file=sys.stderr)
            return 1

    import config

    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    args = build_parser(config.OUTPUT_FILE).parse_args(argv)

    if args.command == 'flights':
        return run_flights(args.out)

    # Only the fares commands take a user supplied airport file
    try:
        if args.command == 'fares':
            return run_fares(args.out, args.airports)
        return run_fares_full(args.out, args.codes, args.airports)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"❌ {e}")
        return 2


if __name__ == '__main__':
    sys.exit(main())
