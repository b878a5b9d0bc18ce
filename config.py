import os
from dotenv import load_dotenv
from typing import Dict

load_dotenv()

# ==================== API CONFIGURATION ====================
API_KEY = os.getenv('AERODATABOX_API_KEY')
API_HOST = os.getenv('AERODATABOX_API_HOST', 'aerodatabox.p.rapidapi.com')

HEADERS = {
    'X-RapidAPI-Key': API_KEY,
    'X-RapidAPI-Host': API_HOST
}

BASE_URL = f"https://{API_HOST}"

OPENSKY_STATES_URL = os.getenv('OPENSKY_STATES_URL', 'https://opensky-network.org/api/states/all')
WIKIPEDIA_SUMMARY_URL = os.getenv(
    'WIKIPEDIA_SUMMARY_URL', 'https://en.wikipedia.org/api/rest_v1/page/summary/{title}'
)
USER_AGENT = os.getenv('SKYMAP_USER_AGENT', 'skymap-pages/0.1 (static map generator)')

# ==================== ENDPOINT DEFINITIONS ====================
ENDPOINTS = {
    'AIRPORT_INFO': '/airports/iata/{code}',  # 🌎 Get Airport
}

# ==================== FETCH SETTINGS ====================
FETCH_STRATEGY = {
    'timeout': int(os.getenv('FETCH_TIMEOUT', '30')),
    'max_retries': 3,            # metadata lookups only, OpenSky is fetched once
    'rate_limit_delay': 0.5,     # Seconds between metadata requests
    'error_body_lines': 200,     # Lines of upstream body kept on the error page
}

# ==================== OUTPUT ====================
OUTPUT_FILE = os.getenv('OUTPUT_FILE', 'index.html')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# ==================== FARE SETTINGS ====================
FARE_MONTHS = 12

# Inclusive price bounds per command
FARE_RANGES = {
    'demo': (150, 600),
    'full': (200, 500),
}

# Minimal airports list for the demo page
DEMO_AIRPORTS = [
    {
        'code': 'SEA', 'name': 'Seattle-Tacoma Intl', 'state': 'WA',
        'lat': 47.4502, 'lon': -122.3088,
        'image': 'https://upload.wikimedia.org/wikipedia/commons/9/95/Seattle-Tacoma_International_Airport_from_the_air.jpg',
    },
    {
        'code': 'ANC', 'name': 'Ted Stevens Anchorage Intl', 'state': 'AK',
        'lat': 61.1743, 'lon': -149.9982,
        'image': 'https://upload.wikimedia.org/wikipedia/commons/8/8a/Ted_Stevens_Anchorage_International_Airport.jpg',
    },
]

# Alaska Airlines network used by the full fares page
ALASKA_AIRPORT_CODES = [
    'SEA', 'ANC', 'FAI', 'JNU', 'KTN', 'SIT', 'ADQ', 'BET',  # Alaska
    'PDX', 'GEG', 'BOI', 'PAE',                              # Pacific Northwest
    'SFO', 'LAX', 'SAN', 'SJC', 'SMF',                       # California
    'LAS', 'PHX', 'SLC',                                     # Mountain West
    'HNL', 'OGG', 'KOA', 'LIH',                              # Hawaii
    'ORD', 'BOS', 'JFK', 'DCA',                              # East / Midwest
]


def get_endpoint_url(endpoint_name: str, **kwargs) -> str:
    """Build complete endpoint URL with parameters"""
    if endpoint_name not in ENDPOINTS:
        raise ValueError(f"Unknown endpoint: {endpoint_name}")

    endpoint = ENDPOINTS[endpoint_name]

    # Replace path parameters
    for key, value in kwargs.items():
        if f'{{{key}}}' in endpoint:
            endpoint = endpoint.replace(f'{{{key}}}', str(value))

    return BASE_URL + endpoint


def get_headers() -> Dict:
    """Get headers with optional additional headers"""
    return HEADERS.copy()
