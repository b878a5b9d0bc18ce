"""
AeroDataBox client used to look up airport metadata for the full fares page.
"""
import logging
import time
from typing import Dict, Optional

import requests

import config

logger = logging.getLogger(__name__)


class AeroDataBoxAPI:
    """Sequential client for the keyed AeroDataBox airport endpoints"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.session.headers.update(config.get_headers())
        self.timeout = config.FETCH_STRATEGY['timeout']
        self.max_retries = config.FETCH_STRATEGY['max_retries']
        self.rate_limit_delay = config.FETCH_STRATEGY['rate_limit_delay']
        self.stats = {
            'total_requests': 0,
            'successful': 0,
            'failed': 0,
        }

        if not config.API_KEY:
            logger.warning("AERODATABOX_API_KEY is not set, airport lookups will likely be rejected")

    def _make_request(self, endpoint_name: str, **kwargs) -> Optional[Dict]:
        """
        Make API request with retry logic

        Args:
            endpoint_name: Name from ENDPOINTS config
            **kwargs: Path parameters for the endpoint

        Returns:
            JSON response as dict or None if failed
        """
        url = config.get_endpoint_url(endpoint_name, **kwargs)

        for attempt in range(self.max_retries):
            # Small delay between requests to stay under the plan's rate limit
            time.sleep(self.rate_limit_delay)
            self.stats['total_requests'] += 1
            response = None
            try:
                logger.info(f"Requesting {endpoint_name} {kwargs} (attempt {attempt + 1})")
                response = self.session.get(url, timeout=self.timeout)
                response.raise_for_status()

                data = response.json()
                self.stats['successful'] += 1
                return data

            except requests.exceptions.HTTPError as e:
                if response.status_code == 429:  # Rate limited
                    sleep_time = 2 ** attempt  # Exponential backoff
                    logger.warning(f"Rate limited, sleeping {sleep_time}s")
                    time.sleep(sleep_time)
                    continue
                elif response.status_code == 404:
                    logger.warning(f"Not found: {endpoint_name} {kwargs}")
                    break
                elif response.status_code < 500:
                    logger.error(f"HTTP error for {endpoint_name}: {e}")
                    break
                logger.error(f"Server error for {endpoint_name}: {e}")

            except ValueError as e:
                logger.error(f"JSON decode error for {endpoint_name}: {e}")
                break

            except requests.exceptions.RequestException as e:
                logger.error(f"Request failed for {endpoint_name}: {e}")

        self.stats['failed'] += 1
        return None

    def get_airport_info(self, iata_code: str) -> Optional[Dict]:
        """🌎 Get airport information by IATA code"""
        return self._make_request('AIRPORT_INFO', code=iata_code.upper())

    def get_stats(self) -> Dict:
        """Get client statistics"""
        return self.stats.copy()
