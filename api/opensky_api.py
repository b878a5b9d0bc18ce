"""
OpenSky Network client for the live flight states feed.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import requests

import config

logger = logging.getLogger(__name__)


@dataclass
class StatesResponse:
    """Raw upstream answer: numeric status plus the untouched body text"""
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def status_label(self) -> str:
        # 0 means the request never got an HTTP answer
        return f"{self.status_code:03d}"


class OpenSkyAPI:
    def __init__(self, url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.url = url or config.OPENSKY_STATES_URL
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': config.USER_AGENT})
        self.timeout = config.FETCH_STRATEGY['timeout']

    def fetch_states(self) -> StatesResponse:
        """Single GET against states/all, no retries"""
        logger.info(f"📡 Fetching flight states from {self.url}")
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {self.url}: {e}")
            return StatesResponse(status_code=0, body=str(e))

        return StatesResponse(status_code=response.status_code, body=response.text)
