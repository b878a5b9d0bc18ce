import logging
from typing import Optional
from urllib.parse import quote

import requests

import config

logger = logging.getLogger(__name__)


class WikipediaAPI:
    """Looks up a lead image for an article through the REST summary endpoint"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        # Wikimedia rejects requests without a descriptive agent
        self.session.headers.update({'User-Agent': config.USER_AGENT})
        self.timeout = config.FETCH_STRATEGY['timeout']

    def get_summary(self, title: str) -> Optional[dict]:
        url = config.WIKIPEDIA_SUMMARY_URL.format(title=quote(title.replace(' ', '_'), safe=''))
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            logger.warning(f"No summary for {title!r}: {e}")
        except ValueError as e:
            logger.error(f"JSON decode error for {title!r}: {e}")
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {title!r}: {e}")
        return None

    def get_image_url(self, title: str) -> Optional[str]:
        """Original image if present, otherwise the thumbnail"""
        if not title:
            return None
        summary = self.get_summary(title)
        if not summary:
            return None
        for key in ('originalimage', 'thumbnail'):
            image = summary.get(key) or {}
            if image.get('source'):
                return image['source']
        return None
