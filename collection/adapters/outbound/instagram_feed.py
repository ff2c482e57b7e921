import logging
from typing import Optional

import requests

from app.core.config import settings
from collection.ports.outbound.feed_source_port import FeedSourcePort
from shared.exceptions import FeedUnavailable

logger = logging.getLogger(__name__)


class InstagramFeedProvider(FeedSourcePort):
    """
    Fetches ``users/self/media/recent`` with the caller-supplied access token.

    The token travels as the ``access_token`` query parameter, which is how the
    API expects it. It is never logged.
    """

    def __init__(self, endpoint: Optional[str] = None, timeout: Optional[float] = None):
        self.endpoint = endpoint or settings.feed_endpoint
        self.timeout = timeout if timeout is not None else settings.feed_timeout_seconds

    def fetch_recent_media(self, token: str) -> bytes:
        try:
            r = requests.get(self.endpoint, params={"access_token": token}, timeout=self.timeout)
        except requests.RequestException as e:
            raise FeedUnavailable(f"feed request failed: {type(e).__name__}") from e
        if r.status_code != 200:
            raise FeedUnavailable(f"feed responded with HTTP {r.status_code}")
        logger.debug("Fetched %d bytes of feed data", len(r.content))
        return r.content
