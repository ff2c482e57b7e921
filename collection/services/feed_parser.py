import json
import logging
from typing import Any, List, Optional

from collection.domain.entities.feed import FeedMedia, ImageMedia, MediaDescriptor, VideoMedia
from shared.exceptions import MalformedFeed

logger = logging.getLogger(__name__)

VIDEO_TYPE = "video"


class FeedParser:
    """
    Normalizes a recent-media feed response into ``FeedMedia``.

    Expected shape::

        {"data": [
            {"id": "1", "type": "image", "images": {"standard_resolution": {"url": "..."}}},
            {"id": "2", "type": "video", "videos": {...}},
            {"id": "3", "type": "carousel", "carousel_media": [{...}, {...}]},
        ]}

    An empty body or a JSON ``null`` is an empty feed. A payload that decodes
    but has no ``data`` list raises ``MalformedFeed``. Single entries without a
    usable image URL are skipped; they do not abort the parse.
    """

    def parse(self, body: bytes | str | None) -> FeedMedia:
        payload = self._decode(body)
        if payload is None:
            return {}

        if not isinstance(payload, dict) or "data" not in payload:
            raise MalformedFeed('There is no field "data"')
        items = payload["data"]
        if not isinstance(items, list):
            raise MalformedFeed('Field "data" is not a list')

        media: FeedMedia = {}
        for item in items:
            if not isinstance(item, dict) or item.get("id") is None:
                logger.warning("Skipping feed item without id")
                continue
            item_id = str(item["id"])

            carousel = item.get("carousel_media")
            if carousel is not None:
                entries = self._classify_carousel(item_id, carousel)
                if entries:
                    media[item_id] = entries
                continue

            descriptor = self._classify(item)
            if descriptor is None:
                logger.warning("Skipping feed item %s: no standard resolution image", item_id)
                continue
            media[item_id] = descriptor
        return media

    # ---------- Internal helpers ----------

    @staticmethod
    def _decode(body: bytes | str | None) -> Any:
        if body is None:
            return None
        try:
            if isinstance(body, bytes):
                body = body.decode("utf-8")
            if not body.strip():
                return None
            return json.loads(body)
        except ValueError as e:  # UnicodeDecodeError included
            raise MalformedFeed(f"Feed body is not JSON: {e}") from e

    def _classify_carousel(self, item_id: str, carousel: Any) -> List[MediaDescriptor]:
        if not isinstance(carousel, list):
            logger.warning("Skipping feed item %s: carousel_media is not a list", item_id)
            return []
        entries: List[MediaDescriptor] = []
        for index, entry in enumerate(carousel):
            descriptor = self._classify(entry) if isinstance(entry, dict) else None
            if descriptor is None:
                logger.warning("Skipping carousel entry %s[%d]: no standard resolution image", item_id, index)
                continue
            entries.append(descriptor)
        return entries

    @staticmethod
    def _classify(entry: dict) -> Optional[MediaDescriptor]:
        if entry.get("type") == VIDEO_TYPE:
            return VideoMedia()
        # some items carry video data without the type tag
        if entry.get("images") is None and entry.get("videos") is not None:
            return VideoMedia()

        images = entry.get("images")
        standard = images.get("standard_resolution") if isinstance(images, dict) else None
        url = standard.get("url") if isinstance(standard, dict) else None
        if not isinstance(url, str) or not url:
            return None
        return ImageMedia(url=url)
