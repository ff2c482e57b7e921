import logging
import mimetypes
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from app.core.config import settings

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class ImageDownloader:
    """
    Stores remote images under ``<media_root>/collections/<collection_id>/``.

    Client errors (4xx) mean the image is gone for good and are skipped;
    anything else raises ``requests.RequestException`` so the caller can retry.
    """

    def __init__(self, media_root: Optional[str] = None, timeout: Optional[float] = None):
        self.media_root = Path(media_root or settings.media_root)
        self.timeout = timeout if timeout is not None else settings.image_download_timeout_seconds

    def download(self, url: str, collection_id: str, name: str) -> Optional[str]:
        with requests.get(url, timeout=self.timeout, stream=True) as r:
            if 400 <= r.status_code < 500:
                logger.warning("Skipping image %s: HTTP %s", name, r.status_code)
                return None
            r.raise_for_status()

            target_dir = self.media_root / "collections" / collection_id
            target_dir.mkdir(parents=True, exist_ok=True)
            target = target_dir / f"{name}{_extension(url, r.headers.get('content-type'))}"
            with target.open("wb") as fh:
                for chunk in r.iter_content(chunk_size=_CHUNK_SIZE):
                    fh.write(chunk)
        return str(target.relative_to(self.media_root))


def _extension(url: str, content_type: Optional[str]) -> str:
    suffix = Path(urlparse(url).path).suffix.lower()
    if suffix in {".jpg", ".jpeg", ".png", ".gif", ".webp"}:
        return suffix
    if content_type:
        guessed = mimetypes.guess_extension(content_type.split(";")[0].strip())
        if guessed:
            return guessed
    return ".jpg"
