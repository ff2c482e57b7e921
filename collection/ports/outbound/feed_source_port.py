from typing import Protocol


class FeedSourcePort(Protocol):
    """Read-only access to an account's recent media feed."""

    def fetch_recent_media(self, token: str) -> bytes:
        """Return the raw response body. Raises ``FeedUnavailable`` on transport/HTTP failure."""
        ...
