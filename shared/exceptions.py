from typing import Any, List


class ServiceError(Exception):
    """Base for errors raised by the service layer."""


class AccessDenied(ServiceError):
    """Caller may not act on the requested organization. Never carries detail."""


class ResourceNotFound(ServiceError):
    """
    Any id that cannot be resolved: malformed, missing, or attached to
    another organization/project. These cases are not told apart.
    """


class ValidationFailed(ServiceError):
    def __init__(self, errors: List[dict[str, Any]]):
        super().__init__("validation_failed")
        self.errors = errors


class FeedError(ServiceError):
    """External feed could not be turned into media. Always recovered locally."""


class MalformedFeed(FeedError):
    pass


class FeedUnavailable(FeedError):
    pass
