import asyncio
import logging
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from app.core.logging import send_log
from collection.domain.entities.collection import CollectionCreate
from collection.domain.entities.feed import FeedMedia
from collection.domain.models.collection import Collection
from collection.ports.outbound.feed_source_port import FeedSourcePort
from collection.ports.outbound.image_fetcher_port import ImageFetcherPort
from collection.services.access_validator import AccessValidator
from collection.services.feed_parser import FeedParser
from shared.abstracts.abstract_repository import AbstractRepository
from shared.exceptions import FeedError, ValidationFailed

logger = logging.getLogger(__name__)

TOKEN_FIELD = "token"
ERRORS_CHANNEL = "errors"


class CollectionService:
    """
    Creates collections from an external media feed.

    Access and payload problems abort the request before any side effect.
    Feed problems happen after that point and only degrade the import to an
    empty media set.
    """

    def __init__(
        self,
        validator: AccessValidator,
        repo: AbstractRepository,                 # CollectionRepository
        feed_source: FeedSourcePort,
        image_fetcher: ImageFetcherPort,
        parser: Optional[FeedParser] = None,
    ):
        self.validator = validator
        self.repo = repo
        self.feed_source = feed_source
        self.image_fetcher = image_fetcher
        self.parser = parser or FeedParser()

    # ---------- Mutations ----------

    async def create(self, body: Any, organization_id: str, project_id: str, user) -> Collection:
        scope = await self.validator.validate(user, organization_id, project_id)

        payload, token = _split_payload(body)
        media = await self._import_feed(token, user)

        obj = await self.repo.insert(
            payload,
            organization=scope.organization,
            project=scope.project,
            created_by=user,
        )

        try:
            self.image_fetcher.fetch_images(obj, media)
        except Exception:
            logger.exception("Could not schedule image import for collection %s", obj.id)
        return obj

    # ---------- Queries ----------

    async def get(self, organization_id: str, project_id: str, collection_id: str, user) -> Collection:
        scope = await self.validator.validate(user, organization_id, project_id, collection_id)
        return scope.collection

    # ---------- Internal helpers ----------

    async def _import_feed(self, token: str, user) -> FeedMedia:
        try:
            body = await asyncio.to_thread(self.feed_source.fetch_recent_media, token)
            return self.parser.parse(body)
        except FeedError as e:
            send_log(ERRORS_CHANNEL, user.id, str(e))
        except Exception as e:
            # str(e) may carry the request URL, and with it the token
            send_log(ERRORS_CHANNEL, user.id, f"unexpected feed failure: {type(e).__name__}")
        return {}


def _split_payload(body: Any) -> Tuple[CollectionCreate, str]:
    """
    Pop the feed token and validate the remaining collection fields.

    The token is removed before validation so it can never end up in the
    entity or be echoed back inside an error.
    """
    if not isinstance(body, dict):
        raise ValidationFailed(
            [{"loc": ["body"], "msg": "Input should be a valid dictionary", "type": "dict_type"}]
        )

    fields = dict(body)
    token = fields.pop(TOKEN_FIELD, None)

    errors: list[dict] = []
    payload = None
    try:
        payload = CollectionCreate.model_validate(fields)
    except ValidationError as e:
        errors.extend(
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors(include_url=False, include_input=False)
        )

    if token is not None and not isinstance(token, str):
        errors.append({"loc": [TOKEN_FIELD], "msg": "Input should be a valid string", "type": "string_type"})
    elif token is None or not token.strip():
        errors.append({"loc": [TOKEN_FIELD], "msg": "Field required", "type": "missing"})

    if errors:
        raise ValidationFailed(errors)
    return payload, token
