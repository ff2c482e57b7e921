from typing import Annotated, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ImageMedia(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    url: str


class VideoMedia(BaseModel):
    """The feed exposes no playable URL for videos; this is a marker only."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["video"] = "video"


MediaDescriptor = Annotated[Union[ImageMedia, VideoMedia], Field(discriminator="kind")]

# external item id -> one descriptor, or an ordered list for carousel items
FeedMedia = Dict[str, Union[MediaDescriptor, List[MediaDescriptor]]]

feed_media_adapter: TypeAdapter[FeedMedia] = TypeAdapter(FeedMedia)


def iter_descriptors(media: FeedMedia):
    """
    Yield ``(external_id, position, descriptor)`` in mapping order.

    ``position`` is the index in the stored carousel list, which holds only the
    entries the parser kept.
    """
    for external_id, value in media.items():
        if isinstance(value, list):
            for position, descriptor in enumerate(value):
                yield external_id, position, descriptor
        else:
            yield external_id, 0, value
