"""Feed source and feed record models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Provider(str, Enum):
    """Supported video hosting providers."""

    YOUTUBE = "youtube"
    VIMEO = "vimeo"


class LinkType(str, Enum):
    """Kind of entity a provider link points at."""

    CHANNEL = "channel"
    PLAYLIST = "playlist"
    USER = "user"
    GROUP = "group"


# Link types each provider can produce
PROVIDER_LINK_TYPES = {
    Provider.YOUTUBE: {LinkType.CHANNEL, LinkType.PLAYLIST, LinkType.USER},
    Provider.VIMEO: {LinkType.CHANNEL, LinkType.USER, LinkType.GROUP},
}


class ResolvedSource(BaseModel):
    """A provider link reduced to provider, link type and item id."""

    model_config = ConfigDict(frozen=True)

    provider: Provider
    link_type: LinkType
    item_id: str = Field(min_length=1)

    @model_validator(mode="after")
    def _check_link_type(self) -> "ResolvedSource":
        if self.link_type not in PROVIDER_LINK_TYPES[self.provider]:
            raise ValueError(
                f"{self.link_type.value} links are not supported for {self.provider.value}"
            )
        return self

    def __str__(self) -> str:
        return f"{self.provider.value}/{self.link_type.value}/{self.item_id}"


class FeedRecord(BaseModel):
    """Stored metadata of a registered feed."""

    id: str
    title: str = ""
    description: str = ""
    url: Optional[str] = None
    source: Optional[ResolvedSource] = None
