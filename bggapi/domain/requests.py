"""Request records for the BoardGameGeek XML API 2 resources.

Field names match the API's query parameter names (the serializer lower-cases
them). Every field defaults to "unset" so that the client's required-field
checks, not model construction, decide whether a request is usable.

Field type decides the wire encoding:
- ``bool``: sent as ``1`` when true, never sent when false
- ``bool | None``: sent as ``1`` or ``0``, never sent when unset
- ``datetime | None``: sent as ``YY-MM-DD HH:MM:SS``
- ``list[int] | None``: sent comma-separated
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BggRequest(BaseModel):
    """Base class for request records. Instances are immutable."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class CollectionRequest(BggRequest):
    """Query a user's collection (``/collection``)."""

    username: str | None = None
    version: bool = False
    subtype: str | None = None
    excludesubtype: str | None = None
    id: list[int] | None = None
    brief: bool = False
    stats: bool = False
    own: bool | None = None
    rated: bool | None = None
    played: bool | None = None
    comment: bool | None = None
    trade: bool | None = None
    want: bool | None = None
    wishlist: bool | None = None
    wishlistpriority: int | None = None
    preordered: bool | None = None
    wanttoplay: bool | None = None
    wanttobuy: bool | None = None
    prevowned: bool | None = None
    hasparts: bool | None = None
    wantparts: bool | None = None
    minrating: int | None = None
    rating: int | None = None
    minbggrating: int | None = None
    bggrating: int | None = None
    minplays: int | None = None
    maxplays: int | None = None
    showprivate: bool = False
    collid: int | None = None
    modifiedsince: datetime | None = None


class ThingRequest(BggRequest):
    """Query one or more things: games, expansions, accessories (``/thing``)."""

    id: list[int] | None = None
    type: str | None = None
    versions: bool = False
    videos: bool = False
    stats: bool = False
    historical: bool = False
    marketplace: bool = False
    comments: bool = False
    ratingcomments: bool = False
    page: int | None = None
    pagesize: int | None = None
    fromdate: datetime | None = None
    todate: datetime | None = None


class UserRequest(BggRequest):
    """Query a user profile (``/user``)."""

    name: str | None = None
    buddies: bool = False
    guilds: bool = False
    hot: bool = False
    top: bool = False
    domain: str | None = None
    page: int | None = None


class FamilyRequest(BggRequest):
    """Query a family of related things (``/family``)."""

    id: int | None = None
    type: str | None = None


class ForumListRequest(BggRequest):
    """List the forums attached to a thing or family (``/forumlist``)."""

    id: int = 0
    type: str = "thing"
