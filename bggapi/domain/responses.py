"""Response models for the BoardGameGeek XML API 2 resources.

Every model can be constructed without arguments; the transport fills in
whatever the XML body carries and leaves the rest at their defaults.
"""

from pydantic import BaseModel, ConfigDict, Field


class BggResponse(BaseModel):
    """Base class for response models."""

    model_config = ConfigDict(extra="ignore")


class Link(BggResponse):
    """Reference from an item to a related entity (category, designer, ...)."""

    type: str = ""
    id: int = 0
    value: str = ""
    inbound: bool = False


# Collection


class CollectionStatus(BggResponse):
    """Ownership flags of a collection entry."""

    own: bool = False
    prevowned: bool = False
    fortrade: bool = False
    want: bool = False
    wanttoplay: bool = False
    wanttobuy: bool = False
    wishlist: bool = False
    wishlistpriority: int | None = None
    preordered: bool = False
    lastmodified: str | None = None


class CollectionItem(BggResponse):
    """One entry of a user's collection."""

    objecttype: str = ""
    objectid: int = 0
    subtype: str = ""
    collid: int = 0
    name: str = ""
    yearpublished: int | None = None
    image: str | None = None
    thumbnail: str | None = None
    status: CollectionStatus = Field(default_factory=CollectionStatus)
    numplays: int = 0
    comment: str | None = None


class Collection(BggResponse):
    """A user's collection."""

    totalitems: int = 0
    pubdate: str | None = None
    items: list[CollectionItem] = Field(default_factory=list)


# Thing


class ThingComment(BggResponse):
    """A user comment as embedded in a thing payload."""

    username: str = ""
    rating: str = ""
    value: str = ""


class Comments(BggResponse):
    """Comment container of a thing, one page of comments."""

    page: int = 1
    totalitems: int = 0
    comments: list[ThingComment] = Field(default_factory=list)


class ThingItem(BggResponse):
    """A board game, expansion, accessory or video game."""

    id: int = 0
    type: str = ""
    name: str = ""
    alternate_names: list[str] = Field(default_factory=list)
    description: str = ""
    thumbnail: str | None = None
    image: str | None = None
    yearpublished: int | None = None
    minplayers: int | None = None
    maxplayers: int | None = None
    playingtime: int | None = None
    minplaytime: int | None = None
    maxplaytime: int | None = None
    minage: int | None = None
    links: list[Link] = Field(default_factory=list)
    comments: Comments | None = None


class ThingReturn(BggResponse):
    """Payload of the ``thing`` resource."""

    items: list[ThingItem] = Field(default_factory=list)


class Comment(BggResponse):
    """Simplified comment returned by ``BggClient.get_comments``."""

    rating: str = ""
    username: str = ""
    text: str = ""


# User


class Buddy(BggResponse):
    """A buddy or guild reference on a user profile."""

    id: int = 0
    name: str = ""


class UserReturn(BggResponse):
    """Payload of the ``user`` resource."""

    id: int = 0
    name: str = ""
    firstname: str = ""
    lastname: str = ""
    avatarlink: str = ""
    yearregistered: int | None = None
    lastlogin: str = ""
    stateorprovince: str = ""
    country: str = ""
    webaddress: str = ""
    buddies: list[Buddy] = Field(default_factory=list)
    guilds: list[Buddy] = Field(default_factory=list)


# Family


class FamilyItem(BggResponse):
    """A family grouping related things."""

    id: int = 0
    type: str = ""
    name: str = ""
    description: str = ""
    thumbnail: str | None = None
    image: str | None = None
    links: list[Link] = Field(default_factory=list)


class FamilyReturn(BggResponse):
    """Payload of the ``family`` resource."""

    items: list[FamilyItem] = Field(default_factory=list)


# Forum list


class Forum(BggResponse):
    """One forum attached to a thing or family."""

    id: int = 0
    groupid: int = 0
    title: str = ""
    noposting: bool = False
    description: str = ""
    numthreads: int = 0
    numposts: int = 0
    lastpostdate: str | None = None


class ForumListReturn(BggResponse):
    """Payload of the ``forumlist`` resource."""

    id: int = 0
    type: str = ""
    forums: list[Forum] = Field(default_factory=list)
