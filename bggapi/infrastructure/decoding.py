"""XML decoding of BoardGameGeek XML API 2 response bodies.

Each response model has one decoder that reads the element tree of its
resource. Decoders are lenient about missing optional elements (the model
default is kept) but strict about the document's root element, which is how
the API signals errors and queued requests.

All failures surface as ``ValueError`` (``xml.etree.ElementTree.ParseError``
is re-raised as one) so the transport can wrap them uniformly.
"""

import xml.etree.ElementTree as ET
from collections.abc import Callable
from typing import Any, Final

from bggapi.domain.responses import (
    BggResponse,
    Buddy,
    Collection,
    CollectionItem,
    CollectionStatus,
    Comments,
    FamilyItem,
    FamilyReturn,
    Forum,
    ForumListReturn,
    Link,
    ThingComment,
    ThingItem,
    ThingReturn,
    UserReturn,
)

ERROR_ROOT_TAGS: Final[frozenset[str]] = frozenset({"error", "errors", "message"})


class UnexpectedRootError(ValueError):
    """The document root is not the element the resource produces."""

    def __init__(self, expected: str, actual: str, detail: str | None) -> None:
        self.expected = expected
        self.actual = actual
        self.detail = detail
        message = f"Expected <{expected}> root element, got <{actual}>"
        if detail:
            message += f": {detail}"
        super().__init__(message)


def _int(value: str | None, default: int | None = 0) -> int | None:
    if value is None or value.strip() == "":
        return default
    return int(value)


def _bool(value: str | None) -> bool:
    return value is not None and value.strip() not in ("", "0", "false")


def _value_attr(element: ET.Element, tag: str) -> str | None:
    """Read ``<tag value="..."/>`` from a direct child."""
    child = element.find(tag)
    return None if child is None else child.get("value")


def _text(element: ET.Element, tag: str) -> str | None:
    child = element.find(tag)
    return None if child is None else (child.text or "").strip()


def _error_detail(root: ET.Element) -> str | None:
    """Extract the human-readable message of an API error document."""
    if root.get("message"):
        return root.get("message")
    if root.tag == "message":
        return (root.text or "").strip() or None
    message = root.find(".//message")
    if message is not None and message.text:
        return message.text.strip()
    return None


def _check_root(root: ET.Element, expected: str) -> None:
    if root.tag != expected:
        detail = _error_detail(root) if root.tag in ERROR_ROOT_TAGS else None
        raise UnexpectedRootError(expected, root.tag, detail)


def _links(element: ET.Element) -> list[Link]:
    return [
        Link(
            type=link.get("type", ""),
            id=_int(link.get("id")),
            value=link.get("value", ""),
            inbound=_bool(link.get("inbound")),
        )
        for link in element.findall("link")
    ]


def _primary_name(element: ET.Element) -> tuple[str, list[str]]:
    primary = ""
    alternates = []
    for name in element.findall("name"):
        if name.get("type", "primary") == "primary":
            primary = name.get("value", "")
        else:
            alternates.append(name.get("value", ""))
    return primary, alternates


def decode_collection(root: ET.Element) -> Collection:
    """Decode an ``<items>`` collection document."""
    _check_root(root, "items")
    items = []
    for item in root.findall("item"):
        status = item.find("status")
        items.append(
            CollectionItem(
                objecttype=item.get("objecttype", ""),
                objectid=_int(item.get("objectid")),
                subtype=item.get("subtype", ""),
                collid=_int(item.get("collid")),
                name=_text(item, "name") or "",
                yearpublished=_int(_text(item, "yearpublished"), None),
                image=_text(item, "image"),
                thumbnail=_text(item, "thumbnail"),
                status=CollectionStatus()
                if status is None
                else CollectionStatus(
                    own=_bool(status.get("own")),
                    prevowned=_bool(status.get("prevowned")),
                    fortrade=_bool(status.get("fortrade")),
                    want=_bool(status.get("want")),
                    wanttoplay=_bool(status.get("wanttoplay")),
                    wanttobuy=_bool(status.get("wanttobuy")),
                    wishlist=_bool(status.get("wishlist")),
                    wishlistpriority=_int(status.get("wishlistpriority"), None),
                    preordered=_bool(status.get("preordered")),
                    lastmodified=status.get("lastmodified"),
                ),
                numplays=_int(_text(item, "numplays")),
                comment=_text(item, "comment"),
            )
        )
    return Collection(
        totalitems=_int(root.get("totalitems"), len(items)),
        pubdate=root.get("pubdate"),
        items=items,
    )


def _comments(item: ET.Element) -> Comments | None:
    container = item.find("comments")
    if container is None:
        return None
    return Comments(
        page=_int(container.get("page"), 1),
        totalitems=_int(container.get("totalitems")),
        comments=[
            ThingComment(
                username=comment.get("username", ""),
                rating=comment.get("rating", ""),
                value=comment.get("value", ""),
            )
            for comment in container.findall("comment")
        ],
    )


def decode_thing(root: ET.Element) -> ThingReturn:
    """Decode an ``<items>`` thing document."""
    _check_root(root, "items")
    items = []
    for item in root.findall("item"):
        name, alternates = _primary_name(item)
        items.append(
            ThingItem(
                id=_int(item.get("id")),
                type=item.get("type", ""),
                name=name,
                alternate_names=alternates,
                description=_text(item, "description") or "",
                thumbnail=_text(item, "thumbnail"),
                image=_text(item, "image"),
                yearpublished=_int(_value_attr(item, "yearpublished"), None),
                minplayers=_int(_value_attr(item, "minplayers"), None),
                maxplayers=_int(_value_attr(item, "maxplayers"), None),
                playingtime=_int(_value_attr(item, "playingtime"), None),
                minplaytime=_int(_value_attr(item, "minplaytime"), None),
                maxplaytime=_int(_value_attr(item, "maxplaytime"), None),
                minage=_int(_value_attr(item, "minage"), None),
                links=_links(item),
                comments=_comments(item),
            )
        )
    return ThingReturn(items=items)


def _members(element: ET.Element, container: str, tag: str) -> list[Buddy]:
    group = element.find(container)
    if group is None:
        return []
    return [
        Buddy(id=_int(member.get("id")), name=member.get("name", ""))
        for member in group.findall(tag)
    ]


def decode_user(root: ET.Element) -> UserReturn:
    """Decode a ``<user>`` document."""
    _check_root(root, "user")
    return UserReturn(
        id=_int(root.get("id")),
        name=root.get("name", ""),
        firstname=_value_attr(root, "firstname") or "",
        lastname=_value_attr(root, "lastname") or "",
        avatarlink=_value_attr(root, "avatarlink") or "",
        yearregistered=_int(_value_attr(root, "yearregistered"), None),
        lastlogin=_value_attr(root, "lastlogin") or "",
        stateorprovince=_value_attr(root, "stateorprovince") or "",
        country=_value_attr(root, "country") or "",
        webaddress=_value_attr(root, "webaddress") or "",
        buddies=_members(root, "buddies", "buddy"),
        guilds=_members(root, "guilds", "guild"),
    )


def decode_family(root: ET.Element) -> FamilyReturn:
    """Decode an ``<items>`` family document."""
    _check_root(root, "items")
    items = []
    for item in root.findall("item"):
        name, _ = _primary_name(item)
        items.append(
            FamilyItem(
                id=_int(item.get("id")),
                type=item.get("type", ""),
                name=name,
                description=_text(item, "description") or "",
                thumbnail=_text(item, "thumbnail"),
                image=_text(item, "image"),
                links=_links(item),
            )
        )
    return FamilyReturn(items=items)


def decode_forum_list(root: ET.Element) -> ForumListReturn:
    """Decode a ``<forums>`` document."""
    _check_root(root, "forums")
    return ForumListReturn(
        id=_int(root.get("id")),
        type=root.get("type", ""),
        forums=[
            Forum(
                id=_int(forum.get("id")),
                groupid=_int(forum.get("groupid")),
                title=forum.get("title", ""),
                noposting=_bool(forum.get("noposting")),
                description=forum.get("description", ""),
                numthreads=_int(forum.get("numthreads")),
                numposts=_int(forum.get("numposts")),
                lastpostdate=forum.get("lastpostdate"),
            )
            for forum in root.findall("forum")
        ],
    )


DECODERS: Final[dict[type[BggResponse], Callable[[ET.Element], Any]]] = {
    Collection: decode_collection,
    ThingReturn: decode_thing,
    UserReturn: decode_user,
    FamilyReturn: decode_family,
    ForumListReturn: decode_forum_list,
}


def decode[T: BggResponse](body: bytes | str, response_type: type[T]) -> T:
    """Decode an XML body into the given response model.

    Args:
        body: Raw response body.
        response_type: One of the response models registered in ``DECODERS``.

    Returns:
        T: The populated response model.

    Raises:
        TypeError: If no decoder is registered for ``response_type``.
        ValueError: If the body is not well-formed XML, has an unexpected
            root element, or carries values that do not fit the model.
    """
    decoder = DECODERS.get(response_type)
    if decoder is None:
        msg = f"No decoder registered for {response_type.__name__}"
        raise TypeError(msg)

    try:
        root = ET.fromstring(body)  # noqa: S314 - trusted API host
    except ET.ParseError as e:
        msg = f"Malformed XML body: {e}"
        raise ValueError(msg) from e

    result: T = decoder(root)
    return result
