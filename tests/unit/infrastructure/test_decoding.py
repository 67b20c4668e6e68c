"""Unit tests for XML decoding of API responses."""

import pytest
import pytest_check

from bggapi.domain.responses import (
    BggResponse,
    Collection,
    FamilyReturn,
    ForumListReturn,
    Link,
    ThingReturn,
    UserReturn,
)
from bggapi.infrastructure.decoding import UnexpectedRootError, decode


@pytest.mark.unit
class TestDecodeThing:
    """Test decoding of the thing resource."""

    def test_items_and_comments(self, thing_xml: bytes) -> None:
        """Items keep their order and their embedded comments."""
        result = decode(thing_xml, ThingReturn)

        assert [item.id for item in result.items] == [13, 822]
        catan = result.items[0]
        with pytest_check.check:
            assert catan.name == "CATAN"
        with pytest_check.check:
            assert catan.alternate_names == ["Die Siedler von Catan"]
        with pytest_check.check:
            assert catan.yearpublished == 1995
        with pytest_check.check:
            assert (catan.minplayers, catan.maxplayers) == (3, 4)
        with pytest_check.check:
            assert catan.minage == 10
        with pytest_check.check:
            assert catan.links[1] == Link(
                type="boardgamedesigner", id=11, value="Klaus Teuber"
            )
        assert catan.comments is not None
        assert [c.username for c in catan.comments.comments] == ["alice", "bob"]
        assert catan.comments.totalitems == 2

    def test_item_without_comments_has_no_container(self) -> None:
        """Comments stay None when the element is absent."""
        body = b'<items><item type="boardgame" id="1"><name value="X"/></item></items>'

        result = decode(body, ThingReturn)

        assert result.items[0].comments is None
        assert result.items[0].yearpublished is None


@pytest.mark.unit
class TestDecodeOtherResources:
    """Test decoding of collection, user, family and forum list."""

    def test_collection(self, collection_xml: bytes) -> None:
        """Collection entries carry status flags and play counts."""
        result = decode(collection_xml, Collection)

        assert result.totalitems == 1
        item = result.items[0]
        with pytest_check.check:
            assert (item.objectid, item.collid, item.name) == (13, 4242, "CATAN")
        with pytest_check.check:
            assert item.status.own is True
        with pytest_check.check:
            assert item.status.prevowned is False
        with pytest_check.check:
            assert item.status.wishlistpriority == 2
        with pytest_check.check:
            assert item.numplays == 12
        with pytest_check.check:
            assert item.comment == "Family favourite"

    def test_user(self, user_xml: bytes) -> None:
        """User attributes, buddies and guilds are decoded."""
        result = decode(user_xml, UserReturn)

        with pytest_check.check:
            assert (result.id, result.name) == (7, "alice")
        with pytest_check.check:
            assert result.yearregistered == 2004
        with pytest_check.check:
            assert result.country == "United Kingdom"
        with pytest_check.check:
            assert [b.name for b in result.buddies] == ["bob"]
        with pytest_check.check:
            assert [g.id for g in result.guilds] == [99]

    def test_family(self, family_xml: bytes) -> None:
        """Family links keep the inbound marker."""
        result = decode(family_xml, FamilyReturn)

        family = result.items[0]
        assert family.name == "Catan"
        assert family.links == [
            Link(type="boardgamefamily", id=13, value="CATAN", inbound=True)
        ]

    def test_forum_list(self, forum_list_xml: bytes) -> None:
        """Forums are decoded in document order."""
        result = decode(forum_list_xml, ForumListReturn)

        assert (result.id, result.type) == (13, "thing")
        assert [f.title for f in result.forums] == ["Reviews", "Announcements"]
        assert result.forums[1].noposting is True
        assert result.forums[0].numposts == 3000


@pytest.mark.unit
class TestDecodeErrors:
    """Test decoding failures."""

    def test_malformed_xml_raises_value_error(self) -> None:
        """Bodies that are not XML fail with ValueError."""
        with pytest.raises(ValueError, match="Malformed XML"):
            decode(b"<items><item>", ThingReturn)

    def test_error_document_reports_api_message(self) -> None:
        """API error documents surface their message."""
        body = b"<errors><error><message>Invalid username specified</message></error></errors>"

        with pytest.raises(UnexpectedRootError) as exc_info:
            decode(body, Collection)

        assert exc_info.value.actual == "errors"
        assert exc_info.value.detail == "Invalid username specified"

    def test_queued_collection_message(self) -> None:
        """A queued-request message is not a collection."""
        body = b"<message>Your request has been accepted and will be processed.</message>"

        with pytest.raises(UnexpectedRootError, match="accepted"):
            decode(body, Collection)

    def test_non_numeric_value_raises_value_error(self) -> None:
        """Values that do not fit the model fail with ValueError."""
        with pytest.raises(ValueError, match="invalid literal"):
            decode(b'<items><item id="abc"/></items>', ThingReturn)

    def test_unregistered_type_raises_type_error(self) -> None:
        """Only registered response models can be decoded."""
        with pytest.raises(TypeError, match="No decoder"):
            decode(b"<items/>", BggResponse)
