"""Root conftest.py for the bggapi test suite.

This file contains project-wide fixtures and pytest configuration.
"""

import os
from collections.abc import Generator

import pytest

from bggapi.core.config import get_settings
from bggapi.core.context import RequestContext


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove library env vars so tests see the documented defaults.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        pytest.MonkeyPatch: The monkeypatch instance for env manipulation.
    """
    for key in list(os.environ):
        if key.startswith("BGG_") or key in ("K_SERVICE", "AWS_EXECUTION_ENV"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def clean_context() -> Generator[None]:
    """Clear the request context before and after each test."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture
def thing_xml() -> bytes:
    """Thing payload with two items, each carrying its own comments."""
    return b"""<?xml version="1.0" encoding="utf-8"?>
<items termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
  <item type="boardgame" id="13">
    <thumbnail>https://cf.geekdo-images.com/catan_t.jpg</thumbnail>
    <image>https://cf.geekdo-images.com/catan.jpg</image>
    <name type="primary" sortindex="1" value="CATAN" />
    <name type="alternate" sortindex="1" value="Die Siedler von Catan" />
    <description>Trade, build and settle.</description>
    <yearpublished value="1995" />
    <minplayers value="3" />
    <maxplayers value="4" />
    <playingtime value="120" />
    <minplaytime value="60" />
    <maxplaytime value="120" />
    <minage value="10" />
    <link type="boardgamecategory" id="1026" value="Negotiation" />
    <link type="boardgamedesigner" id="11" value="Klaus Teuber" />
    <comments page="1" totalitems="2">
      <comment username="alice" rating="8" value="Classic." />
      <comment username="bob" rating="N/A" value="Too much luck." />
    </comments>
  </item>
  <item type="boardgame" id="822">
    <name type="primary" sortindex="1" value="Carcassonne" />
    <yearpublished value="2000" />
    <comments page="1" totalitems="1">
      <comment username="carol" rating="7.5" value="Tiles!" />
    </comments>
  </item>
</items>
"""


@pytest.fixture
def collection_xml() -> bytes:
    """Collection payload with a single owned game."""
    return b"""<?xml version="1.0" encoding="utf-8" standalone="yes"?>
<items totalitems="1" termsofuse="https://boardgamegeek.com/xmlapi/termsofuse"
       pubdate="Mon, 05 Jan 2023 09:08:07 +0000">
  <item objecttype="thing" objectid="13" subtype="boardgame" collid="4242">
    <name sortindex="1">CATAN</name>
    <yearpublished>1995</yearpublished>
    <image>https://cf.geekdo-images.com/catan.jpg</image>
    <thumbnail>https://cf.geekdo-images.com/catan_t.jpg</thumbnail>
    <status own="1" prevowned="0" fortrade="0" want="0" wanttoplay="1"
            wanttobuy="0" wishlist="1" wishlistpriority="2" preordered="0"
            lastmodified="2023-01-05 09:08:07" />
    <numplays>12</numplays>
    <comment>Family favourite</comment>
  </item>
</items>
"""


@pytest.fixture
def user_xml() -> bytes:
    """User payload with one buddy and one guild."""
    return b"""<?xml version="1.0" encoding="utf-8"?>
<user id="7" name="alice" termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
  <firstname value="Alice" />
  <lastname value="Liddell" />
  <avatarlink value="N/A" />
  <yearregistered value="2004" />
  <lastlogin value="2023-01-05" />
  <stateorprovince value="Oxfordshire" />
  <country value="United Kingdom" />
  <webaddress value="" />
  <buddies total="1" page="1">
    <buddy id="8" name="bob" />
  </buddies>
  <guilds total="1" page="1">
    <guild id="99" name="Wonderland Gamers" />
  </guilds>
</user>
"""


@pytest.fixture
def family_xml() -> bytes:
    """Family payload with one inbound link."""
    return b"""<?xml version="1.0" encoding="utf-8"?>
<items termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
  <item type="boardgamefamily" id="3">
    <name type="primary" sortindex="1" value="Catan" />
    <description>Games in the Catan universe.</description>
    <link type="boardgamefamily" id="13" value="CATAN" inbound="true" />
  </item>
</items>
"""


@pytest.fixture
def forum_list_xml() -> bytes:
    """Forum list payload with two forums."""
    return b"""<?xml version="1.0" encoding="utf-8"?>
<forums type="thing" id="13" termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
  <forum id="100" groupid="0" title="Reviews" noposting="0"
         description="Post your game reviews here" numthreads="250"
         numposts="3000" lastpostdate="Thu, 05 Jan 2023 09:08:07 +0000" />
  <forum id="101" groupid="0" title="Announcements" noposting="1"
         description="" numthreads="3" numposts="4" lastpostdate="" />
</forums>
"""
