"""bggapi - typed client for the BoardGameGeek XML API 2.

Architecture Overview:
- **Client**: one method per resource, all funnelling into a single dispatch
- **Serialization**: request records to flat query parameters
- **Domain**: pydantic request and response models
- **Infrastructure**: httpx transport and XML decoding
- **Core**: configuration, exceptions, logging and tracing

Example:
    >>> from bggapi import BggClient, ThingRequest
    >>> with BggClient() as client:
    ...     result = client.get_things(ThingRequest(id=[13], stats=True))
"""

from bggapi.client import BggClient
from bggapi.core.exceptions import (
    BggApiError,
    InvalidRequestError,
    MalformedResponseError,
    TransportError,
)
from bggapi.domain.requests import (
    CollectionRequest,
    FamilyRequest,
    ForumListRequest,
    ThingRequest,
    UserRequest,
)
from bggapi.domain.responses import (
    Collection,
    Comment,
    FamilyReturn,
    ForumListReturn,
    ThingReturn,
    UserReturn,
)
from bggapi.infrastructure.transport import HttpTransport, Transport
from bggapi.serialization.params import ParamKind, serialize

__all__ = [
    "BggApiError",
    "BggClient",
    "Collection",
    "CollectionRequest",
    "Comment",
    "FamilyRequest",
    "FamilyReturn",
    "ForumListRequest",
    "ForumListReturn",
    "HttpTransport",
    "InvalidRequestError",
    "MalformedResponseError",
    "ParamKind",
    "ThingRequest",
    "ThingReturn",
    "Transport",
    "TransportError",
    "UserRequest",
    "UserReturn",
    "serialize",
]
