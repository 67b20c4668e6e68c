"""BoardGameGeek API client.

``BggClient`` exposes one method per resource. Each method checks the fields
the resource requires, then funnels into ``dispatch``, which serializes the
request, sends it through the transport and returns the decoded response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

import httpx
from loguru import logger

from bggapi.core.constants import (
    RESOURCE_COLLECTION,
    RESOURCE_FAMILY,
    RESOURCE_FORUM_LIST,
    RESOURCE_THING,
    RESOURCE_USER,
)
from bggapi.core.context import RequestContext, generate_request_id
from bggapi.core.exceptions import (
    InvalidRequestError,
    MalformedResponseError,
    TransportError,
)
from bggapi.core.observability import trace_operation
from bggapi.domain.responses import (
    Collection,
    Comment,
    FamilyReturn,
    ForumListReturn,
    ThingReturn,
    UserReturn,
)
from bggapi.infrastructure.transport import HttpTransport
from bggapi.serialization.params import serialize

if TYPE_CHECKING:
    from types import TracebackType

    from bggapi.domain.requests import (
        CollectionRequest,
        FamilyRequest,
        ForumListRequest,
        ThingRequest,
        UserRequest,
    )
    from bggapi.domain.responses import BggResponse
    from bggapi.infrastructure.transport import Transport


class BggClient:
    """Client for the BoardGameGeek XML API 2.

    Args:
        transport: Transport to send requests through. Defaults to an
            ``HttpTransport`` built from the current settings, which the
            client then owns and closes.

    Example:
        >>> with BggClient() as client:
        ...     things = client.get_things(ThingRequest(id=[13], stats=True))
    """

    def __init__(self, transport: Transport | None = None) -> None:
        self._owns_transport = transport is None
        self.transport: Transport = (
            transport if transport is not None else HttpTransport()
        )

    def dispatch[T: BggResponse](
        self, resource: str, request: object, response_type: type[T]
    ) -> T:
        """Serialize a request and send it to a resource.

        Args:
            resource: Resource path segment.
            request: Request record to serialize into query parameters.
            response_type: Response model the transport decodes into.

        Returns:
            T: The transport's decoded payload, unmodified.

        Raises:
            TransportError: If the transport fails. HTTP and OS-level network
                errors escaping a transport are wrapped, with the original as
                the cause.
        """
        parameters = serialize(request)
        request_id = generate_request_id()
        token = RequestContext.set_request_id(request_id)

        with (
            logger.contextualize(request_id=request_id, resource=resource),
            trace_operation(f"bgg.{resource}", resource=resource),
        ):
            logger.debug(
                "Dispatching {} request with {} parameters",
                resource,
                len(parameters),
            )
            try:
                return self.transport.send(resource, parameters, response_type)
            except (httpx.HTTPError, OSError) as e:
                logger.warning("HTTP call to {} failed: {}", resource, e)
                msg = f"HTTP call to '{resource}' failed: {e}"
                raise TransportError(msg, resource=resource, cause=e) from e
            finally:
                RequestContext.reset(token)

    def get_collection(self, request: CollectionRequest) -> Collection:
        """Fetch a user's collection.

        Raises:
            InvalidRequestError: If ``username`` is missing or empty.
            TransportError: If the call fails.
        """
        if not request.username:
            msg = "Null or empty username in collection request"
            raise InvalidRequestError(msg, field="username")

        return self.dispatch(RESOURCE_COLLECTION, request, Collection)

    def get_things(self, request: ThingRequest) -> ThingReturn:
        """Fetch one or more things by id.

        Raises:
            InvalidRequestError: If the ``id`` list is missing or empty.
            TransportError: If the call fails.
        """
        _require_ids(request)
        return self.dispatch(RESOURCE_THING, request, ThingReturn)

    def get_user(self, request: UserRequest) -> UserReturn:
        """Fetch a user profile.

        Raises:
            InvalidRequestError: If ``name`` is missing.
            TransportError: If the call fails.
        """
        if request.name is None:
            msg = "Null name in user request"
            raise InvalidRequestError(msg, field="name")

        return self.dispatch(RESOURCE_USER, request, UserReturn)

    def get_family(self, request: FamilyRequest) -> FamilyReturn:
        """Fetch a family of things.

        Raises:
            InvalidRequestError: If ``id`` is missing.
            TransportError: If the call fails.
        """
        if request.id is None:
            msg = "Null id in family request"
            raise InvalidRequestError(msg, field="id")

        return self.dispatch(RESOURCE_FAMILY, request, FamilyReturn)

    def get_forum_list(self, request: ForumListRequest) -> ForumListReturn:
        """Fetch the forums of a thing or family.

        Raises:
            InvalidRequestError: If ``id`` is zero.
            TransportError: If the call fails.
        """
        if request.id == 0:
            msg = "Zero id in forum list request"
            raise InvalidRequestError(msg, field="id")

        return self.dispatch(RESOURCE_FORUM_LIST, request, ForumListReturn)

    def get_comments(self, request: ThingRequest) -> dict[int, list[Comment]]:
        """Fetch the comments of one or more things, keyed by thing id.

        The request should set ``comments`` or ``ratingcomments``; the API
        omits the comment container otherwise.

        Returns:
            dict[int, list[Comment]]: Comments per item id, in the order the
                API returned them.

        Raises:
            InvalidRequestError: If the ``id`` list is missing or empty.
            TransportError: If the call fails.
            MalformedResponseError: If a returned item has no comment
                container, or the same item id appears twice.
        """
        _require_ids(request)
        payload = self.dispatch(RESOURCE_THING, request, ThingReturn)

        comments_by_id: dict[int, list[Comment]] = {}
        for item in payload.items:
            if item.id in comments_by_id:
                msg = f"Thing {item.id} appears more than once in the response"
                raise MalformedResponseError(
                    msg, context={"item_id": item.id, "duplicate": True}
                )
            if item.comments is None:
                msg = f"Thing {item.id} has no comments container"
                raise MalformedResponseError(
                    msg, context={"item_id": item.id, "missing": "comments"}
                )
            comments_by_id[item.id] = [
                Comment(
                    rating=comment.rating,
                    username=comment.username,
                    text=comment.value,
                )
                for comment in item.comments.comments
            ]

        return comments_by_id

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self.transport, HttpTransport):
            self.transport.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def _require_ids(request: ThingRequest) -> None:
    if not request.id:
        msg = "Null or empty list of ids in thing request"
        raise InvalidRequestError(msg, field="id")
