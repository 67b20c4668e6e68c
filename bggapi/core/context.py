"""Call context management for request ids shared by logs and traces."""

import uuid
from contextvars import ContextVar, Token

# Context variable for storing the id of the API call in flight
_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestContext:
    """Manages per-call context using contextvars.

    Each dispatch stores its request id here so that log records and trace
    spans emitted further down the stack (transport, decoding) can be
    correlated with the call that produced them.
    """

    @staticmethod
    def set_request_id(request_id: str) -> Token[str | None]:
        """Set the request ID for the current context.

        Args:
            request_id: The request ID to store in the context.

        Returns:
            Token[str | None]: Token that restores the previous value when
                passed to ``reset``.
        """
        return _request_id_var.set(request_id)

    @staticmethod
    def get_request_id() -> str | None:
        """Get the request ID from the current context.

        Returns:
            str | None: The request ID if set, None otherwise.
        """
        return _request_id_var.get()

    @staticmethod
    def reset(token: Token[str | None]) -> None:
        """Restore the request ID that was current before ``token`` was issued."""
        _request_id_var.reset(token)

    @staticmethod
    def clear() -> None:
        """Clear all context variables."""
        _request_id_var.set(None)


def generate_request_id() -> str:
    """Generate a unique id for a single API call.

    Returns:
        str: A prefixed UUID4 string in format 'req-<uuid4>'.

    Examples:
        >>> request_id = generate_request_id()
        >>> request_id.startswith('req-')
        True
        >>> len(request_id)
        40
    """
    return f"req-{uuid.uuid4()}"
