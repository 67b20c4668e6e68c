"""Structured exception hierarchy for the BoardGameGeek client.

Every failure surfaced by the library is one of three kinds, all sharing the
same base class so callers can catch them generically:

- **InvalidRequestError**: a required request field is missing, empty or zero.
  Raised before any network call is made.
- **TransportError**: the HTTP call failed (network error, non-success status,
  undecodable body). The underlying exception is attached as the cause.
- **MalformedResponseError**: a decoded payload lacks a structure that local
  post-processing depends on.

Features:
- **Error codes**: Standardized identifiers for programmatic handling
- **Severity levels**: Classification for logging and alerting
- **Exception chaining**: Preserves the original cause for debugging
- **Fingerprinting**: Stable hash for grouping similar errors
"""

import hashlib
import traceback
from enum import Enum

from bggapi.core.types import ErrorContext


class ErrorCode(Enum):
    """Standardized error codes for the BoardGameGeek client."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """A request is missing a field the target resource requires."""

    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    """The underlying HTTP call failed or its body could not be decoded."""

    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    """A response is missing an embedded structure that was expected."""


class Severity(Enum):
    """Severity levels for library errors."""

    LOW = "LOW"
    """Caller mistakes that are fixed by supplying a corrected request."""

    MEDIUM = "MEDIUM"
    """Unexpected data from the remote API affecting a single call."""

    HIGH = "HIGH"
    """Failures talking to the remote API."""


class BggApiError(Exception):
    """Base exception class for all errors raised by the library.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable error message
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        # Capture stack trace at creation time
        self.stack_trace = traceback.format_stack()[:-1]  # Exclude this frame

        self.fingerprint = self._generate_fingerprint()

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    def _generate_fingerprint(self) -> str:
        """Generate a fingerprint for error grouping.

        Returns:
            str: A hash built from the error type, code and raising location.
        """
        max_frames = 5
        relevant_frames = (
            self.stack_trace[-max_frames:]
            if len(self.stack_trace) > max_frames
            else self.stack_trace
        )

        fingerprint_data = f"{self.__class__.__name__}:{self.error_code}"

        for frame in relevant_frames:
            if "site-packages" not in frame and "bggapi/" in frame:
                lines = frame.strip().split("\n")
                if lines:
                    fingerprint_data += f":{lines[0]}"

        return hashlib.sha256(fingerprint_data.encode()).hexdigest()[:16]

    @property
    def is_expected(self) -> bool:
        """Whether the error is a predictable outcome (LOW or MEDIUM severity)."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    @property
    def should_alert(self) -> bool:
        """Whether the error deserves attention (HIGH severity)."""
        return self.severity == Severity.HIGH

    def __str__(self) -> str:
        """Return a string representation of the exception.

        Returns:
            str: A formatted string containing the error code and message
        """
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return a detailed representation of the exception.

        Returns:
            str: A string showing the class name, error code, message, severity,
                and context
        """
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class InvalidRequestError(BggApiError):
    """Exception raised when a request fails its required-field check.

    Args:
        message: Description of the validation failure
        field: Name of the offending request field
        error_code: Error code (defaults to INVALID_REQUEST)
        context: Additional context information about the error
    """

    def __init__(
        self,
        message: str,
        field: str,
        error_code: str | ErrorCode = ErrorCode.INVALID_REQUEST,
        context: ErrorContext | None = None,
    ) -> None:
        self.field = field
        super().__init__(
            error_code, message, Severity.LOW, {"field": field, **(context or {})}
        )


class TransportError(BggApiError):
    """Exception raised when the HTTP call for a resource fails.

    Args:
        message: Description of the failure
        resource: Resource path segment that was requested
        status_code: HTTP status code, when a response was received
        error_code: Error code (defaults to TRANSPORT_ERROR)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        status_code: int | None = None,
        error_code: str | ErrorCode = ErrorCode.TRANSPORT_ERROR,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.resource = resource
        self.status_code = status_code
        details: ErrorContext = {}
        if resource is not None:
            details["resource"] = resource
        if status_code is not None:
            details["status_code"] = status_code
        details.update(context or {})
        super().__init__(error_code, message, Severity.HIGH, details, cause)


class MalformedResponseError(BggApiError):
    """Exception raised when a response lacks an expected embedded structure.

    Args:
        message: Description of what is missing
        error_code: Error code (defaults to MALFORMED_RESPONSE)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.MALFORMED_RESPONSE,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.MEDIUM, context, cause)
