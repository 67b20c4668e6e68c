"""Type aliases for loosely typed data passed between layers.

This module centralizes type definitions for data that cannot be statically
typed, giving them a clear semantic name at the call sites.

- **Parameters**: the flat query-string encoding of a request record
- **ErrorContext**: structured details attached to library exceptions
"""

from typing import Any

# Serialized request: lower-cased field name -> encoded value
type Parameters = dict[str, str]

# Context dictionary for error details and debugging information
type ErrorContext = dict[str, Any]
