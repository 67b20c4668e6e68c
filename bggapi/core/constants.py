"""Core library constants."""

# BoardGameGeek XML API 2
DEFAULT_BASE_URL = "https://boardgamegeek.com/xmlapi2"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "bggapi-python"

# Wire format for date-time parameters (two-digit year)
DATETIME_PARAM_FORMAT = "%y-%m-%d %H:%M:%S"

# Encoded flag values
FLAG_TRUE = "1"
FLAG_FALSE = "0"

# Resource path segments
RESOURCE_COLLECTION = "collection"
RESOURCE_THING = "thing"
RESOURCE_USER = "user"
RESOURCE_FAMILY = "family"
RESOURCE_FORUM_LIST = "forumlist"

# Redaction
REDACTED = "[REDACTED]"
