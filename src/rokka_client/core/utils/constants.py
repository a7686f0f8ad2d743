"""Global constants used throughout the client.

Resource names, header names, error codes, retry tuning and the names of
the environment variables read by the client factory.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

ERROR_CODE_INVALID_ARGUMENT = "INVALID_ARGUMENT"
ERROR_CODE_INVALID_RESPONSE = "INVALID_RESPONSE"

ERROR_CODE_CONNECTION_FAILED = "CONNECTION_FAILED"
ERROR_CODE_REQUEST_FAILED = "REQUEST_FAILED"
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"

ERROR_CODE_BUSINESS_LOGIC = "BUSINESS_LOGIC_ERROR"

# ============================================================================
# API Defaults
# ============================================================================

DEFAULT_API_BASE_URL = "https://api.rokka.io"
DEFAULT_API_VERSION = 1
DEFAULT_TIMEOUT = 30  # seconds

API_KEY_HEADER = "Api-Key"
API_VERSION_HEADER = "Api-Version"
LOCATION_HEADER = "Location"

# ============================================================================
# API Resources
# ============================================================================

SOURCEIMAGE_RESOURCE = "sourceimages"
DYNAMIC_META_RESOURCE = "meta/dynamic"
USER_META_RESOURCE = "meta/user"
DOWNLOAD_RESOURCE = "download"

STACK_RESOURCE = "stacks"
OPERATIONS_RESOURCE = "operations"

USERS_RESOURCE = "users"
ORGANIZATIONS_RESOURCE = "organizations"
MEMBERSHIPS_RESOURCE = "memberships"

UPLOAD_FIELD_NAME = "filedata"

# ============================================================================
# Retry Policy
# ============================================================================

MAX_RETRIES = 10
RETRY_DELAY_STEP_MS = 2000

RETRYABLE_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 502, 503})

# ============================================================================
# Search Constraints
# ============================================================================

FIELD_NAME_MAX_LENGTH = 54
FIELD_NAME_PATTERN = r"^(user:((str|array|date|latlon|double):)?)?[a-z0-9_]{1,54}$"

SORT_DIRECTION_ASC = "asc"
SORT_DIRECTION_DESC = "desc"

# ============================================================================
# Metadata
# ============================================================================

USER_METADATA_DATE_PREFIX = "date:"

MEMBERSHIP_ROLES: Final[frozenset[str]] = frozenset({"read", "write", "upload", "admin"})
DEFAULT_MEMBERSHIP_ROLE = "read"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_API_BASE_URL = "ROKKA_API_BASE_URL"
ENV_ORGANIZATION = "ROKKA_ORGANIZATION"
ENV_API_KEY = "ROKKA_API_KEY"
ENV_API_SECRET = "ROKKA_API_SECRET"

# ============================================================================
# Logging
# ============================================================================

LOGGER_SERVICE_NAME = "rokka-client"
