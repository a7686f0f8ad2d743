"""Python client for the rokka image service."""

from rokka_client.clients.image import ImageClient
from rokka_client.clients.user import UserClient
from rokka_client.core.models.dynamic_metadata import SubjectArea
from rokka_client.core.models.errors import (
    BusinessLogicError,
    ConnectionFailedError,
    InvalidArgumentError,
    InvalidResponseError,
    NotFoundError,
    RequestFailedError,
    RokkaClientError,
)
from rokka_client.core.models.source_image import SourceImage, SourceImageCollection
from rokka_client.core.models.stack import Stack, StackCollection, StackOperation
from rokka_client.core.utils.search import SearchHelper
from rokka_client.factory import ClientFactory

__version__ = "1.0.0"
__description__ = "Client library for the rokka image management API"

__all__ = [
    "BusinessLogicError",
    "ClientFactory",
    "ConnectionFailedError",
    "ImageClient",
    "InvalidArgumentError",
    "InvalidResponseError",
    "NotFoundError",
    "RequestFailedError",
    "RokkaClientError",
    "SearchHelper",
    "SourceImage",
    "SourceImageCollection",
    "Stack",
    "StackCollection",
    "StackOperation",
    "SubjectArea",
    "UserClient",
]
