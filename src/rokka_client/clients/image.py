"""Image client for the rokka service.

Manages source images, their user and dynamic metadata, and stacks of an
organization. Every path is built as ``<resource>/<organization>/...``; the
organization falls back to the default one of the client when not given.
"""

import warnings
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from http import HTTPStatus
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import requests
from aws_lambda_powertools import Logger

from rokka_client.clients.base import BaseClient
from rokka_client.core.models.credentials import Credentials
from rokka_client.core.models.dynamic_metadata import DynamicMetadata
from rokka_client.core.models.errors import (
    BusinessLogicError,
    InvalidArgumentError,
    NotFoundError,
)
from rokka_client.core.models.operation import OperationCollection
from rokka_client.core.models.source_image import SourceImage, SourceImageCollection
from rokka_client.core.models.stack import Stack, StackCollection, StackOperation
from rokka_client.core.utils.constants import (
    DEFAULT_API_VERSION,
    DOWNLOAD_RESOURCE,
    DYNAMIC_META_RESOURCE,
    ERROR_CODE_IMAGE_NOT_FOUND,
    LOCATION_HEADER,
    LOGGER_SERVICE_NAME,
    OPERATIONS_RESOURCE,
    SOURCEIMAGE_RESOURCE,
    STACK_RESOURCE,
    UPLOAD_FIELD_NAME,
    USER_META_RESOURCE,
)
from rokka_client.core.utils.search import SearchHelper, SortDirection
from rokka_client.core.utils.time import format_api_datetime
from rokka_client.core.utils.validators import decode_json_payload

logger = Logger(service=LOGGER_SERVICE_NAME, UTC=True)

DEFAULT_PORTS: Mapping[str, int] = {"http": 80, "https": 443}


class ImageClient(BaseClient):
    """Client for the image and stack endpoints of an organization."""

    def __init__(
        self,
        session: requests.Session,
        default_organization: str,
        api_key: str,
        api_secret: str,
        *,
        api_version: int = DEFAULT_API_VERSION,
    ) -> None:
        super().__init__(
            session,
            api_version=api_version,
            credentials=Credentials(key=api_key, secret=api_secret),
        )
        self._default_organization = default_organization

    @property
    def default_organization(self) -> str:
        return self._default_organization

    def get_organization(self, organization: str | None = None) -> str:
        """Return the given organization or the default one if empty."""
        return self.resolve_organization(organization, self._default_organization)

    # ------------------------------------------------------------------
    # Source images
    # ------------------------------------------------------------------

    def upload_source_image(
        self,
        contents: bytes,
        file_name: str,
        organization: str | None = None,
    ) -> SourceImageCollection:
        """
        Upload a source image.

        The API may answer with several images for a single upload, for
        example for multi-page formats.

        Raises:
            InvalidArgumentError: If no image contents are given
        """
        if not contents:
            raise InvalidArgumentError(
                message="You need to provide an image content to be uploaded",
                details={"file_name": file_name},
            )

        response = self.call_checked(
            "POST",
            self._path(SOURCEIMAGE_RESOURCE, self.get_organization(organization)),
            files={UPLOAD_FIELD_NAME: (file_name, contents)},
        )

        return SourceImageCollection.from_json_response(response.content)

    def delete_source_image(self, hash: str, organization: str | None = None) -> bool:
        """
        Delete a source image.

        Returns:
            True if deleted, False if the image does not exist

        Raises:
            RequestFailedError: If the request fails for another reason
        """
        try:
            response = self.call_checked(
                "DELETE",
                self._path(SOURCEIMAGE_RESOURCE, self.get_organization(organization), hash),
            )
        except NotFoundError:
            logger.debug("Source image to delete not found", extra={"hash": hash})
            return False

        return response.status_code == HTTPStatus.NO_CONTENT

    def search_source_images(
        self,
        search: Mapping[str, Any] | None = None,
        sorts: Mapping[str, SortDirection] | None = None,
        limit: int | None = None,
        offset: int | str | None = None,
        organization: str | None = None,
    ) -> SourceImageCollection:
        """
        Search and list source images.

        Args:
            search: Mapping of ``field -> value`` to filter on
            sorts: Mapping of ``field -> direction`` ("asc", "desc" or True)
            limit: Maximum number of images to return
            offset: Integer offset or the cursor of a previous listing
            organization: Optional organization name

        Raises:
            InvalidArgumentError: If a search or sort field is invalid
        """
        params: dict[str, Any] = {}

        sort = SearchHelper.build_search_sort_parameter(sorts)
        if sort:
            params["sort"] = sort

        for field, value in (search or {}).items():
            if not SearchHelper.validate_field_name(field):
                raise InvalidArgumentError(
                    message=f'Invalid field name "{field}" as search field',
                    details={"field": field},
                )
            params[field] = value

        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset

        response = self.call_checked(
            "GET",
            self._path(SOURCEIMAGE_RESOURCE, self.get_organization(organization)),
            params=params,
        )

        return SourceImageCollection.from_json_response(response.content)

    def list_source_images(
        self,
        limit: int | None = None,
        offset: int | str | None = None,
        organization: str | None = None,
    ) -> SourceImageCollection:
        """List source images. Deprecated, use ``search_source_images``."""
        warnings.warn(
            "list_source_images() is deprecated, use search_source_images()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.search_source_images({}, {}, limit, offset, organization)

    def get_source_image(
        self,
        hash: str,
        binary_hash: bool = False,
        organization: str | None = None,
    ) -> SourceImage:
        """
        Load the metadata of a source image.

        With ``binary_hash`` the given hash is the hash of the original
        uploaded bytes, looked up through the listing endpoint.

        Raises:
            NotFoundError: If no image matches
        """
        path = self._path(SOURCEIMAGE_RESOURCE, self.get_organization(organization))
        options: dict[str, Any] = {}

        if binary_hash:
            options["params"] = {"binaryHash": hash}
        else:
            path = self._path(path, hash)

        response = self.call_checked("GET", path, **options)
        data = decode_json_payload(response.content)

        # Binary hash lookups answer with a listing
        if isinstance(data, Mapping) and "items" in data:
            items = data["items"] or []
            if not items:
                raise NotFoundError(
                    message="Image not found",
                    error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                    body=response.text,
                    details={"binary_hash": hash},
                )
            data = items[0]

        return SourceImage.from_json_response(data)

    def get_source_image_contents(self, hash: str, organization: str | None = None) -> bytes:
        """Download the original binary contents of a source image."""
        path = self._path(
            SOURCEIMAGE_RESOURCE,
            self.get_organization(organization),
            hash,
            DOWNLOAD_RESOURCE,
        )

        return self.call_checked("GET", path).content

    # ------------------------------------------------------------------
    # Operations and stacks
    # ------------------------------------------------------------------

    def list_operations(self) -> OperationCollection:
        """List the operations available for stacks."""
        response = self.call_checked("GET", OPERATIONS_RESOURCE)
        return OperationCollection.from_json_response(response.content)

    def create_stack(
        self,
        stack_name: str,
        stack_operations: Iterable[StackOperation | Mapping[str, Any]],
        organization: str | None = None,
        stack_options: Mapping[str, Any] | None = None,
    ) -> Stack:
        """Create a stack, replacing an existing one with the same name."""
        stack_data = {
            "operations": [
                operation.to_dict() if isinstance(operation, StackOperation) else dict(operation)
                for operation in stack_operations
            ],
            "options": dict(stack_options or {}),
        }

        response = self.call_checked(
            "PUT",
            self._path(STACK_RESOURCE, self.get_organization(organization), stack_name),
            json=stack_data,
        )

        return Stack.from_json_response(response.content)

    def list_stacks(
        self,
        limit: int | None = None,
        offset: int | None = None,
        organization: str | None = None,
    ) -> StackCollection:
        """List the stacks of an organization."""
        options: dict[str, Any] = {}

        params = {
            key: value
            for key, value in (("limit", limit), ("offset", offset))
            if value is not None
        }
        if params:
            options["params"] = params

        response = self.call_checked(
            "GET",
            self._path(STACK_RESOURCE, self.get_organization(organization)),
            **options,
        )

        return StackCollection.from_json_response(response.content)

    def get_stack(self, stack_name: str, organization: str | None = None) -> Stack:
        response = self.call_checked(
            "GET",
            self._path(STACK_RESOURCE, self.get_organization(organization), stack_name),
        )
        return Stack.from_json_response(response.content)

    def delete_stack(self, stack_name: str, organization: str | None = None) -> bool:
        """Delete a stack. Returns True if the API answered 204."""
        response = self.call_checked(
            "DELETE",
            self._path(STACK_RESOURCE, self.get_organization(organization), stack_name),
        )
        return response.status_code == HTTPStatus.NO_CONTENT

    # ------------------------------------------------------------------
    # Dynamic metadata
    # ------------------------------------------------------------------

    def set_dynamic_metadata(
        self,
        dynamic_metadata: DynamicMetadata,
        hash: str,
        organization: str | None = None,
    ) -> str | None:
        """
        Add the given dynamic metadata to a source image.

        Returns:
            The hash of the image, which is a new one if the API created a
            new image; None if the API did not say where the new image is

        Raises:
            BusinessLogicError: If the API answers with an unexpected status
        """
        path = self._path(
            SOURCEIMAGE_RESOURCE,
            self.get_organization(organization),
            hash,
            DYNAMIC_META_RESOURCE,
            dynamic_metadata.get_name(),
        )

        response = self.call("PUT", path, json=dynamic_metadata.to_dict())

        return self._hash_from_metadata_response(response, hash)

    def delete_dynamic_metadata(
        self,
        dynamic_metadata_name: str,
        hash: str,
        organization: str | None = None,
    ) -> str | None:
        """
        Delete the named dynamic metadata from a source image.

        Raises:
            InvalidArgumentError: If the hash or the metadata name is empty
            BusinessLogicError: If the API answers with an unexpected status
        """
        if not hash:
            raise InvalidArgumentError(message="Missing image Hash.")

        if not dynamic_metadata_name:
            raise InvalidArgumentError(message="Missing DynamicMetadata name.")

        path = self._path(
            SOURCEIMAGE_RESOURCE,
            self.get_organization(organization),
            hash,
            DYNAMIC_META_RESOURCE,
            dynamic_metadata_name,
        )

        response = self.call("DELETE", path)

        return self._hash_from_metadata_response(response, hash)

    # ------------------------------------------------------------------
    # User metadata
    # ------------------------------------------------------------------

    def set_user_metadata_field(
        self,
        field: str,
        value: Any,
        hash: str,
        organization: str | None = None,
    ) -> bool:
        """Add or update a single user metadata field."""
        return self._do_user_metadata_request({field: value}, hash, "PATCH", organization)

    def add_user_metadata(
        self,
        fields: Mapping[str, Any],
        hash: str,
        organization: str | None = None,
    ) -> bool:
        """Add the given fields to the user metadata, keeping the others."""
        return self._do_user_metadata_request(fields, hash, "PATCH", organization)

    def set_user_metadata(
        self,
        fields: Mapping[str, Any],
        hash: str,
        organization: str | None = None,
    ) -> bool:
        """Replace the whole user metadata with the given fields."""
        return self._do_user_metadata_request(fields, hash, "PUT", organization)

    def delete_user_metadata(self, hash: str, organization: str | None = None) -> bool:
        return self._do_user_metadata_request(None, hash, "DELETE", organization)

    def delete_user_metadata_field(
        self,
        field: str,
        hash: str,
        organization: str | None = None,
    ) -> bool:
        return self._do_user_metadata_request({field: None}, hash, "PATCH", organization)

    def delete_user_metadata_fields(
        self,
        fields: Iterable[str],
        hash: str,
        organization: str | None = None,
    ) -> bool:
        return self._do_user_metadata_request(
            {field: None for field in fields},
            hash,
            "PATCH",
            organization,
        )

    # ------------------------------------------------------------------
    # Delivery URLs
    # ------------------------------------------------------------------

    def get_source_image_uri(
        self,
        hash: str,
        stack: str,
        format: str = "jpg",
        name: str | None = None,
        organization: str | None = None,
    ) -> str:
        """
        Build the URL delivering an image rendered through a stack.

        The host is the API host with its first label replaced by the
        organization, e.g. ``api.rokka.io`` becomes ``myorg.rokka.io``.

        Example:
            get_source_image_uri("abc123", "thumbnail", "png", "seo-name")
            → "https://myorg.rokka.io/thumbnail/abc123/seo-name.png"
        """
        api_uri = urlsplit(self.base_url)

        # Drop the "api." label
        base_host = (api_uri.hostname or "").split(".", 1)[-1]

        path = f"/{stack}/{hash}"
        if name:
            path += f"/{name}"
        path += f".{format.lower()}"

        netloc = f"{self.get_organization(organization)}.{base_host}"
        port = api_uri.port
        if port is not None and port != DEFAULT_PORTS.get(api_uri.scheme):
            netloc += f":{port}"

        return urlunsplit((api_uri.scheme, netloc, path, "", ""))

    @staticmethod
    def extract_hash_from_location_header(headers: Sequence[str] | str | None) -> str | None:
        """
        Extract the image hash from ``Location`` header values.

        Only the first value is used; its last path segment is the hash,
        e.g. ``https://api.rokka.io/sourceimages/myorg/{hash}``.

        Returns:
            The hash, or None if there is no Location header
        """
        if isinstance(headers, str):
            headers = [headers]

        location = next(iter(headers or []), None)
        if not location:
            return None

        return urlsplit(location).path.split("/")[-1]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _path(*parts: str) -> str:
        return "/".join(parts)

    def _hash_from_metadata_response(self, response: requests.Response, hash: str) -> str | None:
        if response.status_code == HTTPStatus.NO_CONTENT:
            return hash

        if response.status_code == HTTPStatus.CREATED:
            new_hash = self.extract_hash_from_location_header(
                response.headers.get(LOCATION_HEADER)
            )
            logger.debug(
                "Metadata change created a new image",
                extra={"hash": hash, "new_hash": new_hash},
            )
            return new_hash

        raise BusinessLogicError(
            message=response.text or f"Unexpected status {response.status_code}",
            status_code=response.status_code,
            body=response.text,
            details={"hash": hash},
        )

    def _do_user_metadata_request(
        self,
        fields: Mapping[str, Any] | None,
        hash: str,
        method: str,
        organization: str | None = None,
    ) -> bool:
        path = self._path(
            SOURCEIMAGE_RESOURCE,
            self.get_organization(organization),
            hash,
            USER_META_RESOURCE,
        )

        options: dict[str, Any] = {}
        if fields:
            options["json"] = {
                key: format_api_datetime(value) if isinstance(value, datetime) else value
                for key, value in fields.items()
            }

        self.call_checked(method, path, **options)

        return True
