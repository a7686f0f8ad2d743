"""Source image models."""

from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SerializeAsAny,
    StrictInt,
    StrictStr,
    field_serializer,
    field_validator,
)

from rokka_client.core.models.dynamic_metadata import DynamicMetadata, parse_dynamic_metadata
from rokka_client.core.utils.constants import USER_METADATA_DATE_PREFIX
from rokka_client.core.utils.time import (
    format_api_datetime,
    parse_api_datetime,
    to_api_precision,
)
from rokka_client.core.utils.validators import JsonPayload, decode_json_payload, parse_model


class SourceImage(BaseModel):
    """Metadata of an image stored in rokka.

    ``hash`` is the identifier used everywhere in the API. ``binary_hash`` is
    the hash of the uploaded bytes and can be used as an alternate lookup key.
    """

    model_config = ConfigDict(frozen=True)

    organization: StrictStr = Field(..., description="Organization owning the image")
    binary_hash: StrictStr = Field(..., description="Hash of the original uploaded bytes")
    hash: StrictStr = Field(..., description="Hash of the normalized image")
    name: StrictStr = Field(..., description="Original file name")
    format: StrictStr = Field(..., description="Original format, e.g. jpg")

    size: StrictInt = Field(..., description="Size in bytes")
    width: StrictInt = Field(..., description="Width in pixels")
    height: StrictInt = Field(..., description="Height in pixels")

    user_metadata: dict[str, Any] = Field(default_factory=dict)
    dynamic_metadata: dict[str, SerializeAsAny[DynamicMetadata]] = Field(default_factory=dict)

    created: datetime = Field(..., description="When the image was first created")
    link: StrictStr = Field(..., description="API link to the image")

    @field_validator("user_metadata", mode="before")
    @classmethod
    def parse_user_metadata_dates(cls, value: Any) -> Any:
        """Turn ``date:`` prefixed user metadata values into datetimes.

        Datetimes are stored in UTC with millisecond precision, the form
        they take on the wire.
        """
        if value is None:
            return {}

        if not isinstance(value, Mapping):
            return value

        parsed: dict[str, Any] = {}
        for key, field_value in value.items():
            if key.startswith(USER_METADATA_DATE_PREFIX) and isinstance(field_value, str):
                parsed[key] = to_api_precision(parse_api_datetime(field_value))
            elif isinstance(field_value, datetime):
                parsed[key] = to_api_precision(field_value)
            else:
                parsed[key] = field_value

        return parsed

    @field_validator("dynamic_metadata", mode="before")
    @classmethod
    def parse_dynamic_metadata_variants(cls, value: Any) -> Any:
        if value is None:
            return {}

        if not isinstance(value, Mapping):
            return value

        return parse_dynamic_metadata(value)

    @field_serializer("user_metadata")
    def serialize_user_metadata(self, value: dict[str, Any]) -> dict[str, Any]:
        return {
            key: format_api_datetime(field_value) if isinstance(field_value, datetime) else field_value
            for key, field_value in value.items()
        }

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the image."""
        return self.model_dump(mode="json")

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "SourceImage":
        """Create a source image from an API response body or decoded object."""
        return parse_model(cls, decode_json_payload(data))


class SourceImageCollection(BaseModel):
    """A page of source images together with its pagination metadata.

    ``cursor`` is only returned by the API for large result sets and can be
    passed back as ``offset`` to fetch the next page.
    """

    model_config = ConfigDict(frozen=True)

    source_images: list[SourceImage] = Field(
        ...,
        validation_alias=AliasChoices("source_images", "items"),
        description="Images of this page, in API order",
    )
    total: StrictInt = Field(0, description="Total number of images matching the query")
    links: dict[str, Any] = Field(default_factory=dict, description="Navigation links, e.g. next")
    cursor: StrictStr | None = Field(None, description="Opaque pagination cursor")

    def __len__(self) -> int:
        return len(self.source_images)

    def __iter__(self) -> Iterator[SourceImage]:  # type: ignore[override]
        return iter(self.source_images)

    def get_source_images(self) -> list[SourceImage]:
        return list(self.source_images)

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "SourceImageCollection":
        """Create a collection from the ``{"items": [...]}`` listing envelope."""
        return parse_model(cls, decode_json_payload(data))
