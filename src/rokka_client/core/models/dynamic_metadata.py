"""Dynamic metadata variants attached to source images.

Each variant is identified on the wire by its name (e.g. ``subject_area``).
Variants are looked up in a static registry; names the client does not know
about are skipped so that metadata kinds added on the server side do not
break parsing.
"""

from collections.abc import Callable, Mapping
from typing import Any, ClassVar, TypeVar

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from rokka_client.core.utils.constants import LOGGER_SERVICE_NAME
from rokka_client.core.utils.validators import JsonPayload, decode_json_payload, parse_model

logger = Logger(service=LOGGER_SERVICE_NAME, UTC=True)

DynamicMetadataT = TypeVar("DynamicMetadataT", bound="DynamicMetadata")


class DynamicMetadata(BaseModel):
    """Base class for all dynamic metadata variants."""

    model_config = ConfigDict(frozen=True)

    name: ClassVar[str]

    def get_name(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation sent to the API."""
        return self.model_dump(mode="json")

    @classmethod
    def from_json_response(cls: type[DynamicMetadataT], data: JsonPayload) -> DynamicMetadataT:
        return parse_model(cls, decode_json_payload(data))


DYNAMIC_METADATA_REGISTRY: dict[str, type[DynamicMetadata]] = {}


def register_dynamic_metadata(
    metadata_class: type[DynamicMetadataT],
) -> type[DynamicMetadataT]:
    """Register a variant under its wire name. Usable as a class decorator."""
    DYNAMIC_METADATA_REGISTRY[metadata_class.name] = metadata_class
    return metadata_class


def get_dynamic_metadata_class(name: str) -> type[DynamicMetadata] | None:
    return DYNAMIC_METADATA_REGISTRY.get(name)


@register_dynamic_metadata
class SubjectArea(DynamicMetadata):
    """The area of an image holding its subject.

    Operations such as ``crop`` keep this rectangle in the output.
    """

    name: ClassVar[str] = "subject_area"

    x: StrictInt = Field(..., ge=0, description="Left edge in pixels")
    y: StrictInt = Field(..., ge=0, description="Top edge in pixels")
    width: StrictInt = Field(1, ge=1, description="Width in pixels")
    height: StrictInt = Field(1, ge=1, description="Height in pixels")


def parse_dynamic_metadata(
    data: Mapping[str, Any] | None,
    *,
    registry: Mapping[str, type[DynamicMetadata]] | None = None,
) -> dict[str, DynamicMetadata]:
    """
    Build dynamic metadata variants from their JSON representation.

    Values that already are ``DynamicMetadata`` instances are kept as they are.
    Unknown names are dropped.

    Args:
        data: Mapping of ``name -> variant payload``
        registry: Optional registry overriding the module level one

    Returns:
        Mapping of ``name -> DynamicMetadata``
    """
    if not data:
        return {}

    lookup: Callable[[str], type[DynamicMetadata] | None] = (
        registry.get if registry is not None else get_dynamic_metadata_class
    )

    parsed: dict[str, DynamicMetadata] = {}

    for name, payload in data.items():
        if isinstance(payload, DynamicMetadata):
            parsed[name] = payload
            continue

        metadata_class = lookup(name)
        if metadata_class is None:
            logger.debug("Skipping unknown dynamic metadata", extra={"metadata_name": name})
            continue

        parsed[name] = metadata_class.from_json_response(payload)

    return parsed
