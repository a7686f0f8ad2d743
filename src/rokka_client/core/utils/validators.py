"""Response payload validation utilities."""

import json
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from rokka_client.core.models.errors import InvalidResponseError

ModelT = TypeVar("ModelT", bound=BaseModel)

JsonPayload = str | bytes | bytearray | Mapping[str, Any]


MISSING_FIELD_MESSAGE = "This field is required"


def summarize_validation_errors(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, str]]:
    """Keep the location and message of each Pydantic error.

    The rejected input is left out so that response bodies do not end up in
    exception details. Locations are dotted paths, e.g. ``items.0.hash``.
    """
    return [{"field": _error_location(err), "message": _error_message(err)} for err in errors]


def _error_location(err: Mapping[str, Any]) -> str:
    return ".".join(str(part) for part in err.get("loc", ())) or "response"


def _error_message(err: Mapping[str, Any]) -> str:
    if err.get("type") == "missing":
        return MISSING_FIELD_MESSAGE
    return str(err.get("msg", "Invalid value")).removeprefix("Value error,").strip()


def decode_json_payload(data: JsonPayload) -> Any:
    """Decode a JSON response body, passing already decoded data through.

    Raises:
        InvalidResponseError: If the body is not valid JSON
    """
    if isinstance(data, Mapping):
        return data

    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidResponseError(
            message="Response body is not valid JSON",
            details={"error": str(exc)},
        ) from exc


def parse_model(model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate decoded response data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Decoded JSON object

    Returns:
        The validated model instance

    Raises:
        InvalidResponseError: If required fields are missing or malformed
    """
    if not isinstance(data, Mapping):
        raise InvalidResponseError(
            message=f"Expected a JSON object for {model.__name__}",
            details={"type": type(data).__name__},
        )

    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidResponseError(
            message=f"Invalid {model.__name__} payload",
            details={"errors": summarize_validation_errors(exc.errors())},
        ) from exc
