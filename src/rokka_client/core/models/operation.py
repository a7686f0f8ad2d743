"""Models describing the image operations offered by the API."""

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from rokka_client.core.models.errors import InvalidResponseError
from rokka_client.core.utils.validators import JsonPayload, decode_json_payload, parse_model


class Operation(BaseModel):
    """An operation that can be used in a stack.

    ``properties`` holds the JSON schema of each option and ``required``
    names the options that must be set. Used for introspection only, the
    operation itself is executed by the API.
    """

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., description="Operation name")
    properties: dict[str, Any] = Field(default_factory=dict, description="Option schemas")
    required: list[StrictStr] = Field(default_factory=list, description="Required options")

    def is_required(self, property_name: str) -> bool:
        return property_name in self.required


class OperationCollection(BaseModel):
    """All operations offered by the API."""

    model_config = ConfigDict(frozen=True)

    operations: list[Operation] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.operations)

    def __iter__(self) -> Iterator[Operation]:  # type: ignore[override]
        return iter(self.operations)

    def get_operations(self) -> list[Operation]:
        return list(self.operations)

    def get_operation(self, name: str) -> Operation | None:
        return next((op for op in self.operations if op.name == name), None)

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "OperationCollection":
        """Create the collection from the ``{name: {properties, required}}`` mapping."""
        decoded = decode_json_payload(data)
        if not isinstance(decoded, Mapping):
            raise InvalidResponseError(
                message="Expected a JSON object for OperationCollection",
                details={"type": type(decoded).__name__},
            )

        operations: list[Operation] = []
        for name, operation_data in decoded.items():
            # Ensure the optional fields exist
            payload: dict[str, Any] = {"required": [], "properties": {}}
            if operation_data is None:
                operation_data = {}
            if not isinstance(operation_data, Mapping):
                raise InvalidResponseError(
                    message=f"Expected a JSON object for operation {name}",
                    details={"operation": name},
                )
            payload.update(operation_data)
            payload["name"] = name
            operations.append(parse_model(Operation, payload))

        return cls(operations=operations)
