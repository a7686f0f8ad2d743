"""Stack models."""

from collections.abc import Iterator
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictStr

from rokka_client.core.utils.validators import JsonPayload, decode_json_payload, parse_model


class StackOperation(BaseModel):
    """A single operation of a stack together with its configured options."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., description="Operation name, e.g. resize")
    options: dict[str, Any] = Field(default_factory=dict, description="Operation options")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "options": dict(self.options),
        }

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "StackOperation":
        return parse_model(cls, decode_json_payload(data))


class Stack(BaseModel):
    """An ordered sequence of operations applied when an image is delivered."""

    model_config = ConfigDict(frozen=True)

    organization: StrictStr = Field(..., description="Organization name")
    name: StrictStr = Field(..., description="Stack name, unique per organization")
    created: datetime = Field(..., description="When the stack was first created")
    stack_operations: list[StackOperation] = Field(..., description="Operations in order")
    stack_options: dict[str, Any] = Field(default_factory=dict, description="Stack options")

    def get_organization(self) -> str:
        return self.organization

    def get_name(self) -> str:
        return self.name

    def get_created(self) -> datetime:
        return self.created

    def get_stack_operations(self) -> list[StackOperation]:
        return list(self.stack_operations)

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "Stack":
        return parse_model(cls, decode_json_payload(data))


class StackCollection(BaseModel):
    """Stacks of an organization."""

    model_config = ConfigDict(frozen=True)

    stacks: list[Stack] = Field(..., validation_alias=AliasChoices("stacks", "items"))

    def __len__(self) -> int:
        return len(self.stacks)

    def __iter__(self) -> Iterator[Stack]:  # type: ignore[override]
        return iter(self.stacks)

    def get_stacks(self) -> list[Stack]:
        return list(self.stacks)

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "StackCollection":
        return parse_model(cls, decode_json_payload(data))
