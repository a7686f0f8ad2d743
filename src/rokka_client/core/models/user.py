"""User, organization and membership models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from rokka_client.core.utils.validators import JsonPayload, decode_json_payload, parse_model


class User(BaseModel):
    """A newly created user with its API credentials."""

    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(..., description="User identifier")
    email: StrictStr = Field(..., description="Email address")
    api_key: StrictStr = Field(..., description="API key to authenticate requests")
    api_secret: StrictStr = Field(..., description="API secret")

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "User":
        return parse_model(cls, decode_json_payload(data))


class Organization(BaseModel):
    """An organization, the namespace all images and stacks live in."""

    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(..., description="Organization identifier")
    name: StrictStr = Field(..., description="Name used in URLs")
    display_name: StrictStr = Field("", description="Human readable name")
    billing_email: StrictStr = Field(..., description="Email address for billing")
    limit: dict[str, Any] = Field(default_factory=dict, description="Usage limits")

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "Organization":
        return parse_model(cls, decode_json_payload(data))


class Membership(BaseModel):
    """The role of a user within an organization."""

    model_config = ConfigDict(frozen=True)

    email: StrictStr = Field(..., description="Email address of the member")
    organization: StrictStr = Field(..., description="Organization name")
    role: StrictStr = Field(..., description="One of read, write, upload, admin")

    @classmethod
    def from_json_response(cls, data: JsonPayload) -> "Membership":
        return parse_model(cls, decode_json_payload(data))
