"""API credentials model."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Credentials(BaseModel):
    """API key and secret of a user.

    Only the key is sent with requests. The secret is kept but never
    transmitted.
    """

    model_config = ConfigDict(frozen=True)

    key: StrictStr = Field("", description="API key, sent as the Api-Key header")
    secret: StrictStr = Field("", description="API secret, not sent")

    def __repr__(self) -> str:
        masked = "***" if self.secret else ""
        return f"Credentials(key={self.key!r}, secret={masked!r})"

    __str__ = __repr__
