"""Schemas for token introspection."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ResolvedToken(BaseModel):
    """A valid access token as seen at introspection time."""

    model_config = ConfigDict(frozen=True)

    token_value: str
    principal_subject: str
    issued_at: datetime
    time_to_live: int = Field(..., description="Seconds, from the expiration policy")
    authentication_methods: tuple[str, ...] = ()
    grant_type: str | None = None
    owning_client_id: str


class IntrospectionResponse(BaseModel):
    """Introspection response body.

    Only `active` is set for inactive tokens; serialize with `exclude_none`.
    """

    active: bool
    client_id: str | None = None
    sub: str | None = None
    unique_security_name: str | None = None
    exp: int | None = Field(
        default=None, description="Token time-to-live in seconds, not an instant"
    )
    iat: int | None = Field(default=None, description="Issued-at, epoch milliseconds")
    realm_name: str | None = None
    token_type: str | None = None
    grant_type: str | None = None
    scope: str | None = None
    aud: str | None = None
    iss: str | None = None

    def to_payload(self) -> dict:
        """Wire representation."""
        return self.model_dump(exclude_none=True)


INACTIVE_RESPONSE = IntrospectionResponse(active=False)
