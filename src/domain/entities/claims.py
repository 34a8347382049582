"""
Access Token Claims

Payload carried by a signed access token. Not persisted.
"""

from pydantic import BaseModel, ConfigDict, Field


class AccessClaims(BaseModel):
    """
    Flat claims record: registered JWT fields plus the bound address.

    Serialized with the registered claim names (jti, sub, exp) so any
    standard JWT library can read the token.
    """

    model_config = ConfigDict(populate_by_name=True)

    unique_id: str = Field(..., alias="jti", min_length=1)
    subject: str = Field(..., alias="sub", min_length=1)
    expires_at: int = Field(..., alias="exp")
    bound_address: str = Field(..., alias="ip_address")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
