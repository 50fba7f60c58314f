"""
AccountCredentials model holding the key pair used to sign requests.
"""

from pydantic import BaseModel, Field


class AccountCredentials(BaseModel):
    """
    Public and secret keys for a Klevu account.

    Immutable once created. The secret key is excluded from repr so that it
    never leaks into logs or tracebacks.

    Attributes:
        js_api_key: Public JS API key (klevu-1234567890)
        rest_auth_key: Secret REST AUTH key used for HMAC signing
    """

    js_api_key: str
    rest_auth_key: str = Field(..., repr=False)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "js_api_key": "klevu-1234567890",
                "rest_auth_key": "ABCDE1234567890",
            }
        }
