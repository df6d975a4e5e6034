"""Session token models and constants."""

from datetime import timedelta
from typing import NewType
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

AuthToken = NewType("AuthToken", str)

AUTH_COOKIE_NAME = "auth-token"
TOKEN_ALGORITHM = "HS256"
SESSION_TTL = timedelta(days=7)


class AuthTokenPayload(BaseModel):
    """Claims embedded in a session token.

    Only ever built from a verified token or from a freshly created user.
    """

    user_id: UUID = Field(alias="userId")

    model_config = ConfigDict(populate_by_name=True, frozen=True)
