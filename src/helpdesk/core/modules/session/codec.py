from datetime import datetime, timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from helpdesk.core.modules.session.models import SESSION_TTL, TOKEN_ALGORITHM, AuthToken, AuthTokenPayload
from helpdesk.errors import InvalidTokenError
from helpdesk.logging import log_event
from helpdesk.utils import now

# Number of leading token characters that may appear in logs
TOKEN_SNIPPET_LENGTH = 10


class TokenCodec:
    """Signs and verifies stateless session tokens (HS256 JWT)."""

    def __init__(self, secret: str, ttl: timedelta = SESSION_TTL) -> None:
        self._secret = secret
        self._ttl = ttl

    def sign(self, payload: AuthTokenPayload, issued_at: datetime | None = None) -> AuthToken:
        """Encode payload with iat/exp claims; exp is iat plus the session TTL."""
        issued_at = issued_at or now()
        claims = {
            **payload.model_dump(mode="json", by_alias=True),
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return AuthToken(jwt.encode(claims, self._secret, algorithm=TOKEN_ALGORITHM))

    def verify(self, token: str) -> AuthTokenPayload:
        """Decode and validate a token.

        Raises:
            InvalidTokenError: bad signature, malformed token, expired token or missing claims
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
            return AuthTokenPayload.model_validate(claims)
        except (jwt.InvalidTokenError, PydanticValidationError) as e:
            log_event("Token decryption failed", "auth", {"token_snippet": token[:TOKEN_SNIPPET_LENGTH]}, "error", e)
            raise InvalidTokenError from e
