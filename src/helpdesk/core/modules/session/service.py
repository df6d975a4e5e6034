from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pymongo.asynchronous.database import AsyncDatabase

from helpdesk.core.core import Service
from helpdesk.core.modules.session.cookie import SessionCookie
from helpdesk.core.modules.session.models import AuthToken, AuthTokenPayload
from helpdesk.core.modules.session.codec import TokenCodec
from helpdesk.core.modules.user.models import User
from helpdesk.errors import InvalidTokenError, StoreFailureError
from helpdesk.logging import log_event

if TYPE_CHECKING:
    from helpdesk.core.core import Core


class SessionService(Service):
    """Stateless sessions: signed tokens carried in a cookie, nothing stored server-side."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._codec: TokenCodec | None = None

    def set_core(self, core: Core) -> None:
        super().set_core(core)
        self._codec = TokenCodec(core.config.auth_secret)

    @property
    def codec(self) -> TokenCodec:
        if self._codec is None:
            raise RuntimeError("Core not set for service")
        return self._codec

    def issue_token(self, user: User) -> AuthToken:
        return self.codec.sign(AuthTokenPayload(user_id=user.id))

    def start_session(self, cookie: SessionCookie, user: User) -> bool:
        """Sign a token for the user and store it in the cookie.

        Returns False when the cookie could not be written (already logged).
        """
        return cookie.store(self.issue_token(user))

    def end_session(self, cookie: SessionCookie) -> bool:
        """Drop the session cookie. The token itself stays valid until it expires."""
        return cookie.clear()

    async def get_current_user(self, cookie: SessionCookie) -> User | None:
        """Resolve the user behind the session cookie, or None when logged out."""
        token = cookie.read()
        if token is None:
            return None

        try:
            payload = self.codec.verify(token)
        except InvalidTokenError:
            return None

        try:
            user = await self.core.services.user.get_user(payload.user_id)
        except StoreFailureError as e:
            log_event("Failed to load session user", "auth", {"user_id": str(payload.user_id)}, "error", e)
            return None

        if user is None:
            log_event("Session refers to unknown user", "auth", {"user_id": str(payload.user_id)}, "warning")
        return user
