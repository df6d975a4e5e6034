"""Session cookie carrier on top of a framework cookie store."""

from typing import Protocol

from helpdesk.core.modules.session.models import AUTH_COOKIE_NAME, SESSION_TTL, AuthToken
from helpdesk.logging import log_event


class CookieStore(Protocol):
    """Minimal cookie API provided by the web framework for one request."""

    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str, *, max_age: int, path: str, secure: bool, httponly: bool, samesite: str) -> None: ...

    def delete(self, name: str, *, path: str, secure: bool, httponly: bool, samesite: str) -> None: ...


class SessionCookie:
    """Carries the signed session token in the auth cookie.

    The carrier never verifies the token. store() and clear() report
    failures through their return value instead of raising.
    """

    name = AUTH_COOKIE_NAME
    max_age = int(SESSION_TTL.total_seconds())
    path = "/"
    samesite = "lax"

    def __init__(self, cookies: CookieStore, secure: bool) -> None:
        self._cookies = cookies
        self.secure = secure

    def store(self, token: AuthToken) -> bool:
        try:
            self._cookies.set(
                self.name,
                token,
                max_age=self.max_age,
                path=self.path,
                secure=self.secure,
                httponly=True,
                samesite=self.samesite,
            )
        except Exception as e:
            log_event("Failed to set cookie", "auth", {}, "error", e)
            return False
        return True

    def read(self) -> AuthToken | None:
        value = self._cookies.get(self.name)
        return AuthToken(value) if value else None

    def clear(self) -> bool:
        try:
            self._cookies.delete(self.name, path=self.path, secure=self.secure, httponly=True, samesite=self.samesite)
        except Exception as e:
            log_event("Failed to remove cookie", "auth", {}, "error", e)
            return False
        return True
