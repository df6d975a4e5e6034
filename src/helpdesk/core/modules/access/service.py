from helpdesk.core.core import Service
from helpdesk.core.modules.session.cookie import SessionCookie
from helpdesk.core.modules.user.models import User
from helpdesk.errors import UnauthorizedError


class AccessService(Service):
    async def ensure_authenticated(self, cookie: SessionCookie, message: str = "Authentication required") -> User:
        """Ensure the request carries a valid session, raise UnauthorizedError if not."""
        user = await self.core.services.session.get_current_user(cookie)
        if user is None:
            raise UnauthorizedError(message)
        return user

    def tickets_require_login(self) -> bool:
        """Whether tickets are created and listed per authenticated owner."""
        return self.core.config.ticket_scope == "user"
