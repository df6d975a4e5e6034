from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from helpdesk.config import Config
from helpdesk.core.core import Core
from helpdesk.core.modules.session.cookie import SessionCookie
from helpdesk.core.modules.ticket.models import TicketView
from helpdesk.core.modules.ticket.validators import parse_ticket_number
from helpdesk.core.modules.user.models import User, UserView
from helpdesk.core.modules.user.validators import validate_credentials, validate_registration
from helpdesk.core.results import ActionResult
from helpdesk.errors import DuplicateUserError, UnauthorizedError, ValidationError
from helpdesk.logging import log_event


class App:
    """Facade for all application operations.

    Every public method is a request boundary: failures are logged once and
    turned into an ActionResult, an empty list or None. Nothing raises.
    """

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def is_healthy(self) -> bool:
        """Whether the database answers; used by the health endpoint."""
        return await self._core.is_database_available()

    # === Authentication ===
    async def register_user(self, cookie: SessionCookie, name: str, email: str, password: str) -> ActionResult:
        """Create an account and log the new user in."""
        try:
            validate_registration(name, email, password)
            user = await self._core.services.user.create_user(name, email, password)
            self._core.services.session.start_session(cookie, user)
        except ValidationError as e:
            log_event("Validation error: missing registration fields", "auth", {"name": name, "email": email}, "warning")
            return ActionResult.failed(str(e))
        except DuplicateUserError as e:
            log_event("Registration failed: user already exists", "auth", {"email": email}, "warning")
            return ActionResult.failed(str(e))
        except Exception as e:
            log_event("Unexpected error during registration", "auth", {}, "error", e)
            return ActionResult.failed()

        log_event("User registered successfully", "auth", {"user_id": str(user.id), "email": user.email}, "info")
        return ActionResult.ok("Registration successful")

    async def login_user(self, cookie: SessionCookie, email: str, password: str) -> ActionResult:
        """Check credentials and start a session."""
        try:
            validate_credentials(email, password)
            user = await self._core.services.user.authenticate(email, password)
            if user is None:
                log_event("Login failed: invalid credentials", "auth", {"email": email}, "warning")
                return ActionResult.failed("Invalid email or password")
            self._core.services.session.start_session(cookie, user)
        except ValidationError as e:
            log_event("Validation error: missing login fields", "auth", {"email": email}, "warning")
            return ActionResult.failed(str(e))
        except Exception as e:
            log_event("Unexpected error during login", "auth", {}, "error", e)
            return ActionResult.failed()

        log_event("User logged in successfully", "auth", {"user_id": str(user.id)}, "info")
        return ActionResult.ok("Login successful")

    async def logout_user(self, cookie: SessionCookie) -> ActionResult:
        """Clear the session cookie. Always succeeds from the caller's point of view."""
        try:
            cleared = self._core.services.session.end_session(cookie)
        except Exception as e:
            log_event("Unexpected error during logout", "auth", {}, "error", e)
            cleared = False

        if cleared:
            log_event("User logged out successfully", "auth", {}, "info")
        return ActionResult.ok("Logout successful")

    async def get_current_user(self, cookie: SessionCookie) -> UserView | None:
        """Get the logged-in user's profile, or None."""
        user = await self._current_user(cookie)
        return UserView.from_domain(user) if user else None

    # === Tickets ===
    async def create_ticket(self, cookie: SessionCookie, subject: str, description: str, priority: str) -> ActionResult:
        """File a ticket, owned by the current user when there is one."""
        context = {"subject": subject, "priority": priority, "description_length": len(description or "")}
        try:
            owner = await self._resolve_ticket_owner(cookie)
            ticket = await self._core.services.ticket.create_ticket(
                subject, description, priority, owner.id if owner else None
            )
        except UnauthorizedError as e:
            log_event("Unauthorized ticket creation attempt", "ticket", {}, "warning")
            return ActionResult.failed(str(e))
        except ValidationError as e:
            log_event("Validation error: missing ticket fields", "ticket", context, "warning")
            return ActionResult.failed(str(e))
        except Exception as e:
            log_event("An error occurred while creating the ticket", "ticket", context, "error", e)
            return ActionResult.failed("An error occurred while creating the ticket")

        log_event(
            f"Ticket created successfully: {ticket.number}",
            "ticket",
            {"ticket_id": ticket.number, "user_id": str(ticket.user_id) if ticket.user_id else None},
            "info",
        )
        return ActionResult.ok("Ticket created successfully")

    async def get_tickets(self, cookie: SessionCookie) -> list[TicketView]:
        """List tickets newest first; only the caller's own tickets when login is required."""
        try:
            if self._core.services.access.tickets_require_login():
                user = await self._core.services.session.get_current_user(cookie)
                if user is None:
                    log_event("Unauthorized access to ticket list", "ticket", {}, "warning")
                    return []
                tickets = await self._core.services.ticket.list_tickets(user.id)
            else:
                tickets = await self._core.services.ticket.list_tickets()
        except Exception as e:
            log_event("Error fetching tickets", "ticket", {}, "error", e)
            return []

        log_event("Fetched tickets list", "ticket", {"count": len(tickets)}, "info")
        return [TicketView.from_domain(ticket) for ticket in tickets]

    async def get_ticket_by_id(self, ticket_id: str) -> TicketView | None:
        """Get a ticket by its public number, or None."""
        number = parse_ticket_number(ticket_id)
        if number is None:
            log_event("Invalid ticket id", "ticket", {"ticket_id": ticket_id}, "warning")
            return None

        try:
            ticket = await self._core.services.ticket.get_ticket_by_number(number)
        except Exception as e:
            log_event("Error fetching ticket details", "ticket", {"ticket_id": number}, "error", e)
            return None

        if ticket is None:
            log_event("Ticket not found", "ticket", {"ticket_id": number}, "warning")
            return None
        return TicketView.from_domain(ticket)

    async def get_ticket_listing_etag(self, cookie: SessionCookie) -> str | None:
        """Validator for the ticket listing view; changes whenever a ticket is created.

        Returns None when the version cannot be read, which disables caching.
        """
        try:
            version = await self._core.services.ticket.get_listing_version()
            viewer = "all"
            if self._core.services.access.tickets_require_login():
                user = await self._core.services.session.get_current_user(cookie)
                viewer = user.id.hex if user else "anonymous"
        except Exception as e:
            log_event("Error reading ticket listing version", "ticket", {}, "error", e)
            return None
        return f'W/"tickets-{version}-{viewer}"'

    # === Private helpers ===
    async def _current_user(self, cookie: SessionCookie) -> User | None:
        try:
            return await self._core.services.session.get_current_user(cookie)
        except Exception as e:
            log_event("Unexpected error resolving current user", "auth", {}, "error", e)
            return None

    async def _resolve_ticket_owner(self, cookie: SessionCookie) -> User | None:
        """Current user for a new ticket; raises UnauthorizedError when login is required and missing."""
        if self._core.services.access.tickets_require_login():
            return await self._core.services.access.ensure_authenticated(
                cookie, "You must be logged in to create a ticket"
            )
        return await self._core.services.session.get_current_user(cookie)
