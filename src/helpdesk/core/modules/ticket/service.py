from typing import Any
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from helpdesk.core.core import Service
from helpdesk.core.db import store_errors
from helpdesk.core.modules.counter.models import CounterType
from helpdesk.core.modules.ticket.models import Ticket
from helpdesk.core.modules.ticket.validators import validate_ticket_fields


class TicketService(Service):
    """Stores support tickets with sequential public numbers."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("tickets")

    async def on_start(self) -> None:
        """Create indexes for number lookup and per-user listing."""
        await self._collection.create_index([("number", 1)], unique=True)
        await self._collection.create_index([("user_id", 1), ("created_at", -1)])

    async def create_ticket(self, subject: str, description: str, priority: str, user_id: UUID | None = None) -> Ticket:
        """Persist a ticket and invalidate the cached listing view."""
        validate_ticket_fields(subject, description, priority)

        number = await self.core.services.counter.get_next_sequence(CounterType.TICKET)
        ticket = Ticket(
            number=number,
            subject=subject.strip(),
            description=description.strip(),
            priority=priority.strip(),
            user_id=user_id,
        )
        with store_errors("insert ticket"):
            await self._collection.insert_one(ticket.to_mongo())

        await self.invalidate_listing()
        return ticket

    async def list_tickets(self, user_id: UUID | None = None) -> list[Ticket]:
        """List tickets newest first, restricted to one owner when user_id is given."""
        query: dict[str, Any] = {} if user_id is None else {"user_id": user_id}
        with store_errors("list tickets"):
            cursor = self._collection.find(query).sort([("created_at", -1), ("number", -1)])
            return await Ticket.list_cursor(cursor)

    async def get_ticket_by_number(self, number: int) -> Ticket | None:
        with store_errors("find ticket"):
            doc = await self._collection.find_one({"number": number})
        return Ticket.model_validate(doc) if doc else None

    async def get_listing_version(self) -> int:
        """Current version of the ticket listing; changes whenever a ticket is added."""
        return await self.core.services.counter.get_current_sequence(CounterType.TICKET_LISTING)

    async def invalidate_listing(self) -> int:
        return await self.core.services.counter.get_next_sequence(CounterType.TICKET_LISTING)
