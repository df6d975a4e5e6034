from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from helpdesk.core.db import MongoModel
from helpdesk.utils import now


class Ticket(MongoModel):
    """Support ticket, optionally owned by the user who filed it.

    Indexed on number - unique, (user_id, created_at).
    """

    number: int  # Sequential public id, used in URLs: /tickets/{number}
    subject: str
    description: str
    priority: str
    user_id: UUID | None = None
    created_at: datetime = Field(default_factory=now)


class TicketView(BaseModel):
    """Ticket information (API representation)."""

    id: int = Field(..., description="Ticket number")
    subject: str = Field(..., description="Short summary")
    description: str = Field(..., description="Problem description")
    priority: str = Field(..., description="Priority as entered by the reporter")
    user_id: UUID | None = Field(None, description="Owner user ID, if filed while logged in")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_domain(cls, ticket: Ticket) -> "TicketView":
        return cls(
            id=ticket.number,
            subject=ticket.subject,
            description=ticket.description,
            priority=ticket.priority,
            user_id=ticket.user_id,
            created_at=ticket.created_at,
        )
