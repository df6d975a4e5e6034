from typing import Annotated

from fastapi import APIRouter, Form, Request, Response

from helpdesk.core.modules.ticket.models import TicketView
from helpdesk.core.results import ActionResult
from helpdesk.errors import NotFoundError
from helpdesk.web.deps import AppDep, SessionDep
from helpdesk.web.openapi import ErrorResponse

router = APIRouter(tags=["tickets"])


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """Weak comparison of an If-None-Match header (single tag, list or "*") with the current ETag."""
    if not if_none_match:
        return False
    candidates = [candidate.strip() for candidate in if_none_match.split(",")]
    if "*" in candidates:
        return True
    opaque_tag = etag.removeprefix("W/")
    return any(candidate.removeprefix("W/") == opaque_tag for candidate in candidates)


@router.post(
    "/tickets",
    summary="Create ticket",
    description="File a support ticket from a form submission. Invalidates cached ticket listings.",
    operation_id="createTicket",
    responses={200: {"description": "Outcome of the creation, see `success`"}},
)
async def create_ticket(
    app: AppDep,
    session: SessionDep,
    subject: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    priority: Annotated[str, Form()] = "",
) -> ActionResult:
    return await app.create_ticket(session, subject, description, priority)


@router.get(
    "/tickets",
    summary="List tickets",
    description="Tickets newest first. Supports conditional requests through ETag/If-None-Match.",
    operation_id="listTickets",
    response_model=list[TicketView],
    responses={
        200: {"description": "Tickets visible to the caller (empty when not logged in)"},
        304: {"description": "Listing unchanged since the given ETag"},
    },
)
async def list_tickets(app: AppDep, session: SessionDep, request: Request, response: Response) -> Response | list[TicketView]:
    etag = await app.get_ticket_listing_etag(session)
    if etag is not None:
        if etag_matches(request.headers.get("if-none-match"), etag):
            return Response(status_code=304, headers={"ETag": etag})
        response.headers["ETag"] = etag
        response.headers["Cache-Control"] = "private, no-cache"
    return await app.get_tickets(session)


@router.get(
    "/tickets/{ticket_id}",
    summary="Get ticket",
    description="Get a single ticket by its number.",
    operation_id="getTicket",
    responses={
        200: {"description": "Ticket details"},
        404: {"model": ErrorResponse, "description": "Ticket not found or id not numeric"},
    },
)
async def get_ticket(ticket_id: str, app: AppDep) -> TicketView:
    ticket = await app.get_ticket_by_id(ticket_id)
    if ticket is None:
        raise NotFoundError("Ticket not found")
    return ticket
