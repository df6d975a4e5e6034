from helpdesk.errors import ValidationError
from helpdesk.utils import is_blank


def validate_ticket_fields(subject: str | None, description: str | None, priority: str | None) -> None:
    """Raise ValidationError unless subject, description and priority are all non-blank."""
    if is_blank(subject) or is_blank(description) or is_blank(priority):
        raise ValidationError("All fields are required")


def parse_ticket_number(raw: str | None) -> int | None:
    """Parse a ticket id from a URL or form value; None when not a positive integer.

    Only plain ASCII digits are accepted, so "1_0" or full-width digits are rejected.
    """
    if raw is None:
        return None
    digits = raw.strip()
    if not (digits.isascii() and digits.isdigit()):
        return None
    number = int(digits)
    return number if number > 0 else None
