"""Auto-incrementing counters for sequential numbering.

Counter documents: {counter_type, seq}, unique on counter_type. The next
number handed out is seq + 1.
"""

from enum import StrEnum


class CounterType(StrEnum):
    """Sequences maintained in the counters collection."""

    TICKET = "ticket"  # public ticket numbers
    TICKET_LISTING = "ticket_listing"  # version of the ticket listing view, bumped on every change
