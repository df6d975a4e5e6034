from typing import Self

from pydantic import BaseModel, Field

GENERIC_ERROR_MESSAGE = "Something went wrong, please try again"


class ActionResult(BaseModel):
    """Uniform outcome of a form action."""

    success: bool = Field(..., description="Whether the action succeeded")
    message: str = Field(..., description="Human-readable outcome, safe to display")

    @classmethod
    def ok(cls, message: str) -> Self:
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str = GENERIC_ERROR_MESSAGE) -> Self:
        return cls(success=False, message=message)
