from helpdesk.errors import ValidationError
from helpdesk.utils import is_blank


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_registration(name: str | None, email: str | None, password: str | None) -> None:
    """Validate registration form fields.

    Requirements:
    - name, email and password are all present and non-blank

    Raises:
        ValidationError: If any field is missing
    """
    if is_blank(name) or is_blank(email) or is_blank(password):
        raise ValidationError("All fields are required")


def validate_credentials(email: str | None, password: str | None) -> None:
    if is_blank(email) or is_blank(password):
        raise ValidationError("Email and password are required")
