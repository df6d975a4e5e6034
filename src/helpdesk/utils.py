from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
