"""Lenient coercion of query-string values."""


def parse_comma_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def clamp_int(value, default: int, minimum: int, maximum: int | None = None) -> int:
    """Coerce a query value to an int within bounds, ``default`` when unparseable."""
    try:
        number = int(str(value).strip()) if value is not None else default
    except ValueError:
        number = default
    number = max(number, minimum)
    if maximum is not None:
        number = min(number, maximum)
    return number
