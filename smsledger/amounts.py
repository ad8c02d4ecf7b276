from decimal import Decimal, InvalidOperation


class MalformedAmountError(ValueError):
    """Raised when a matched amount token is not a usable decimal."""


def parse_amount(token: str) -> Decimal:
    """Parse an SMS amount token such as ``1,23,456.78`` or ``299.00``.

    Grouping commas are stripped regardless of where they sit, so Indian
    lakh grouping and western thousands grouping give the same value.
    """

    cleaned = (token or "").replace(",", "").strip()
    if not cleaned:
        raise MalformedAmountError(f"empty amount token: {token!r}")
    # Decimal() would also accept non-ASCII digits such as Devanagari.
    if not cleaned.isascii():
        raise MalformedAmountError(f"non-ASCII amount token: {token!r}")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise MalformedAmountError(f"not a decimal amount: {token!r}")
    if not value.is_finite() or value < 0:
        raise MalformedAmountError(f"not a non-negative amount: {token!r}")
    return value
