from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation

from staffing.settings import settings

CENT = Decimal("0.01")


def quantize_money(value: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round a monetary amount to cents, half up by default: 181.9125 -> 181.91"""
    return value.quantize(CENT, rounding=rounding)


def round_charge(value: Decimal) -> Decimal:
    """Round what a client is charged up to the next cent, so it never drops below the base."""
    return quantize_money(value, ROUND_CEILING)


def round_payout(value: Decimal) -> Decimal:
    """Round what a provider is paid down to the cent, so it never exceeds the base."""
    return quantize_money(value, ROUND_FLOOR)


def format_usd(value: Decimal | int | float, symbol: str | None = None) -> str:
    """Format an amount as a dollar string: Decimal('2850.5') -> '$2,850.50'"""
    symbol = settings.currency_symbol if symbol is None else symbol
    amount = quantize_money(Decimal(str(value)))
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def parse_decimal(text: str) -> Decimal | None:
    """Parse a user-typed amount into a Decimal. Returns None on invalid input.

    Accepts formats like '35', '35.50', '$1,250.00', '15.5%'.
    """
    text = text.strip().replace("$", "").replace(",", "").rstrip("%").strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value
