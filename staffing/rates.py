"""Bill totals: base charge, client markup and provider commission.

All arithmetic is exact ``Decimal``; rounding to cents happens when a bill is
persisted, never here.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel

from staffing.models.client import Client, MarkupType

HUNDRED = Decimal("100")

Number = Decimal | int | float | str


class InvalidInputError(ValueError):
    """Raised when a calculation precondition is violated."""


class BillTotals(BaseModel):
    base: Decimal
    total_client: Decimal
    total_provider: Decimal

    @property
    def margin(self) -> Decimal:
        return self.total_client - self.total_provider


def _as_decimal(value: Number, name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a number")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from None
    if not result.is_finite():
        raise InvalidInputError(f"{name} must be finite")
    return result


def calculate_totals(
    hours_worked: Number,
    service_rate: Number,
    markup_type: MarkupType | str | None = None,
    markup_value: Number | None = None,
    commission: Number | None = None,
) -> BillTotals:
    """Compute the client-facing and provider-facing totals for one bill.

    ``total_client`` is the base charge plus the client's markup, either a
    percentage of the base or a flat dollar add-on. ``total_provider`` is the
    base charge minus the commission percentage. A markup type without a
    value, or no markup type, leaves ``total_client`` at the base.
    """
    hours = _as_decimal(hours_worked, "hours_worked")
    rate = _as_decimal(service_rate, "service_rate")
    if hours <= 0:
        raise InvalidInputError("hours_worked must be greater than zero")
    if rate <= 0:
        raise InvalidInputError("service_rate must be greater than zero")

    if markup_type is not None and not isinstance(markup_type, MarkupType):
        try:
            markup_type = MarkupType(markup_type)
        except ValueError:
            raise InvalidInputError("Markup type must be Percent or Dollar") from None

    base = hours * rate

    total_client = base
    if markup_type is not None and markup_value is not None:
        markup = _as_decimal(markup_value, "markup_value")
        if markup < 0:
            raise InvalidInputError("markup_value cannot be negative")
        if markup_type == MarkupType.PERCENT:
            total_client = base * (1 + markup / HUNDRED)
        else:
            total_client = base + markup

    total_provider = base
    if commission is not None:
        pct = _as_decimal(commission, "commission")
        if pct < 0 or pct > HUNDRED:
            raise InvalidInputError("commission must be between 0 and 100")
        total_provider = base * (1 - pct / HUNDRED)

    return BillTotals(base=base, total_client=total_client, total_provider=total_provider)


def calculate_for_client(client: Client, hours_worked: Number, service_rate: Number) -> BillTotals:
    return calculate_totals(
        hours_worked,
        service_rate,
        markup_type=client.markup_type,
        markup_value=client.markup_value,
        commission=client.commission,
    )
