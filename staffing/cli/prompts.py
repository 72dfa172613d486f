from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import questionary
from rich.console import Console

from staffing.models import parse_decimal

console = Console()


def ask_decimal(
    message: str,
    minimum: Decimal | None = None,
    maximum: Decimal | None = None,
    optional: bool = False,
    strict_minimum: bool = False,
) -> Decimal | None:
    """Prompt until the user types a number in range. Blank returns None when optional."""
    while True:
        raw = questionary.text(message).ask()
        if raw is None:
            return None
        if optional and not raw.strip():
            return None
        value = parse_decimal(raw)
        if value is not None:
            too_low = minimum is not None and (value <= minimum if strict_minimum else value < minimum)
            too_high = maximum is not None and value > maximum
            if not too_low and not too_high:
                return value
        console.print("[red]Invalid value. Try again.[/red]")


def ask_date(message: str) -> date | None:
    """Prompt for an optional date in YYYY-MM-DD form."""
    while True:
        raw = questionary.text(message).ask()
        if not raw or not raw.strip():
            return None
        try:
            return datetime.strptime(raw.strip(), "%Y-%m-%d").date()
        except ValueError:
            console.print("[red]Invalid date. Use YYYY-MM-DD (e.g. 2025-03-10).[/red]")
