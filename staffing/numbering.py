from staffing.rates import InvalidInputError

DEFAULT_PREFIX = "BILL-"
DEFAULT_WIDTH = 4


def format_bill_number(index: int, prefix: str = DEFAULT_PREFIX, width: int = DEFAULT_WIDTH) -> str:
    """Format a zero-based batch index as a bill number: 0 -> 'BILL-0001'.

    Numbers are unique within one batch only. To stay unique across batches,
    offset ``index`` by a persisted counter (see ``BillRepository.next_sequence``).
    Past ``10**width - 1`` the number simply grows wider.
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidInputError(f"bill index must be an integer, got {index!r}")
    if index < 0:
        raise InvalidInputError("bill index cannot be negative")
    return f"{prefix}{index + 1:0{width}d}"


def number_batch(start: int, count: int, prefix: str = DEFAULT_PREFIX, width: int = DEFAULT_WIDTH) -> list[str]:
    return [format_bill_number(start + i, prefix, width) for i in range(count)]
