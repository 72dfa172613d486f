from zoneinfo import ZoneInfo

from staffing.models.bill import BillStatus
from staffing.models.client import EntityType, MarkupType

TZ = ZoneInfo("America/New_York")

STATUS_LABELS = {
    BillStatus.PENDING: "Pending",
    BillStatus.PAID: "Paid",
    BillStatus.OVERDUE: "Overdue",
}

STATUS_STYLES = {
    BillStatus.PENDING: "yellow",
    BillStatus.PAID: "green",
    BillStatus.OVERDUE: "red",
}

MARKUP_LABELS = {MarkupType.PERCENT: "Percent (%)", MarkupType.DOLLAR: "Flat ($)"}

ENTITY_CHOICES = [e.value for e in EntityType]


def format_markup(markup_type: MarkupType | None, markup_value) -> str:
    if markup_type is None or markup_value is None:
        return "-"
    if markup_type == MarkupType.PERCENT:
        return f"{markup_value}%"
    return f"+${markup_value}"
