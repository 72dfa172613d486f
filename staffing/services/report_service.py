from __future__ import annotations

import calendar
import logging
from datetime import datetime, time

from staffing.aggregation import aggregate_bills
from staffing.constants import TZ
from staffing.models.bill import BillFilter
from staffing.models.report import BillReport
from staffing.repositories.base import BillRepository
from staffing.settings import settings

logger = logging.getLogger(__name__)


def month_range(year: int, month: int) -> tuple[datetime, datetime]:
    """First and last instant of a calendar month, in the business timezone."""
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=TZ)
    end = datetime.combine(start.date().replace(day=last_day), time.max, tzinfo=TZ)
    return start, end


class ReportService:
    def __init__(self, bill_repo: BillRepository) -> None:
        self.bill_repo = bill_repo

    def build_report(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        client_id: int | None = None,
    ) -> BillReport:
        bills = self.bill_repo.list_filtered(
            BillFilter(start_date=start_date, end_date=end_date, client_id=client_id)
        )
        report = aggregate_bills(
            bills,
            top_n=settings.report_top_clients,
            top_providers_n=settings.report_top_providers,
        )
        logger.info(
            "Report built: bills=%d, revenue=%s, realized=%s, range=%s..%s",
            report.bill_count,
            report.total_revenue,
            report.realized_revenue,
            start_date,
            end_date,
        )
        return report

    def monthly_report(self, year: int | None = None, month: int | None = None) -> BillReport:
        now = datetime.now(TZ)
        start, end = month_range(year or now.year, month or now.month)
        return self.build_report(start, end)
