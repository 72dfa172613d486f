from __future__ import annotations

from datetime import datetime

import questionary
from rich.console import Console
from rich.table import Table

from staffing.constants import STATUS_LABELS, TZ
from staffing.models import format_usd
from staffing.models.report import BillReport
from staffing.services.client_service import ClientService
from staffing.services.provider_service import ProviderService
from staffing.services.report_service import ReportService

console = Console()

THIS_MONTH = "This month"
ALL_TIME = "All time"
PICK_MONTH = "Pick a month"


def _ask_month() -> tuple[int, int] | None:
    while True:
        raw = questionary.text("Month (YYYY-MM, e.g. 2024-12):").ask()
        if not raw:
            return None
        try:
            parsed = datetime.strptime(raw.strip(), "%Y-%m")
            return parsed.year, parsed.month
        except ValueError:
            console.print("[red]Invalid format. Use YYYY-MM.[/red]")


def render_report(report: BillReport, client_names: dict, provider_names: dict) -> None:
    summary = Table(title="Summary", show_header=False)
    summary.add_column("Metric", style="dim")
    summary.add_column("Value", justify="right")
    summary.add_row("Bills", str(report.bill_count))
    summary.add_row("Total revenue", format_usd(report.total_revenue))
    summary.add_row("Realized revenue", format_usd(report.realized_revenue))
    summary.add_row("Provider payments", format_usd(report.provider_payments))
    summary.add_row("Profit", format_usd(report.profit))
    summary.add_row("Profit margin", f"{report.profit_margin}%")
    summary.add_row("Average bill", format_usd(report.average_bill_value))
    console.print(summary)

    by_status = Table(title="By Status")
    by_status.add_column("Status")
    by_status.add_column("Bills", justify="right")
    by_status.add_column("Total", justify="right")
    for status, entry in report.by_status.items():
        by_status.add_row(STATUS_LABELS[status], str(entry.count), format_usd(entry.total_client))
    console.print(by_status)

    if report.top_clients:
        clients = Table(title="Top Clients")
        clients.add_column("Client")
        clients.add_column("Paid bills", justify="right")
        clients.add_column("Revenue", justify="right")
        for c in report.top_clients:
            clients.add_row(client_names.get(c.client_id, str(c.client_id)), str(c.bill_count), format_usd(c.revenue))
        console.print(clients)

    if report.top_providers:
        providers = Table(title="Top Providers")
        providers.add_column("Provider")
        providers.add_column("Bills", justify="right")
        providers.add_column("Earnings", justify="right")
        for p in report.top_providers:
            providers.add_row(
                provider_names.get(p.provider_id, str(p.provider_id)), str(p.bill_count), format_usd(p.earnings)
            )
        console.print(providers)


def report_menu(
    report_service: ReportService,
    client_service: ClientService,
    provider_service: ProviderService,
) -> None:
    period = questionary.select("Period:", choices=[THIS_MONTH, PICK_MONTH, ALL_TIME]).ask()
    if period is None:
        return

    if period == THIS_MONTH:
        now = datetime.now(TZ)
        report = report_service.monthly_report(now.year, now.month)
    elif period == PICK_MONTH:
        picked = _ask_month()
        if picked is None:
            return
        report = report_service.monthly_report(*picked)
    else:
        report = report_service.build_report()

    client_names = {c.id: c.company_name for c in client_service.list_clients()}
    provider_names = {p.id: p.full_name for p in provider_service.list_providers()}

    console.print()
    console.print(f"[bold]Revenue Report - {period}[/bold]", style="cyan")
    render_report(report, client_names, provider_names)
