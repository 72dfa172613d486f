import questionary
from rich.console import Console

from staffing.cli.bill_menu import create_bill_menu, list_bills_menu
from staffing.cli.client_menu import create_client_menu, list_clients_menu
from staffing.cli.provider_menu import create_provider_menu, list_providers_menu
from staffing.cli.report_menu import report_menu
from staffing.models.client import CompanyKind
from staffing.repositories.factory import (
    get_bill_repository,
    get_client_repository,
    get_provider_repository,
)
from staffing.services.bill_service import BillService
from staffing.services.client_service import ClientService
from staffing.services.provider_service import ProviderService
from staffing.services.report_service import ReportService

console = Console()


def _build_services() -> tuple[ClientService, ProviderService, BillService, ReportService]:
    client_repo = get_client_repository()
    provider_repo = get_provider_repository()
    bill_repo = get_bill_repository()
    return (
        ClientService(client_repo),
        ProviderService(provider_repo),
        BillService(bill_repo, client_repo, provider_repo),
        ReportService(bill_repo),
    )


def main_menu() -> None:
    client_service, provider_service, bill_service, report_service = _build_services()

    flagged = bill_service.refresh_overdue()
    console.print()
    console.print("[bold]Staffing Back-Office[/bold]", style="cyan")
    if flagged:
        console.print(f"[red]{len(flagged)} bill(s) became overdue.[/red]")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "List Bills",
                "Create Bill",
                "List Clients",
                "Add Client",
                "List Suppliers",
                "Add Supplier",
                "List Providers",
                "Add Provider",
                "Revenue Report",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "List Bills":
            list_bills_menu(bill_service, client_service, provider_service)
        elif choice == "Create Bill":
            create_bill_menu(bill_service, client_service, provider_service)
        elif choice == "List Clients":
            list_clients_menu(client_service)
        elif choice == "Add Client":
            create_client_menu(client_service)
        elif choice == "List Suppliers":
            list_clients_menu(client_service, CompanyKind.SUPPLIER)
        elif choice == "Add Supplier":
            create_client_menu(client_service, CompanyKind.SUPPLIER)
        elif choice == "List Providers":
            list_providers_menu(provider_service)
        elif choice == "Add Provider":
            create_provider_menu(provider_service)
        elif choice == "Revenue Report":
            report_menu(report_service, client_service, provider_service)
