from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal

from staffing.constants import TZ
from staffing.models import round_charge, round_payout
from staffing.models.bill import Bill, BillFilter, BillRequest, BillStatus
from staffing.models.client import Client, CompanyKind
from staffing.models.provider import ServiceProvider
from staffing.numbering import format_bill_number
from staffing.rates import InvalidInputError, calculate_for_client
from staffing.repositories.base import BillRepository, ClientRepository, ProviderRepository
from staffing.settings import settings

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(TZ).date()


def _resolve_paid_date(status: BillStatus, paid_date: date | None) -> date | None:
    """A paid date exists only on Paid bills; Paid without one means today."""
    if status != BillStatus.PAID:
        return None
    return paid_date or _today()


class BillService:
    def __init__(
        self,
        bill_repo: BillRepository,
        client_repo: ClientRepository,
        provider_repo: ProviderRepository,
    ) -> None:
        self.bill_repo = bill_repo
        self.client_repo = client_repo
        self.provider_repo = provider_repo

    @staticmethod
    def _validate_request(request: BillRequest) -> None:
        if not request.service or not request.service.strip():
            raise InvalidInputError("Service description is required")
        if request.hours_worked <= 0:
            raise InvalidInputError("Hours worked must be greater than zero")
        if request.service_rate <= 0:
            raise InvalidInputError("Service rate must be greater than zero")

    def _load_parties(
        self, requests: list[BillRequest]
    ) -> tuple[dict[int, Client], dict[int, ServiceProvider]]:
        clients: dict[int, Client] = {}
        providers: dict[int, ServiceProvider] = {}
        for request in requests:
            if request.client_id not in clients:
                client = self.client_repo.get_by_id(request.client_id)
                if client is None:
                    logger.warning("Bill rejected: client %s not found", request.client_id)
                    raise ValueError("Client not found")
                if client.kind == CompanyKind.SUPPLIER:
                    logger.warning("Bill rejected: company %s is a supplier", request.client_id)
                    raise ValueError("Suppliers cannot be billed")
                clients[request.client_id] = client
            if request.provider_id not in providers:
                provider = self.provider_repo.get_by_id(request.provider_id)
                if provider is None:
                    logger.warning("Bill rejected: provider %s not found", request.provider_id)
                    raise ValueError("Service provider not found")
                providers[request.provider_id] = provider
        return clients, providers

    def create_bills(self, requests: list[BillRequest]) -> list[Bill]:
        """Price and persist a batch of bills.

        Every request is validated and priced before anything is written.
        Bill numbers continue from the persisted sequence, so numbers from
        different batches never collide.
        """
        if not requests:
            return []
        for request in requests:
            self._validate_request(request)
        clients, _ = self._load_parties(requests)

        start = self.bill_repo.next_sequence()
        pending: list[Bill] = []
        for offset, request in enumerate(requests):
            totals = calculate_for_client(clients[request.client_id], request.hours_worked, request.service_rate)
            sequence = start + offset
            due_date = request.due_date or _today() + timedelta(days=settings.default_due_days)
            pending.append(
                Bill(
                    bill_number=format_bill_number(
                        sequence, settings.bill_number_prefix, settings.bill_number_width
                    ),
                    sequence=sequence,
                    client_id=request.client_id,
                    provider_id=request.provider_id,
                    service=request.service.strip(),
                    hours_worked=request.hours_worked,
                    service_rate=request.service_rate,
                    total_client=round_charge(totals.total_client),
                    total_provider=round_payout(totals.total_provider),
                    status=request.status,
                    due_date=due_date,
                    paid_date=_resolve_paid_date(request.status, request.paid_date),
                    created_at=request.created_at,
                )
            )

        created: list[Bill] = []
        for bill in pending:
            result = self.bill_repo.create(bill)
            logger.info(
                "Bill created: id=%s, number=%s, client=%s, total_client=%s, total_provider=%s",
                result.id,
                result.bill_number,
                result.client_id,
                result.total_client,
                result.total_provider,
            )
            created.append(result)
        return created

    def create_bill(
        self,
        client_id: int,
        provider_id: int,
        service: str,
        hours_worked: Decimal,
        service_rate: Decimal,
        due_date: date | None = None,
    ) -> Bill:
        request = BillRequest(
            client_id=client_id,
            provider_id=provider_id,
            service=service,
            hours_worked=hours_worked,
            service_rate=service_rate,
            due_date=due_date,
        )
        return self.create_bills([request])[0]

    def update_bill(
        self,
        bill: Bill,
        service: str | None = None,
        status: BillStatus | None = None,
        due_date: date | None = None,
        paid_date: date | None = None,
    ) -> Bill:
        """Edit a bill's descriptive fields. Totals stay as they were priced."""
        if service is not None:
            if not service.strip():
                raise ValueError("Service description is required")
            bill.service = service.strip()
        if due_date is not None:
            bill.due_date = due_date
        if status is not None:
            bill.status = status
        bill.paid_date = _resolve_paid_date(bill.status, paid_date or bill.paid_date)

        result = self.bill_repo.update(bill)
        logger.info("Bill updated: id=%s, status=%s", result.id, result.status.value)
        return result

    def set_status(self, bill: Bill, status: BillStatus, paid_date: date | None = None) -> Bill:
        if bill.id is None:
            raise ValueError("Cannot change status of bill without an id")
        resolved = _resolve_paid_date(status, paid_date)
        if not self.bill_repo.update_status(bill.id, status, resolved):
            logger.warning("Status change refused: bill %s not found", bill.id)
            raise ValueError("Bill not found")
        bill.status = status
        bill.paid_date = resolved
        logger.info("Bill %s marked as %s", bill.id, status.value)
        return bill

    def mark_paid(self, bill: Bill, paid_date: date | None = None) -> Bill:
        return self.set_status(bill, BillStatus.PAID, paid_date)

    def refresh_overdue(self, today: date | None = None) -> list[Bill]:
        """Flag pending bills whose due date has passed as overdue."""
        today = today or _today()
        flagged: list[Bill] = []
        for bill in self.bill_repo.list_filtered(BillFilter(status=BillStatus.PENDING)):
            if bill.due_date is not None and bill.due_date < today:
                flagged.append(self.set_status(bill, BillStatus.OVERDUE))
        if flagged:
            logger.info("Flagged %d bills as overdue", len(flagged))
        return flagged

    def list_bills(self, filters: BillFilter | None = None) -> list[Bill]:
        result = self.bill_repo.list_filtered(filters)
        logger.debug("Listed %d bills", len(result))
        return result

    def count_bills(self, filters: BillFilter | None = None) -> int:
        return self.bill_repo.count(filters)

    def get_bill(self, bill_id: int) -> Bill | None:
        result = self.bill_repo.get_by_id(bill_id)
        logger.debug("get_bill id=%s found=%s", bill_id, result is not None)
        return result

    def get_bill_by_uuid(self, uuid: str) -> Bill | None:
        result = self.bill_repo.get_by_uuid(uuid)
        logger.debug("get_bill_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def get_bill_by_number(self, bill_number: str) -> Bill | None:
        result = self.bill_repo.get_by_number(bill_number)
        logger.debug("get_bill_by_number number=%s found=%s", bill_number, result is not None)
        return result

    def delete_bill(self, bill: Bill) -> None:
        if bill.id is None:
            raise ValueError("Cannot delete bill without an id")
        if bill.status == BillStatus.PAID:
            logger.warning("Delete refused: bill %s is paid", bill.id)
            raise ValueError("Cannot delete paid bills")
        self.bill_repo.delete(bill.id)
        logger.info("Bill %s soft-deleted", bill.id)
