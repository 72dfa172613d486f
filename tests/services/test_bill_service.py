from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from staffing.constants import TZ
from staffing.models.bill import Bill, BillFilter, BillRequest, BillStatus
from staffing.models.client import Client, CompanyKind, MarkupType
from staffing.models.provider import ServiceProvider
from staffing.rates import InvalidInputError
from staffing.repositories.sqlalchemy import (
    SQLAlchemyBillRepository,
    SQLAlchemyClientRepository,
    SQLAlchemyProviderRepository,
)
from staffing.services.bill_service import BillService


def _client(**overrides):
    defaults = dict(
        id=1,
        company_name="Acme",
        markup_type=MarkupType.PERCENT,
        markup_value=Decimal("15.5"),
        commission=Decimal("8"),
    )
    defaults.update(overrides)
    return Client(**defaults)


def _stored(bill: Bill) -> Bill:
    """Echo what the repository would return after insert."""
    stored = bill.model_copy()
    stored.id = (bill.sequence or 0) + 100
    stored.uuid = f"uuid-{bill.sequence}"
    return stored


class TestCreateBills:
    def setup_method(self):
        self.bill_repo = MagicMock()
        self.client_repo = MagicMock()
        self.provider_repo = MagicMock()
        self.bill_repo.next_sequence.return_value = 0
        self.bill_repo.create.side_effect = _stored
        self.client_repo.get_by_id.return_value = _client()
        self.provider_repo.get_by_id.return_value = ServiceProvider(id=1, first_name="Maria", last_name="Silva")
        self.service = BillService(self.bill_repo, self.client_repo, self.provider_repo)

    def test_create_bill_computes_totals(self):
        bill = self.service.create_bill(1, 1, "Plumbing", Decimal("8"), Decimal("35"), due_date=date(2024, 12, 15))

        assert bill.total_client == Decimal("323.40")
        assert bill.total_provider == Decimal("257.60")
        assert bill.bill_number == "BILL-0001"
        assert bill.sequence == 0
        assert bill.status == BillStatus.PENDING
        assert bill.paid_date is None
        assert bill.due_date == date(2024, 12, 15)
        self.bill_repo.create.assert_called_once()

    def test_totals_rounded_to_cents(self):
        bill = self.service.create_bill(1, 1, "Plumbing", Decimal("4.5"), Decimal("35"))
        assert bill.total_client == Decimal("181.92")
        assert bill.total_provider == Decimal("144.90")

    @pytest.mark.parametrize(
        "hours, rate",
        [
            (Decimal("0.25"), Decimal("35.99")),
            (Decimal("0.1"), Decimal("35.33")),
            (Decimal("7.75"), Decimal("22.47")),
        ],
    )
    def test_sub_cent_base_keeps_totals_on_correct_side(self, hours, rate):
        self.client_repo.get_by_id.return_value = _client(markup_value=Decimal("0"), commission=Decimal("0"))
        bill = self.service.create_bill(1, 1, "Plumbing", hours, rate)

        assert bill.base_total == hours * rate
        assert bill.total_client >= bill.base_total
        assert bill.total_provider <= bill.base_total
        assert bill.total_client == bill.total_client.quantize(Decimal("0.01"))
        assert bill.total_provider == bill.total_provider.quantize(Decimal("0.01"))

    def test_sub_cent_base_without_pricing(self):
        self.client_repo.get_by_id.return_value = _client(markup_type=None, markup_value=None, commission=None)
        bill = self.service.create_bill(1, 1, "Plumbing", Decimal("0.25"), Decimal("35.99"))

        assert bill.total_client == Decimal("9.00")
        assert bill.total_provider == Decimal("8.99")

    def test_default_due_date(self):
        with patch("staffing.services.bill_service.settings") as mock_settings:
            mock_settings.default_due_days = 10
            mock_settings.bill_number_prefix = "BILL-"
            mock_settings.bill_number_width = 4
            bill = self.service.create_bill(1, 1, "Plumbing", Decimal("1"), Decimal("1"))
        assert bill.due_date == datetime.now(TZ).date() + timedelta(days=10)

    def test_numbering_continues_from_sequence(self):
        self.bill_repo.next_sequence.return_value = 7
        requests = [
            BillRequest(client_id=1, provider_id=1, service="A", hours_worked="1", service_rate="10"),
            BillRequest(client_id=1, provider_id=1, service="B", hours_worked="2", service_rate="10"),
        ]
        bills = self.service.create_bills(requests)
        assert [b.bill_number for b in bills] == ["BILL-0008", "BILL-0009"]
        assert [b.sequence for b in bills] == [7, 8]

    def test_custom_number_format(self):
        with patch("staffing.services.bill_service.settings") as mock_settings:
            mock_settings.default_due_days = 15
            mock_settings.bill_number_prefix = "INV-"
            mock_settings.bill_number_width = 6
            bill = self.service.create_bill(1, 1, "Plumbing", Decimal("1"), Decimal("1"))
        assert bill.bill_number == "INV-000001"

    def test_paid_request_gets_paid_date(self):
        request = BillRequest(
            client_id=1, provider_id=1, service="A", hours_worked="1", service_rate="10", status=BillStatus.PAID
        )
        bill = self.service.create_bills([request])[0]
        assert bill.paid_date == datetime.now(TZ).date()

    def test_paid_date_dropped_when_not_paid(self):
        request = BillRequest(
            client_id=1,
            provider_id=1,
            service="A",
            hours_worked="1",
            service_rate="10",
            paid_date=date(2024, 1, 1),
        )
        bill = self.service.create_bills([request])[0]
        assert bill.paid_date is None

    def test_empty_batch(self):
        assert self.service.create_bills([]) == []
        self.bill_repo.next_sequence.assert_not_called()

    @pytest.mark.parametrize(
        "hours,rate",
        [(Decimal("0"), Decimal("35")), (Decimal("-2"), Decimal("35")), (Decimal("8"), Decimal("0"))],
    )
    def test_rejects_non_positive_inputs(self, hours, rate):
        with pytest.raises(InvalidInputError):
            self.service.create_bill(1, 1, "Plumbing", hours, rate)
        self.bill_repo.create.assert_not_called()

    def test_rejects_blank_service(self):
        with pytest.raises(InvalidInputError, match="Service"):
            self.service.create_bill(1, 1, "  ", Decimal("1"), Decimal("1"))

    def test_client_not_found(self):
        self.client_repo.get_by_id.return_value = None
        with pytest.raises(ValueError, match="Client not found"):
            self.service.create_bill(1, 1, "Plumbing", Decimal("1"), Decimal("1"))
        self.bill_repo.create.assert_not_called()

    def test_supplier_cannot_be_billed(self):
        self.client_repo.get_by_id.return_value = _client(kind=CompanyKind.SUPPLIER)
        with pytest.raises(ValueError, match="Suppliers cannot be billed"):
            self.service.create_bill(1, 1, "Plumbing", Decimal("1"), Decimal("1"))
        self.bill_repo.create.assert_not_called()

    def test_provider_not_found(self):
        self.provider_repo.get_by_id.return_value = None
        with pytest.raises(ValueError, match="Service provider not found"):
            self.service.create_bill(1, 1, "Plumbing", Decimal("1"), Decimal("1"))

    def test_invalid_request_in_batch_writes_nothing(self):
        requests = [
            BillRequest(client_id=1, provider_id=1, service="A", hours_worked="1", service_rate="10"),
            BillRequest(client_id=1, provider_id=1, service="B", hours_worked="0", service_rate="10"),
        ]
        with pytest.raises(InvalidInputError):
            self.service.create_bills(requests)
        self.bill_repo.create.assert_not_called()

    def test_clients_loaded_once_per_batch(self):
        requests = [
            BillRequest(client_id=1, provider_id=1, service=str(i), hours_worked="1", service_rate="10")
            for i in range(3)
        ]
        self.service.create_bills(requests)
        self.client_repo.get_by_id.assert_called_once_with(1)
        self.provider_repo.get_by_id.assert_called_once_with(1)


class TestBillLifecycle:
    def setup_method(self):
        self.bill_repo = MagicMock()
        self.service = BillService(self.bill_repo, MagicMock(), MagicMock())

    def _bill(self, **overrides):
        defaults = dict(
            id=1,
            bill_number="BILL-0001",
            client_id=1,
            provider_id=1,
            service="Plumbing",
            hours_worked=Decimal("8"),
            service_rate=Decimal("35"),
            total_client=Decimal("323.40"),
            total_provider=Decimal("257.60"),
        )
        defaults.update(overrides)
        return Bill(**defaults)

    def test_mark_paid_sets_paid_date(self):
        bill = self.service.mark_paid(self._bill(), date(2024, 12, 10))
        assert bill.status == BillStatus.PAID
        assert bill.paid_date == date(2024, 12, 10)
        self.bill_repo.update_status.assert_called_once_with(1, BillStatus.PAID, date(2024, 12, 10))

    def test_mark_paid_defaults_to_today(self):
        bill = self.service.mark_paid(self._bill())
        assert bill.paid_date == datetime.now(TZ).date()

    def test_leaving_paid_clears_paid_date(self):
        bill = self._bill(status=BillStatus.PAID, paid_date=date(2024, 12, 10))
        bill = self.service.set_status(bill, BillStatus.PENDING)
        assert bill.paid_date is None
        self.bill_repo.update_status.assert_called_once_with(1, BillStatus.PENDING, None)

    def test_set_status_without_id(self):
        with pytest.raises(ValueError, match="without an id"):
            self.service.set_status(self._bill(id=None), BillStatus.PAID)

    def test_set_status_on_missing_bill(self):
        self.bill_repo.update_status.return_value = False
        bill = self._bill()
        with pytest.raises(ValueError, match="Bill not found"):
            self.service.set_status(bill, BillStatus.PAID)
        assert bill.status == BillStatus.PENDING
        assert bill.paid_date is None

    def test_update_bill_never_recomputes_totals(self):
        self.bill_repo.update.side_effect = lambda b: b
        bill = self.service.update_bill(self._bill(), service="Emergency Plumbing", status=BillStatus.PAID)
        assert bill.service == "Emergency Plumbing"
        assert bill.total_client == Decimal("323.40")
        assert bill.total_provider == Decimal("257.60")
        assert bill.paid_date == datetime.now(TZ).date()

    def test_update_bill_rejects_blank_service(self):
        with pytest.raises(ValueError, match="Service"):
            self.service.update_bill(self._bill(), service=" ")
        self.bill_repo.update.assert_not_called()

    def test_update_bill_due_date(self):
        self.bill_repo.update.side_effect = lambda b: b
        bill = self.service.update_bill(self._bill(), due_date=date(2025, 1, 31))
        assert bill.due_date == date(2025, 1, 31)
        assert bill.status == BillStatus.PENDING

    def test_delete_pending(self):
        self.service.delete_bill(self._bill())
        self.bill_repo.delete.assert_called_once_with(1)

    def test_delete_paid_refused(self):
        with pytest.raises(ValueError, match="Cannot delete paid bills"):
            self.service.delete_bill(self._bill(status=BillStatus.PAID))
        self.bill_repo.delete.assert_not_called()

    def test_refresh_overdue(self):
        late = self._bill(id=1, due_date=date(2024, 12, 1))
        on_time = self._bill(id=2, due_date=date(2024, 12, 31))
        undated = self._bill(id=3, due_date=None)
        self.bill_repo.list_filtered.return_value = [late, on_time, undated]

        flagged = self.service.refresh_overdue(today=date(2024, 12, 15))

        assert [b.id for b in flagged] == [1]
        assert late.status == BillStatus.OVERDUE
        self.bill_repo.list_filtered.assert_called_once_with(BillFilter(status=BillStatus.PENDING))
        self.bill_repo.update_status.assert_called_once_with(1, BillStatus.OVERDUE, None)

    def test_lookups_delegate(self):
        self.bill_repo.get_by_id.return_value = None
        self.bill_repo.get_by_uuid.return_value = None
        self.bill_repo.get_by_number.return_value = None
        self.bill_repo.count.return_value = 3
        assert self.service.get_bill(1) is None
        assert self.service.get_bill_by_uuid("u") is None
        assert self.service.get_bill_by_number("BILL-0001") is None
        assert self.service.count_bills() == 3


class TestBillServiceIntegration:
    """Runs against the in-memory schema to check numbering across batches."""

    @pytest.fixture()
    def service(self, db_connection, sample_client, sample_provider):
        client_repo = SQLAlchemyClientRepository(db_connection)
        provider_repo = SQLAlchemyProviderRepository(db_connection)
        client_repo.create(sample_client())
        provider_repo.create(sample_provider())
        return BillService(SQLAlchemyBillRepository(db_connection), client_repo, provider_repo)

    def test_batches_never_collide(self, service):
        first = service.create_bills(
            [
                BillRequest(client_id=1, provider_id=1, service="A", hours_worked="8", service_rate="35"),
                BillRequest(client_id=1, provider_id=1, service="B", hours_worked="8", service_rate="35"),
            ]
        )
        second = service.create_bills(
            [BillRequest(client_id=1, provider_id=1, service="C", hours_worked="8", service_rate="35")]
        )
        numbers = [b.bill_number for b in first + second]
        assert numbers == ["BILL-0001", "BILL-0002", "BILL-0003"]

    def test_persisted_totals(self, service):
        bill = service.create_bill(1, 1, "Plumbing", Decimal("8"), Decimal("35"))
        fetched = service.get_bill(bill.id)
        assert fetched.total_client == Decimal("323.4")
        assert fetched.total_provider == Decimal("257.6")

    def test_paid_bill_cannot_be_deleted(self, service):
        bill = service.mark_paid(service.create_bill(1, 1, "Plumbing", Decimal("8"), Decimal("35")))
        with pytest.raises(ValueError):
            service.delete_bill(bill)
        assert service.get_bill(bill.id).status == BillStatus.PAID

    def test_status_change_on_deleted_bill(self, service):
        bill = service.create_bill(1, 1, "Plumbing", Decimal("8"), Decimal("35"))
        service.delete_bill(bill)
        with pytest.raises(ValueError, match="Bill not found"):
            service.mark_paid(bill)

    def test_sub_cent_totals_persist_on_correct_side_of_base(self, service):
        bill = service.create_bill(1, 1, "Plumbing", Decimal("0.25"), Decimal("35.99"))
        fetched = service.get_bill(bill.id)
        assert fetched.total_client >= fetched.base_total
        assert fetched.total_provider <= fetched.base_total
