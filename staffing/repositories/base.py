from abc import ABC, abstractmethod
from datetime import date

from staffing.models.bill import Bill, BillFilter, BillStatus
from staffing.models.client import Client, CompanyKind
from staffing.models.provider import ServiceProvider


class ClientRepository(ABC):
    @abstractmethod
    def create(self, client: Client) -> Client: ...

    @abstractmethod
    def get_by_id(self, client_id: int) -> Client | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Client | None: ...

    @abstractmethod
    def list_all(self, active_only: bool = False, kind: CompanyKind | None = None) -> list[Client]: ...

    @abstractmethod
    def update(self, client: Client) -> Client: ...

    @abstractmethod
    def delete(self, client_id: int) -> None: ...


class ProviderRepository(ABC):
    @abstractmethod
    def create(self, provider: ServiceProvider) -> ServiceProvider: ...

    @abstractmethod
    def get_by_id(self, provider_id: int) -> ServiceProvider | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> ServiceProvider | None: ...

    @abstractmethod
    def list_all(self, active_only: bool = False) -> list[ServiceProvider]: ...

    @abstractmethod
    def update(self, provider: ServiceProvider) -> ServiceProvider: ...

    @abstractmethod
    def delete(self, provider_id: int) -> None: ...


class BillRepository(ABC):
    @abstractmethod
    def create(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def get_by_id(self, bill_id: int) -> Bill | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Bill | None: ...

    @abstractmethod
    def get_by_number(self, bill_number: str) -> Bill | None: ...

    @abstractmethod
    def list_filtered(self, filters: BillFilter | None = None) -> list[Bill]: ...

    @abstractmethod
    def count(self, filters: BillFilter | None = None) -> int: ...

    @abstractmethod
    def next_sequence(self) -> int: ...

    @abstractmethod
    def update(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def update_status(self, bill_id: int, status: BillStatus, paid_date: date | None) -> bool:
        """Returns False when no live bill has that id."""

    @abstractmethod
    def delete(self, bill_id: int) -> None: ...
