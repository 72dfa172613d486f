from __future__ import annotations

import logging
from decimal import Decimal

from staffing.models.client import Client, CompanyKind, EntityType, MarkupType
from staffing.repositories.base import ClientRepository

logger = logging.getLogger(__name__)


def _parse_markup_type(markup_type: MarkupType | str | None) -> MarkupType | None:
    if markup_type is None or markup_type == "":
        return None
    try:
        return MarkupType(markup_type)
    except ValueError:
        logger.warning("Rejected client: invalid markup type %r", markup_type)
        raise ValueError("Markup type must be Percent or Dollar") from None


def _parse_kind(kind: CompanyKind | str) -> CompanyKind:
    try:
        return CompanyKind(kind)
    except ValueError:
        logger.warning("Rejected company: invalid kind %r", kind)
        raise ValueError("Kind must be client or supplier") from None


def _parse_entity(entity: EntityType | str) -> EntityType:
    try:
        return EntityType(entity)
    except ValueError:
        logger.warning("Rejected client: invalid entity %r", entity)
        raise ValueError("Entity must be Corporation, LLC, or Partnership") from None


def _check_rates(markup_value: Decimal | None, commission: Decimal | None) -> None:
    if markup_value is not None and markup_value < 0:
        logger.warning("Rejected client: negative markup %s", markup_value)
        raise ValueError("Markup value cannot be negative")
    if commission is not None and not (0 <= commission <= 100):
        logger.warning("Rejected client: commission %s out of range", commission)
        raise ValueError("Commission must be between 0 and 100")


class ClientService:
    def __init__(self, repo: ClientRepository) -> None:
        self.repo = repo

    def create_client(
        self,
        company_name: str,
        entity: EntityType | str = EntityType.CORPORATION,
        markup_type: MarkupType | str | None = None,
        markup_value: Decimal | None = None,
        commission: Decimal | None = None,
        city: str = "",
        state: str = "",
        internal_notes: str = "",
        kind: CompanyKind | str = CompanyKind.CLIENT,
    ) -> Client:
        if not company_name or not company_name.strip():
            raise ValueError("Company name is required")
        parsed_markup = _parse_markup_type(markup_type)
        _check_rates(markup_value, commission)

        client = Client(
            company_name=company_name.strip(),
            kind=_parse_kind(kind),
            entity=_parse_entity(entity),
            city=city,
            state=state,
            markup_type=parsed_markup,
            markup_value=markup_value,
            commission=commission,
            internal_notes=internal_notes,
        )
        result = self.repo.create(client)
        logger.info("Company created: id=%s, kind=%s, name=%s", result.id, result.kind.value, result.company_name)
        return result

    def list_clients(self, active_only: bool = False, kind: CompanyKind | None = None) -> list[Client]:
        """List companies. Without ``kind`` both clients and suppliers are returned."""
        result = self.repo.list_all(active_only=active_only, kind=kind)
        logger.debug("Listed %d companies (active_only=%s, kind=%s)", len(result), active_only, kind)
        return result

    def list_suppliers(self, active_only: bool = False) -> list[Client]:
        return self.list_clients(active_only=active_only, kind=CompanyKind.SUPPLIER)

    def create_supplier(self, company_name: str, **fields) -> Client:
        return self.create_client(company_name, kind=CompanyKind.SUPPLIER, **fields)

    def get_client(self, client_id: int) -> Client | None:
        result = self.repo.get_by_id(client_id)
        logger.debug("get_client id=%s found=%s", client_id, result is not None)
        return result

    def get_client_by_uuid(self, uuid: str) -> Client | None:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_client_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def update_client(self, client: Client) -> Client:
        """Persist changes to a client's profile and pricing.

        Existing bills keep the totals computed when they were created.
        """
        client.markup_type = _parse_markup_type(client.markup_type)
        _check_rates(client.markup_value, client.commission)
        result = self.repo.update(client)
        logger.info("Client updated: id=%s, name=%s", result.id, result.company_name)
        return result

    def set_active(self, client: Client, active: bool) -> Client:
        client.active = active
        result = self.repo.update(client)
        logger.info("Client %s marked %s", result.id, "active" if active else "inactive")
        return result

    def delete_client(self, client_id: int) -> None:
        self.repo.delete(client_id)
        logger.info("Client %s soft-deleted", client_id)
