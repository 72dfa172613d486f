from __future__ import annotations

import logging
from decimal import Decimal

from staffing.models.provider import ServiceProvider
from staffing.repositories.base import ProviderRepository

logger = logging.getLogger(__name__)


class ProviderService:
    def __init__(self, repo: ProviderRepository) -> None:
        self.repo = repo

    def create_provider(
        self,
        first_name: str,
        last_name: str,
        hourly_rate: Decimal,
        services: list[str] | None = None,
        email: str = "",
        phone: str = "",
    ) -> ServiceProvider:
        if not first_name or not last_name:
            raise ValueError("First and last name are required")
        if hourly_rate <= 0:
            logger.warning("Rejected provider %s %s: hourly rate %s", first_name, last_name, hourly_rate)
            raise ValueError("Hourly rate must be greater than zero")

        provider = ServiceProvider(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            services=services or [],
            hourly_rate=hourly_rate,
        )
        result = self.repo.create(provider)
        logger.info("Provider created: id=%s, name=%s", result.id, result.full_name)
        return result

    def list_providers(self, active_only: bool = False) -> list[ServiceProvider]:
        result = self.repo.list_all(active_only=active_only)
        logger.debug("Listed %d providers (active_only=%s)", len(result), active_only)
        return result

    def get_provider(self, provider_id: int) -> ServiceProvider | None:
        result = self.repo.get_by_id(provider_id)
        logger.debug("get_provider id=%s found=%s", provider_id, result is not None)
        return result

    def update_provider(self, provider: ServiceProvider) -> ServiceProvider:
        if provider.hourly_rate <= 0:
            raise ValueError("Hourly rate must be greater than zero")
        result = self.repo.update(provider)
        logger.info("Provider updated: id=%s, name=%s", result.id, result.full_name)
        return result

    def delete_provider(self, provider_id: int) -> None:
        self.repo.delete(provider_id)
        logger.info("Provider %s soft-deleted", provider_id)
