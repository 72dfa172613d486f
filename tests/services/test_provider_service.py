from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from staffing.models.provider import ServiceProvider
from staffing.services.provider_service import ProviderService


class TestProviderService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.mock_repo.create.side_effect = lambda p: p.model_copy(update={"id": 1})
        self.mock_repo.update.side_effect = lambda p: p
        self.service = ProviderService(self.mock_repo)

    def test_create_provider(self):
        provider = self.service.create_provider("Maria", "Silva", Decimal("35"), services=["Plumbing"])
        assert provider.id == 1
        assert provider.services == ["Plumbing"]
        assert provider.hourly_rate == Decimal("35")

    def test_names_required(self):
        with pytest.raises(ValueError, match="First and last name"):
            self.service.create_provider("Maria", "", Decimal("35"))

    @pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-10")])
    def test_rate_must_be_positive(self, rate):
        with pytest.raises(ValueError, match="Hourly rate"):
            self.service.create_provider("Maria", "Silva", rate)
        self.mock_repo.create.assert_not_called()

    def test_update_rejects_bad_rate(self):
        provider = ServiceProvider(id=1, first_name="Maria", last_name="Silva", hourly_rate=Decimal("0"))
        with pytest.raises(ValueError):
            self.service.update_provider(provider)

    def test_update(self):
        provider = ServiceProvider(id=1, first_name="Maria", last_name="Silva", hourly_rate=Decimal("40"))
        assert self.service.update_provider(provider).hourly_rate == Decimal("40")

    def test_list_get_delete(self):
        self.mock_repo.list_all.return_value = []
        self.mock_repo.get_by_id.return_value = None
        assert self.service.list_providers() == []
        assert self.service.get_provider(5) is None
        self.service.delete_provider(5)
        self.mock_repo.delete.assert_called_once_with(5)
