from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class ServiceProvider(BaseModel):
    id: int | None = None
    uuid: str = ""
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    services: list[str] = []
    hourly_rate: Decimal = Decimal("0")
    active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
