from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class MarkupType(str, Enum):
    PERCENT = "Percent"
    DOLLAR = "Dollar"


class CompanyKind(str, Enum):
    CLIENT = "client"
    SUPPLIER = "supplier"


class EntityType(str, Enum):
    CORPORATION = "Corporation"
    LLC = "LLC"
    PARTNERSHIP = "Partnership"


class Client(BaseModel):
    id: int | None = None
    uuid: str = ""
    company_name: str
    kind: CompanyKind = CompanyKind.CLIENT
    entity: EntityType = EntityType.CORPORATION
    city: str = ""
    state: str = ""
    markup_type: MarkupType | None = None
    markup_value: Decimal | None = Field(default=None, ge=0)
    commission: Decimal | None = Field(default=None, ge=0, le=100)  # percent
    internal_notes: str = ""
    active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
