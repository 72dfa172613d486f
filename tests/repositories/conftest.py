import pytest
from sqlalchemy import Connection

from staffing.repositories.sqlalchemy import (
    SQLAlchemyBillRepository,
    SQLAlchemyClientRepository,
    SQLAlchemyProviderRepository,
)


@pytest.fixture()
def client_repo(db_connection: Connection) -> SQLAlchemyClientRepository:
    return SQLAlchemyClientRepository(db_connection)


@pytest.fixture()
def provider_repo(db_connection: Connection) -> SQLAlchemyProviderRepository:
    return SQLAlchemyProviderRepository(db_connection)


@pytest.fixture()
def bill_repo(db_connection: Connection) -> SQLAlchemyBillRepository:
    return SQLAlchemyBillRepository(db_connection)
