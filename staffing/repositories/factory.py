from staffing.repositories.base import BillRepository, ClientRepository, ProviderRepository


def get_client_repository() -> ClientRepository:
    from staffing.db import get_connection
    from staffing.repositories.sqlalchemy import SQLAlchemyClientRepository

    return SQLAlchemyClientRepository(get_connection())


def get_provider_repository() -> ProviderRepository:
    from staffing.db import get_connection
    from staffing.repositories.sqlalchemy import SQLAlchemyProviderRepository

    return SQLAlchemyProviderRepository(get_connection())


def get_bill_repository() -> BillRepository:
    from staffing.db import get_connection
    from staffing.repositories.sqlalchemy import SQLAlchemyBillRepository

    return SQLAlchemyBillRepository(get_connection())
