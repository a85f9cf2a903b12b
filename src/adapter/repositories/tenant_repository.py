"""SQLAlchemy Tenant Repository Implementation

Loads tenants together with their optional property in a single query.
"""

from typing import Optional, List
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select, col
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.errors import LedgerError
from src.app.repositories.tenant_repository import TenantRepository
from src.domain.property import Property
from src.domain.tenant import Tenant, TenantAccount


class SqlAlchemyTenantRepository(TenantRepository):
    """
    SQLAlchemy implementation of TenantRepository

    Tenants are outer-joined to properties so an unassigned tenant still loads,
    with assigned_property set to None.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _accounts_query(self):
        return select(Tenant, Property).outerjoin(Property, Tenant.property_id == Property.id)

    async def list_assigned_tenants(self) -> List[TenantAccount]:
        statement = (
            self._accounts_query()
            .where(col(Tenant.property_id).is_not(None))
            .order_by(Tenant.created_at)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise LedgerError(f"Failed to list assigned tenants: {e}") from e

        return [
            TenantAccount(tenant=tenant, assigned_property=rental)
            for tenant, rental in result.all()
        ]

    async def get_tenant_with_property(self, tenant_id: str) -> Optional[TenantAccount]:
        statement = self._accounts_query().where(Tenant.id == tenant_id)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise LedgerError(f"Failed to load tenant {tenant_id}: {e}") from e

        row = result.first()
        if row is None:
            return None
        tenant, rental = row
        return TenantAccount(tenant=tenant, assigned_property=rental)
