"""Tenant Repository Interface

Read access to tenants and their assigned properties.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.tenant import TenantAccount


class TenantRepository(ABC):
    """
    Repository interface for tenant lookups used by rent generation
    """

    @abstractmethod
    async def list_assigned_tenants(self) -> List[TenantAccount]:
        """
        Retrieve all tenants that have a property assigned

        Used by the missing payment sweep to process all billable tenants.

        Returns:
            List of tenant accounts with their property

        Raises:
            LedgerError: If the read fails
        """
        pass

    @abstractmethod
    async def get_tenant_with_property(self, tenant_id: str) -> Optional[TenantAccount]:
        """
        Retrieve a tenant together with its assigned property

        Args:
            tenant_id: Tenant identifier

        Returns:
            TenantAccount (assigned_property may be None) if the tenant exists,
            None otherwise

        Raises:
            LedgerError: If the read fails
        """
        pass
