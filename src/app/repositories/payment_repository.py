"""Payment Repository Interface

Defines the contract for the rent payment ledger.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, List
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence

    The storage layer enforces uniqueness on (tenant_id, due_date); create()
    reports a violation as DuplicateDueDateConflict.
    """

    @abstractmethod
    async def find_by_tenant_and_due_date(
        self, tenant_id: str, due_date: date
    ) -> Optional[Payment]:
        """
        Retrieve the payment for an exact tenant and due date

        Args:
            tenant_id: Tenant identifier
            due_date: Calendar due date (exact match)

        Returns:
            Payment if found, None otherwise

        Raises:
            LedgerError: If the read fails
        """
        pass

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Insert a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment

        Raises:
            DuplicateDueDateConflict: If a payment exists for the same tenant/due date
            LedgerError: If the write fails for any other reason
        """
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        """
        Retrieve payment by ID

        Args:
            payment_id: Payment ID

        Returns:
            Payment if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_tenant(
        self, tenant_id: str, limit: int = 50, offset: int = 0
    ) -> List[Payment]:
        """
        Retrieve a tenant's payments, most recent due date first

        Args:
            tenant_id: Tenant identifier
            limit: Maximum number of payments to return
            offset: Offset for pagination

        Returns:
            List of payments
        """
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        """
        Persist status changes of an existing payment

        Args:
            payment: Payment entity with updated values

        Returns:
            Updated Payment
        """
        pass
