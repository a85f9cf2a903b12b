"""SQLAlchemy Payment Repository Implementation

Implements the rent payment ledger using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import date
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.errors import LedgerError, DuplicateDueDateConflict
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment

UNIQUE_DUE_DATE_CONSTRAINT = "uq_payments_tenant_due_date"


def is_due_date_conflict(error: IntegrityError) -> bool:
    """
    Check whether an IntegrityError comes from the (tenant_id, due_date) unique key

    PostgreSQL reports the constraint name, SQLite only the column list.
    """
    message = str(error.orig)
    return (
        UNIQUE_DUE_DATE_CONSTRAINT in message
        or "payments.tenant_id, payments.due_date" in message
    )


class SqlAlchemyPaymentRepository(PaymentRepository):
    """
    SQLAlchemy implementation of PaymentRepository

    Features:
    - Unique (tenant_id, due_date) violations surface as DuplicateDueDateConflict
    - Driver errors are wrapped in LedgerError
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_tenant_and_due_date(
        self, tenant_id: str, due_date: date
    ) -> Optional[Payment]:
        statement = select(Payment).where(
            Payment.tenant_id == tenant_id,
            Payment.due_date == due_date,
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise LedgerError(f"Failed to look up payment for tenant {tenant_id}: {e}") from e
        return result.scalar_one_or_none()

    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        The insert is flushed immediately so a duplicate due date is detected
        here rather than at commit time.

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        tenant_id = payment.tenant_id
        due_date = payment.due_date

        self.session.add(payment)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if is_due_date_conflict(e):
                raise DuplicateDueDateConflict(tenant_id, due_date) from e
            raise LedgerError(f"Payment insert rejected for tenant {tenant_id}: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise LedgerError(f"Failed to insert payment for tenant {tenant_id}: {e}") from e

        await self.session.refresh(payment)
        return payment

    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        statement = select(Payment).where(Payment.id == payment_id)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise LedgerError(f"Failed to load payment {payment_id}: {e}") from e
        return result.scalar_one_or_none()

    async def list_by_tenant(
        self, tenant_id: str, limit: int = 50, offset: int = 0
    ) -> List[Payment]:
        statement = (
            select(Payment)
            .where(Payment.tenant_id == tenant_id)
            .order_by(Payment.due_date.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise LedgerError(f"Failed to list payments for tenant {tenant_id}: {e}") from e
        return list(result.scalars().all())

    async def update(self, payment: Payment) -> Payment:
        """
        Update existing payment

        Args:
            payment: Payment entity with updated values

        Returns:
            Updated Payment
        """
        self.session.add(payment)
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise LedgerError(f"Failed to update payment {payment.id}: {e}") from e

        await self.session.refresh(payment)
        return payment
