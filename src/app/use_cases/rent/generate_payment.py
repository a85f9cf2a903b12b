"""GeneratePaymentForTenant Use Case

Creates the rent charge for one tenant and due date, at most once.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.app.repositories.errors import LedgerError, DuplicateDueDateConflict
from src.domain.payment import Payment, PaymentStatus
from src.domain.property import Property
from src.domain.tenant import TenantAccount
from .dtos import GeneratePaymentCommandDTO, GeneratedPaymentDTO, payment_to_dto
from .errors import ErrorCode, TenantNotAssignable

logger = logging.getLogger(__name__)


class GeneratePaymentForTenant:
    """
    Use Case: Generate a tenant's rent charge for a due date

    Business Rules:
    1. Idempotency: one payment per (tenant_id, due_date), however often called
    2. Tenant must have an assigned property with a positive rent
    3. Amount is a snapshot of the property's current rent
    4. The unique constraint is the authority: losing an insert race is
       reported as "already exists", never as an error

    Flow:
    1. Load tenant with property (TENANT_NOT_ASSIGNABLE if unusable)
    2. Return existing payment for the same due date if found
    3. Insert pending payment
    4. Commit transaction
    5. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        payment_repo: PaymentRepository,
        tenant_repo: TenantRepository,
    ):
        self.uow = uow
        self.payment_repo = payment_repo
        self.tenant_repo = tenant_repo

    async def execute(self, command: GeneratePaymentCommandDTO) -> Result[GeneratedPaymentDTO]:
        """
        Execute rent charge generation

        Args:
            command: GeneratePaymentCommandDTO with tenant_id and due_date

        Returns:
            Result[GeneratedPaymentDTO]: created flag and payment, or error
        """
        try:
            # Step 1: Tenant must be billable
            account = await self.tenant_repo.get_tenant_with_property(command.tenant_id)
            rental = self._require_assignable(command.tenant_id, account)

            # Step 2: Existing charge for this due date is returned untouched
            existing = await self.payment_repo.find_by_tenant_and_due_date(
                command.tenant_id, command.due_date
            )
            if existing:
                return Return.ok(
                    GeneratedPaymentDTO(created=False, payment=payment_to_dto(existing))
                )

            # Step 3: Insert with a snapshot of the current rent
            payment = Payment(
                tenant_id=command.tenant_id,
                property_id=rental.id,
                amount=rental.rent_amount,
                status=PaymentStatus.PENDING,
                due_date=command.due_date,
            )

            try:
                created_payment = await self.payment_repo.create(payment)
                # Step 4: Commit transaction
                await self.uow.commit()
            except DuplicateDueDateConflict:
                await self.uow.rollback()
                return await self._resolve_conflict(command)

            logger.info(
                f"Created payment {created_payment.id} for tenant {command.tenant_id} "
                f"due {command.due_date.isoformat()} amount {created_payment.amount}"
            )

            # Step 5: Build response
            return Return.ok(
                GeneratedPaymentDTO(created=True, payment=payment_to_dto(created_payment))
            )

        except TenantNotAssignable as e:
            return Return.err(
                Error(
                    code=ErrorCode.TENANT_NOT_ASSIGNABLE,
                    message=str(e),
                    reason=e.reason,
                )
            )
        except LedgerError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.LEDGER_ERROR,
                    message=f"Failed to create payment for tenant {command.tenant_id}",
                    reason=str(e),
                )
            )

    async def _resolve_conflict(self, command: GeneratePaymentCommandDTO) -> Result[GeneratedPaymentDTO]:
        """Return the row that won a concurrent insert for the same due date"""
        winner = await self.payment_repo.find_by_tenant_and_due_date(
            command.tenant_id, command.due_date
        )
        if winner is None:
            raise LedgerError(
                f"Unique conflict for tenant {command.tenant_id} due "
                f"{command.due_date.isoformat()} but no payment found"
            )

        logger.info(
            f"Concurrent generation for tenant {command.tenant_id} due "
            f"{command.due_date.isoformat()} resolved to existing payment {winner.id}"
        )
        return Return.ok(GeneratedPaymentDTO(created=False, payment=payment_to_dto(winner)))

    @staticmethod
    def _require_assignable(tenant_id: str, account: Optional[TenantAccount]) -> Property:
        if account is None:
            raise TenantNotAssignable(tenant_id, "tenant does not exist")
        if not account.is_assignable:
            if account.assigned_property is None:
                raise TenantNotAssignable(tenant_id, "tenant has no assigned property")
            raise TenantNotAssignable(tenant_id, "property has no positive rent amount")
        return account.assigned_property
