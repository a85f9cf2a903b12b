"""ScheduleNextPayment Use Case

After a rent charge is paid, create the next cycle's charge once it is close
enough to its due date.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.app.repositories.errors import LedgerError
from .due_dates import add_months, calculate_next_due_date
from .errors import ErrorCode
from .generate_payment import GeneratePaymentForTenant
from .dtos import (
    GeneratePaymentCommandDTO,
    GenerationAction,
    NextPaymentDTO,
    ScheduleNextPaymentCommandDTO,
)

logger = logging.getLogger(__name__)


class ScheduleNextPayment:
    """
    Use Case: Generate the cycle following a paid payment

    Business Rules:
    1. The next cycle is the tenant's due date in the month after the paid
       payment's due date
    2. It is generated only when due within window_days of today; otherwise
       the sweep or a later payment picks it up
    3. Generation is idempotent
    """

    def __init__(
        self,
        uow: UnitOfWork,
        payment_repo: PaymentRepository,
        tenant_repo: TenantRepository,
        window_days: int = 5,
    ):
        self.uow = uow
        self.payment_repo = payment_repo
        self.tenant_repo = tenant_repo
        self.window_days = window_days
        self.generate_payment = GeneratePaymentForTenant(uow, payment_repo, tenant_repo)

    async def execute(self, command: ScheduleNextPaymentCommandDTO) -> Result[NextPaymentDTO]:
        """
        Execute next cycle scheduling

        Args:
            command: ScheduleNextPaymentCommandDTO with the paid payment ID

        Returns:
            Result[NextPaymentDTO]: created, already_exists or skipped, or error
        """
        today = command.today or date.today()

        try:
            payment = await self.payment_repo.get_by_id(command.payment_id)
            if not payment:
                return Return.err(
                    Error(
                        code=ErrorCode.PAYMENT_NOT_FOUND,
                        message=f"Payment {command.payment_id} not found",
                    )
                )

            tenant_id = payment.tenant_id
            account = await self.tenant_repo.get_tenant_with_property(tenant_id)
            if not account:
                return Return.err(
                    Error(
                        code=ErrorCode.TENANT_NOT_FOUND,
                        message=f"Tenant {tenant_id} not found",
                    )
                )
        except LedgerError as e:
            return Return.err(
                Error(
                    code=ErrorCode.LEDGER_ERROR,
                    message="Failed to load payment",
                    reason=str(e),
                )
            )

        next_month = add_months(payment.due_date.replace(day=1), 1)
        next_due_date = calculate_next_due_date(account.tenant.payment_due_day, next_month)
        days_until_due = (next_due_date - today).days

        if days_until_due > self.window_days:
            logger.info(
                f"Next payment for tenant {tenant_id} not yet due "
                f"({days_until_due} days away), skipping generation"
            )
            return Return.ok(
                NextPaymentDTO(
                    tenant_id=tenant_id,
                    due_date=next_due_date,
                    action=GenerationAction.SKIPPED,
                    days_until_due=days_until_due,
                )
            )

        result = await self.generate_payment.execute(
            GeneratePaymentCommandDTO(tenant_id=tenant_id, due_date=next_due_date)
        )
        if result.is_err():
            return Return.err(result.error)

        logger.info(
            f"Generated next payment for tenant {tenant_id} due {next_due_date.isoformat()}"
        )
        return Return.ok(
            NextPaymentDTO(
                tenant_id=tenant_id,
                due_date=next_due_date,
                action=(
                    GenerationAction.CREATED
                    if result.value.created
                    else GenerationAction.ALREADY_EXISTS
                ),
                days_until_due=days_until_due,
                payment_id=result.value.payment.id,
            )
        )
