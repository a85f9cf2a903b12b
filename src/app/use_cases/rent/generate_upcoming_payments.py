"""GenerateUpcomingPayments Use Case

Admin action: generate the current and next months' rent charges for one
tenant or for every assigned tenant.
"""

import logging
from datetime import date
from typing import List
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.app.repositories.errors import LedgerError
from src.domain.tenant import TenantAccount
from .check_missing_payments import generate_result_line
from .due_dates import add_months, calculate_next_due_date
from .errors import ErrorCode
from .generate_payment import GeneratePaymentForTenant
from .dtos import (
    GenerateUpcomingPaymentsCommandDTO,
    GenerationAction,
    UpcomingPaymentsReportDTO,
)

logger = logging.getLogger(__name__)


class GenerateUpcomingPayments:
    """
    Use Case: Generate rent charges for the next months_ahead cycles

    Business Rules:
    1. months_ahead must be between 1 and max_months_ahead
    2. A single requested tenant must exist and have a property
    3. Cycle i uses the due date following today shifted by i months;
       cycles that clamp to the same date collapse through idempotency
    4. Failures are recorded per tenant/cycle and never abort the batch
    """

    def __init__(
        self,
        uow: UnitOfWork,
        payment_repo: PaymentRepository,
        tenant_repo: TenantRepository,
        max_months_ahead: int = 12,
    ):
        self.uow = uow
        self.payment_repo = payment_repo
        self.tenant_repo = tenant_repo
        self.max_months_ahead = max_months_ahead
        self.generate_payment = GeneratePaymentForTenant(uow, payment_repo, tenant_repo)

    async def execute(
        self, command: GenerateUpcomingPaymentsCommandDTO
    ) -> Result[UpcomingPaymentsReportDTO]:
        """
        Execute upcoming payment generation

        Args:
            command: GenerateUpcomingPaymentsCommandDTO

        Returns:
            Result[UpcomingPaymentsReportDTO]: Per-cycle results or error
        """
        if not 1 <= command.months_ahead <= self.max_months_ahead:
            return Return.err(
                Error(
                    code=ErrorCode.INVALID_MONTHS_AHEAD,
                    message=f"months_ahead must be between 1 and {self.max_months_ahead}",
                    reason=f"months_ahead={command.months_ahead}",
                )
            )

        today = command.today or date.today()

        try:
            accounts = await self._load_accounts(command.tenant_id)
        except LedgerError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.LEDGER_ERROR,
                    message="Failed to fetch tenants",
                    reason=str(e),
                )
            )

        if command.tenant_id:
            if not accounts:
                return Return.err(
                    Error(
                        code=ErrorCode.TENANT_NOT_FOUND,
                        message=f"Tenant {command.tenant_id} not found",
                    )
                )
            if not accounts[0].is_assignable:
                return Return.err(
                    Error(
                        code=ErrorCode.TENANT_NOT_ASSIGNABLE,
                        message=f"Tenant {command.tenant_id} has no assigned property with a positive rent",
                    )
                )

        tenants = [
            (account.tenant.id, account.tenant.full_name, account.tenant.payment_due_day)
            for account in accounts
        ]

        results = []
        for tenant_id, tenant_name, payment_due_day in tenants:
            for offset in range(command.months_ahead):
                base_date = add_months(today, offset)
                due_date = calculate_next_due_date(payment_due_day, base_date)
                results.append(
                    await generate_result_line(
                        self.uow, self.generate_payment, tenant_id, tenant_name, due_date
                    )
                )

        report = UpcomingPaymentsReportDTO(
            tenants_processed=len(accounts),
            generated=sum(1 for r in results if r.action == GenerationAction.CREATED),
            existing=sum(1 for r in results if r.action == GenerationAction.ALREADY_EXISTS),
            errors=sum(1 for r in results if r.action == GenerationAction.ERROR),
            results=results,
        )

        logger.info(
            f"Generated payments for {report.tenants_processed} tenants "
            f"({command.months_ahead} months ahead): {report.generated} created, "
            f"{report.existing} existing, {report.errors} errors"
        )

        return Return.ok(report)

    async def _load_accounts(self, tenant_id) -> List[TenantAccount]:
        if tenant_id:
            account = await self.tenant_repo.get_tenant_with_property(tenant_id)
            return [account] if account else []
        return await self.tenant_repo.list_assigned_tenants()
