"""CheckMissingPayments Use Case

Self-healing sweep: creates every rent charge that should already exist for
assigned tenants. Safe to re-run; one tenant's failure never stops the sweep.
"""

import logging
import time
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.app.repositories.errors import LedgerError
from .due_dates import calculate_next_due_date
from .errors import ErrorCode
from .generate_payment import GeneratePaymentForTenant
from .dtos import (
    CheckMissingPaymentsCommandDTO,
    GeneratePaymentCommandDTO,
    GenerationAction,
    MissingPaymentsReportDTO,
    PaymentGenerationResultDTO,
)

logger = logging.getLogger(__name__)


async def generate_result_line(
    uow: UnitOfWork,
    generate_payment: GeneratePaymentForTenant,
    tenant_id: str,
    tenant_name: str,
    due_date: date,
) -> PaymentGenerationResultDTO:
    """
    Run one generation and turn its outcome into a report line

    Unexpected exceptions are rolled back and recorded as errors so a batch can
    continue with the next tenant.
    """
    line = PaymentGenerationResultDTO(
        tenant_id=tenant_id,
        tenant_name=tenant_name,
        due_date=due_date,
        action=GenerationAction.ERROR,
    )

    try:
        result = await generate_payment.execute(
            GeneratePaymentCommandDTO(tenant_id=tenant_id, due_date=due_date)
        )
    except Exception as e:
        await uow.rollback()
        logger.error(f"Unexpected error generating payment for tenant {tenant_id}: {e}")
        line.error_code = ErrorCode.UNEXPECTED_ERROR
        line.error = str(e)
        return line

    if result.is_err():
        logger.warning(
            f"Payment generation failed for tenant {tenant_id} due "
            f"{due_date.isoformat()}: {result.error.message} ({result.error.reason})"
        )
        line.error_code = result.error.code
        line.error = result.error.message
        if result.error.reason:
            line.error = f"{result.error.message}: {result.error.reason}"
        return line

    line.payment_id = result.value.payment.id
    line.action = (
        GenerationAction.CREATED if result.value.created else GenerationAction.ALREADY_EXISTS
    )
    return line


class CheckMissingPayments:
    """
    Use Case: Backfill rent charges that are already due

    Business Rules:
    1. Only tenants with an assigned property are examined
    2. A tenant is skipped while its computed due date is after today
    3. Generation is idempotent, so re-running the sweep creates nothing new
    4. Failures are recorded per tenant; the sweep always completes

    Flow:
    1. Fetch assigned tenants
    2. Compute each tenant's due date relative to today
    3. Generate payments for due tenants
    4. Aggregate counts and per-tenant details
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
        self.generate_payment = GeneratePaymentForTenant(uow, payment_repo, tenant_repo)

    async def execute(
        self, command: CheckMissingPaymentsCommandDTO
    ) -> Result[MissingPaymentsReportDTO]:
        """
        Execute the missing payment sweep

        Args:
            command: CheckMissingPaymentsCommandDTO with optional reference date

        Returns:
            Result[MissingPaymentsReportDTO]: Sweep report, or error if tenants
            could not be listed
        """
        start_time = time.time()
        today = command.today or date.today()

        # Step 1: Fetch assigned tenants (the only batch-fatal failure)
        try:
            accounts = await self.tenant_repo.list_assigned_tenants()
        except LedgerError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.LEDGER_ERROR,
                    message="Failed to fetch tenants",
                    reason=str(e),
                )
            )

        logger.info(f"Checking {len(accounts)} assigned tenants for missing payments on {today}")

        # Rollbacks expire loaded entities, so read what the loop needs up front
        tenants = [
            (account.tenant.id, account.tenant.full_name, account.tenant.payment_due_day)
            for account in accounts
        ]

        results = []
        for tenant_id, tenant_name, payment_due_day in tenants:
            # Step 2: Due date relative to today
            due_date = calculate_next_due_date(payment_due_day, today)

            if due_date > today:
                logger.debug(f"Tenant {tenant_id} not due until {due_date.isoformat()}, skipping")
                continue

            # Step 3: Generate
            results.append(
                await generate_result_line(
                    self.uow, self.generate_payment, tenant_id, tenant_name, due_date
                )
            )

        # Step 4: Aggregate
        error_details = [r for r in results if r.action == GenerationAction.ERROR]
        report = MissingPaymentsReportDTO(
            run_date=today,
            checked=len(accounts),
            generated=sum(1 for r in results if r.action == GenerationAction.CREATED),
            existing=sum(1 for r in results if r.action == GenerationAction.ALREADY_EXISTS),
            errors=len(error_details),
            results=results,
            error_details=error_details,
            execution_time_ms=int((time.time() - start_time) * 1000),
        )

        logger.info(
            f"Checked {report.checked} tenants. Generated {report.generated} payments, "
            f"found {report.existing} existing, {report.errors} errors."
        )

        return Return.ok(report)
