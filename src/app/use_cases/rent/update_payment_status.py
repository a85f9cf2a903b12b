"""UpdatePaymentStatus Use Case

Moves a rent charge through its status lifecycle. A successful payment also
schedules the next cycle's charge.
"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.app.repositories.errors import LedgerError
from src.domain.payment import InvalidStatusTransition, PaymentStatus
from .errors import ErrorCode
from .schedule_next_payment import ScheduleNextPayment
from .dtos import (
    GenerationAction,
    NextPaymentDTO,
    PaymentStatusUpdateDTO,
    ScheduleNextPaymentCommandDTO,
    UpdatePaymentStatusCommandDTO,
    payment_to_dto,
)

logger = logging.getLogger(__name__)


class UpdatePaymentStatus:
    """
    Use Case: Apply a payment status transition

    Business Rules:
    1. Only transitions allowed by Payment.transition_to are applied
    2. succeeded stamps paid_at and schedules the next cycle
    3. A scheduling failure is reported but does not undo the status change

    Flow:
    1. Load payment
    2. Apply transition
    3. Commit transaction
    4. Schedule next cycle (succeeded only)
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
        self.schedule_next_payment = ScheduleNextPayment(
            uow, payment_repo, tenant_repo, window_days=window_days
        )

    async def execute(self, command: UpdatePaymentStatusCommandDTO) -> Result[PaymentStatusUpdateDTO]:
        """
        Execute status update

        Args:
            command: UpdatePaymentStatusCommandDTO with payment ID and target status

        Returns:
            Result[PaymentStatusUpdateDTO]: Updated payment and next cycle outcome
        """
        try:
            # Step 1: Load payment
            payment = await self.payment_repo.get_by_id(command.payment_id)
            if not payment:
                return Return.err(
                    Error(
                        code=ErrorCode.PAYMENT_NOT_FOUND,
                        message=f"Payment {command.payment_id} not found",
                    )
                )

            # Step 2: Apply transition
            previous_status = PaymentStatus(payment.status)
            try:
                payment.transition_to(command.status)
            except InvalidStatusTransition as e:
                return Return.err(
                    Error(
                        code=ErrorCode.INVALID_STATUS_TRANSITION,
                        message=str(e),
                        reason=f"current={e.current.value}, requested={e.target.value}",
                    )
                )

            # Step 3: Commit transaction
            payment = await self.payment_repo.update(payment)
            await self.uow.commit()

        except LedgerError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.LEDGER_ERROR,
                    message=f"Failed to update payment {command.payment_id}",
                    reason=str(e),
                )
            )

        payment_dto = payment_to_dto(payment)
        logger.info(
            f"Payment {payment_dto.id} moved from {previous_status.value} to {command.status.value}"
        )

        # Step 4: Schedule next cycle
        next_payment = None
        if command.status == PaymentStatus.SUCCEEDED:
            next_payment = await self._schedule_next(
                payment_dto.id, payment_dto.tenant_id, command.today
            )

        return Return.ok(
            PaymentStatusUpdateDTO(
                previous_status=previous_status.value,
                payment=payment_dto,
                next_payment=next_payment,
            )
        )

    async def _schedule_next(
        self, payment_id: str, tenant_id: str, today: Optional[date]
    ) -> NextPaymentDTO:
        result = await self.schedule_next_payment.execute(
            ScheduleNextPaymentCommandDTO(payment_id=payment_id, today=today)
        )
        if result.is_ok():
            return result.value

        logger.error(f"Failed to generate next payment for tenant {tenant_id}: {result.error.message}")
        return NextPaymentDTO(
            tenant_id=tenant_id,
            action=GenerationAction.ERROR,
            error=result.error.message,
        )
