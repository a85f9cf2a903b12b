"""Payments API Routes

FastAPI routes for rent charge generation, the missing payment sweep and
payment status updates.
"""

from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.api.schemas.payment_request import (
    GeneratePaymentsRequestSchema,
    UpdatePaymentStatusRequestSchema,
)
from src.app.use_cases.rent import (
    CheckMissingPayments,
    CheckMissingPaymentsCommandDTO,
    ErrorCode,
    GenerateUpcomingPayments,
    GenerateUpcomingPaymentsCommandDTO,
    ListTenantPayments,
    MissingPaymentsReportDTO,
    PaymentStatusUpdateDTO,
    TenantPaymentsDTO,
    UpcomingPaymentsReportDTO,
    UpdatePaymentStatus,
    UpdatePaymentStatusCommandDTO,
)
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.tenant_repository import SqlAlchemyTenantRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

admin_router = APIRouter(prefix="/admin/payments", tags=["Payments Admin"])
tenant_router = APIRouter(prefix="/tenants", tags=["Tenant Payments"])

ERROR_STATUS = {
    ErrorCode.TENANT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PAYMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.LEDGER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.UNEXPECTED_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_client_error(error: Error):
    raise ClientError(error, status_code=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST))


@admin_router.post(
    "/generate",
    response_model=UpcomingPaymentsReportDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Tenant not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "TENANT_NOT_FOUND",
                            "message": "Tenant 0b7e2c1a-4c43-4f0e-8d38-6e2f5b1f0a77 not found"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Tenant has no property or months_ahead out of range",
        }
    }
)
async def generate_payments(
    request: GeneratePaymentsRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Generate rent charges for the coming months.

    **Request body:**
    - `tenant_id` (optional): Restrict to one tenant; omit for all assigned tenants
    - `months_ahead` (optional): Monthly cycles to generate (default 1)

    Generation is idempotent: cycles that already have a charge are reported
    as `already_exists`.

    **Returns:**
    - 200: Per-cycle generation report
    - 400: Tenant has no assigned property, or months_ahead out of range
    - 404: Tenant not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = GenerateUpcomingPayments(
        uow,
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyTenantRepository(session),
        max_months_ahead=ApplicationConfig.MAX_MONTHS_AHEAD,
    )
    result = await use_case.execute(
        GenerateUpcomingPaymentsCommandDTO(
            tenant_id=request.tenant_id,
            months_ahead=request.months_ahead,
            today=date.today(),
        )
    )

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@admin_router.post(
    "/check-missing",
    response_model=MissingPaymentsReportDTO,
    status_code=status.HTTP_200_OK,
)
async def check_missing_payments(session: AsyncSession = Depends(get_session)):
    """
    Run the missing payment sweep now.

    Creates every charge that is due today and missing. Per-tenant failures
    are listed in `error_details` and never fail the request.

    **Returns:**
    - 200: Sweep report with checked/generated/existing/errors counts
    - 500: Tenants could not be listed
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = CheckMissingPayments(
        uow,
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyTenantRepository(session),
    )
    result = await use_case.execute(CheckMissingPaymentsCommandDTO(today=date.today()))

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@admin_router.post(
    "/{payment_id}/status",
    response_model=PaymentStatusUpdateDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Payment not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PAYMENT_NOT_FOUND",
                            "message": "Payment 5f0c6a52-8d0e-4a4b-9a0f-3f1d2c7b9e11 not found"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Transition not allowed",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_STATUS_TRANSITION",
                            "message": "Cannot move payment from succeeded to pending"
                        }
                    }
                }
            }
        }
    }
)
async def update_payment_status(
    payment_id: str,
    request: UpdatePaymentStatusRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Move a payment through its status lifecycle.

    A transition to `succeeded` also schedules the next cycle's charge when it
    is due within the configured window.

    **Returns:**
    - 200: Updated payment and next cycle outcome
    - 400: Transition not allowed
    - 404: Payment not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = UpdatePaymentStatus(
        uow,
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyTenantRepository(session),
        window_days=ApplicationConfig.NEXT_PAYMENT_WINDOW_DAYS,
    )
    result = await use_case.execute(
        UpdatePaymentStatusCommandDTO(
            payment_id=payment_id,
            status=request.status,
            today=date.today(),
        )
    )

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@tenant_router.get(
    "/{tenant_id}/payments",
    response_model=TenantPaymentsDTO,
    status_code=status.HTTP_200_OK,
)
async def list_tenant_payments(
    tenant_id: str,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session)
):
    """
    List a tenant's rent charges, most recent due date first.

    **Returns:**
    - 200: Paginated payment list
    - 404: Tenant not found
    """
    use_case = ListTenantPayments(
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyTenantRepository(session),
    )
    result = await use_case.execute(tenant_id, limit=limit, offset=offset)

    if result.is_err():
        raise_client_error(result.error)

    return result.value
