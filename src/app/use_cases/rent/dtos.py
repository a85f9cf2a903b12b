"""Data Transfer Objects for Rent Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field
from src.domain.payment import Payment, PaymentStatus


class GenerationAction(str, Enum):
    """Outcome of a single rent charge generation attempt"""
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    SKIPPED = "skipped"
    ERROR = "error"


class PaymentDTO(BaseModel):
    """
    Rent charge as returned by use cases and the API
    """

    id: str = Field(..., description="Payment ID")
    tenant_id: str = Field(..., description="Tenant identifier")
    property_id: str = Field(..., description="Property identifier")
    amount: Decimal = Field(..., description="Rent amount snapshot")
    status: str = Field(..., description="pending, processing, succeeded or failed")
    due_date: date = Field(..., description="Calendar due date")
    paid_at: Optional[datetime] = Field(default=None, description="When the payment succeeded")
    created_at: datetime = Field(..., description="Creation timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "5f0c6a52-8d0e-4a4b-9a0f-3f1d2c7b9e11",
                "tenant_id": "0b7e2c1a-4c43-4f0e-8d38-6e2f5b1f0a77",
                "property_id": "c2d4a8f3-1b5e-4f7a-9c3d-2e6f8a0b4d19",
                "amount": "1450.00",
                "status": "pending",
                "due_date": "2024-03-15",
                "paid_at": None,
                "created_at": "2024-03-15T06:00:00Z"
            }
        }


def payment_to_dto(payment: Payment) -> PaymentDTO:
    """Convert a Payment entity to PaymentDTO"""
    return PaymentDTO(
        id=payment.id,
        tenant_id=payment.tenant_id,
        property_id=payment.property_id,
        amount=payment.amount,
        status=PaymentStatus(payment.status).value,
        due_date=payment.due_date,
        paid_at=payment.paid_at,
        created_at=payment.created_at,
    )


class GeneratePaymentCommandDTO(BaseModel):
    """
    Command DTO for generating one tenant's rent charge

    Used as input to GeneratePaymentForTenant use case.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    due_date: date = Field(..., description="Due date of the charge")


class GeneratedPaymentDTO(BaseModel):
    """
    Response DTO for GeneratePaymentForTenant

    created=False means the charge already existed and nothing was written.
    """

    created: bool = Field(..., description="True if a new payment row was inserted")
    payment: PaymentDTO = Field(..., description="The new or existing payment")


class PaymentGenerationResultDTO(BaseModel):
    """
    Per-tenant line of a batch generation report
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    tenant_name: Optional[str] = Field(default=None, description="Tenant display name")
    due_date: date = Field(..., description="Due date the charge was generated for")
    action: GenerationAction = Field(..., description="created, already_exists or error")
    payment_id: Optional[str] = Field(default=None, description="Payment ID when one exists")
    error_code: Optional[str] = Field(default=None, description="Error code when action=error")
    error: Optional[str] = Field(default=None, description="Error message when action=error")


class CheckMissingPaymentsCommandDTO(BaseModel):
    """
    Command DTO for the missing payment sweep

    today is read once by the caller; None means date.today().
    """

    today: Optional[date] = Field(default=None, description="Reference date of the sweep")


class MissingPaymentsReportDTO(BaseModel):
    """
    Result DTO for CheckMissingPayments
    """

    run_date: date = Field(..., description="Reference date used for the sweep")
    checked: int = Field(..., description="Assigned tenants examined")
    generated: int = Field(..., description="Payments created")
    existing: int = Field(..., description="Payments that already existed")
    errors: int = Field(..., description="Tenants that failed")
    results: List[PaymentGenerationResultDTO] = Field(default_factory=list)
    error_details: List[PaymentGenerationResultDTO] = Field(default_factory=list)
    execution_time_ms: int = Field(default=0, description="Execution time in milliseconds")

    class Config:
        json_schema_extra = {
            "example": {
                "run_date": "2024-03-15",
                "checked": 3,
                "generated": 1,
                "existing": 0,
                "errors": 1,
                "results": [],
                "error_details": [],
                "execution_time_ms": 42
            }
        }


class GenerateUpcomingPaymentsCommandDTO(BaseModel):
    """
    Command DTO for generating the next months' rent charges

    tenant_id=None generates for every assigned tenant.
    """

    tenant_id: Optional[str] = Field(default=None, description="Restrict to one tenant")
    months_ahead: int = Field(default=1, description="Number of monthly cycles to generate")
    today: Optional[date] = Field(default=None, description="Reference date")


class UpcomingPaymentsReportDTO(BaseModel):
    """
    Result DTO for GenerateUpcomingPayments
    """

    tenants_processed: int = Field(..., description="Tenants examined")
    generated: int = Field(..., description="Payments created")
    existing: int = Field(..., description="Payments that already existed")
    errors: int = Field(..., description="Generation attempts that failed")
    results: List[PaymentGenerationResultDTO] = Field(default_factory=list)


class ScheduleNextPaymentCommandDTO(BaseModel):
    """
    Command DTO for generating the cycle after a paid rent charge
    """

    payment_id: str = Field(..., description="Payment that was just paid")
    today: Optional[date] = Field(default=None, description="Reference date")


class NextPaymentDTO(BaseModel):
    """
    Outcome of scheduling the next cycle's rent charge
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    due_date: Optional[date] = Field(default=None, description="Next cycle's due date")
    action: GenerationAction = Field(..., description="created, already_exists, skipped or error")
    days_until_due: Optional[int] = Field(default=None, description="Days from today to due date")
    payment_id: Optional[str] = Field(default=None, description="Payment ID when generated")
    error: Optional[str] = Field(default=None, description="Error message when action=error")


class UpdatePaymentStatusCommandDTO(BaseModel):
    """
    Command DTO for moving a payment through its status lifecycle
    """

    payment_id: str = Field(..., description="Payment ID")
    status: PaymentStatus = Field(..., description="Target status")
    today: Optional[date] = Field(default=None, description="Reference date for next-cycle scheduling")


class PaymentStatusUpdateDTO(BaseModel):
    """
    Response DTO for UpdatePaymentStatus
    """

    previous_status: str = Field(..., description="Status before the change")
    payment: PaymentDTO = Field(..., description="Payment after the change")
    next_payment: Optional[NextPaymentDTO] = Field(
        default=None,
        description="Next cycle scheduling outcome (only when status=succeeded)"
    )


class TenantPaymentsDTO(BaseModel):
    """
    Response DTO for ListTenantPayments
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    payments: List[PaymentDTO] = Field(default_factory=list, description="Most recent due date first")
    limit: int = Field(..., description="Page size")
    offset: int = Field(..., description="Page offset")
