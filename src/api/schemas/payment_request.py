"""Request schemas for Payments API

Pydantic models for validating incoming HTTP requests.
"""

from typing import Optional
from pydantic import BaseModel, Field
from src.domain.payment import PaymentStatus


class GeneratePaymentsRequestSchema(BaseModel):
    """
    Request schema for generating upcoming rent charges

    Used for POST /admin/payments/generate endpoint.
    """

    tenant_id: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Restrict generation to one tenant (omit for all assigned tenants)"
    )

    months_ahead: int = Field(
        default=1,
        ge=1,
        description="Number of monthly cycles to generate (must be >= 1)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "0b7e2c1a-4c43-4f0e-8d38-6e2f5b1f0a77",
                "months_ahead": 2
            }
        }


class UpdatePaymentStatusRequestSchema(BaseModel):
    """
    Request schema for payment status updates

    Used for POST /admin/payments/{payment_id}/status endpoint.
    """

    status: PaymentStatus = Field(
        ...,
        description="Target status: processing, succeeded or failed"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "status": "succeeded"
            }
        }
