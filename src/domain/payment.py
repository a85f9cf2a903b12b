"""Payment Domain Entity

A monthly rent charge owed by a tenant for one due date.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, DateTime, Numeric, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid, utc_now


class PaymentStatus(str, Enum):
    """Payment status types"""
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


ALLOWED_TRANSITIONS = {
    PaymentStatus.PENDING: {
        PaymentStatus.PROCESSING,
        PaymentStatus.SUCCEEDED,
        PaymentStatus.FAILED,
    },
    PaymentStatus.PROCESSING: {PaymentStatus.SUCCEEDED, PaymentStatus.FAILED},
    PaymentStatus.FAILED: {PaymentStatus.PENDING},  # retry
    PaymentStatus.SUCCEEDED: set(),
}


class InvalidStatusTransition(Exception):
    def __init__(self, current: PaymentStatus, target: PaymentStatus):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move payment from {current.value} to {target.value}"
        )


class Payment(BaseModel, table=True):
    """
    Payment - Rent charge for one tenant and due date

    Domain Rules:
    - At most one payment per (tenant_id, due_date), enforced by
      uq_payments_tenant_due_date
    - amount is copied from Property.rent_amount at creation and never
      follows later rent changes
    - Only status (and paid_at) change after creation:
      pending -> processing/succeeded/failed, processing -> succeeded/failed,
      failed -> pending
    """

    __tablename__ = "payments"
    __table_args__ = (
        UniqueConstraint('tenant_id', 'due_date', name='uq_payments_tenant_due_date'),
        Index('ix_payments_status', 'status'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique payment identifier"
    )

    tenant_id: str = Field(
        foreign_key="tenants.id",
        index=True,
        description="Tenant owing the rent"
    )

    property_id: str = Field(
        foreign_key="properties.id",
        description="Property the rent is charged for"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Rent amount snapshot at creation (precision: 10,2)"
    )

    status: PaymentStatus = Field(
        default=PaymentStatus.PENDING,
        description="Payment status (pending, processing, succeeded, failed)"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Calendar date the rent is due"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),
        description="Timestamp when payment succeeded"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Payment creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Last status change timestamp"
    )

    def can_transition_to(self, target: PaymentStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[PaymentStatus(self.status)]

    def transition_to(self, target: PaymentStatus, at: Optional[datetime] = None) -> None:
        """
        Move the payment to a new status

        Args:
            target: Requested status
            at: Timestamp of the change (defaults to utc_now())

        Raises:
            InvalidStatusTransition: If the transition is not allowed
        """
        current = PaymentStatus(self.status)
        if not self.can_transition_to(target):
            raise InvalidStatusTransition(current, target)

        at = at or utc_now()
        self.status = target
        self.updated_at = at
        if target == PaymentStatus.SUCCEEDED:
            self.paid_at = at
