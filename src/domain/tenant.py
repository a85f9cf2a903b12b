"""Tenant Domain Entity

A renter with a preferred monthly billing day and at most one property.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel as PydanticBaseModel, ConfigDict
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, DateTime, String
from src.domain.base import BaseModel, generate_uuid, utc_now
from src.domain.property import Property


class Tenant(BaseModel, table=True):
    """
    Tenant - Renter billed monthly on payment_due_day

    Domain Rules:
    - payment_due_day is a day of month in [1, 31]
    - property_id is optional (unassigned tenants are never billed)
    - Tenants with payment history are not deleted
    """

    __tablename__ = "tenants"
    __table_args__ = (
        CheckConstraint(
            'payment_due_day >= 1 AND payment_due_day <= 31',
            name='payment_due_day_range',
        ),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique tenant identifier"
    )

    first_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Tenant first name"
    )

    last_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Tenant last name"
    )

    email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Contact email"
    )

    payment_due_day: int = Field(
        default=1,
        description="Preferred day of month for rent (1-31)"
    )

    property_id: Optional[str] = Field(
        default=None,
        foreign_key="properties.id",
        index=True,
        description="Assigned property (None = unassigned)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Tenant creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Last update timestamp"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class TenantAccount(PydanticBaseModel):
    """Tenant paired with its (optional) assigned property"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    tenant: Tenant
    assigned_property: Optional[Property] = None

    @property
    def is_assignable(self) -> bool:
        """True when rent can be charged: a property with a positive rent"""
        return (
            self.assigned_property is not None
            and self.assigned_property.rent_amount is not None
            and self.assigned_property.rent_amount > Decimal("0")
        )
