"""Property Domain Entity

A rentable unit with the monthly rent charged to its tenants.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, DateTime, Numeric, String
from src.domain.base import BaseModel, generate_uuid, utc_now


class Property(BaseModel, table=True):
    """
    Property - Rentable address with a monthly rent

    Domain Rules:
    - rent_amount must be positive
    - A property may be assigned to zero or more tenants
    - Changing rent_amount never alters payments already generated
    """

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint('rent_amount > 0', name='rent_amount_positive'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique property identifier"
    )

    address: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Street address"
    )

    unit_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Unit or apartment number"
    )

    rent_amount: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Monthly rent (precision: 10,2)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Property creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Last update timestamp"
    )
