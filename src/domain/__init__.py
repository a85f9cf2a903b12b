from .base import BaseModel, generate_uuid
from .property import Property
from .tenant import Tenant, TenantAccount
from .payment import Payment, PaymentStatus, InvalidStatusTransition

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Property",
    "Tenant",
    "TenantAccount",
    "Payment",
    "PaymentStatus",
    "InvalidStatusTransition",
]
