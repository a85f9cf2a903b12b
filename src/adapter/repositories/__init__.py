from .payment_repository import SqlAlchemyPaymentRepository
from .tenant_repository import SqlAlchemyTenantRepository

__all__ = [
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyTenantRepository",
]
