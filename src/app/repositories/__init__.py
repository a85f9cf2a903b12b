from .errors import LedgerError, DuplicateDueDateConflict
from .payment_repository import PaymentRepository
from .tenant_repository import TenantRepository

__all__ = [
    "LedgerError",
    "DuplicateDueDateConflict",
    "PaymentRepository",
    "TenantRepository",
]
