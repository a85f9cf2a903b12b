"""Rent use case errors"""


class ErrorCode:
    TENANT_NOT_FOUND = "TENANT_NOT_FOUND"
    TENANT_NOT_ASSIGNABLE = "TENANT_NOT_ASSIGNABLE"
    LEDGER_ERROR = "LEDGER_ERROR"
    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    INVALID_MONTHS_AHEAD = "INVALID_MONTHS_AHEAD"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class TenantNotAssignable(Exception):
    """Tenant is missing, has no property, or its property has no positive rent"""

    def __init__(self, tenant_id: str, reason: str):
        self.tenant_id = tenant_id
        self.reason = reason
        super().__init__(f"Tenant not found or has no assigned property: {tenant_id}")
