"""Repository errors

Adapters translate driver exceptions into these so use cases never depend on
SQLAlchemy directly.
"""

from datetime import date


class LedgerError(Exception):
    """Read or write against the payment ledger failed"""


class DuplicateDueDateConflict(Exception):
    """A payment already exists for this tenant and due date

    Raised when the uq_payments_tenant_due_date constraint rejects an insert.
    Callers treat it exactly like "payment already exists".
    """

    def __init__(self, tenant_id: str, due_date: date):
        self.tenant_id = tenant_id
        self.due_date = due_date
        super().__init__(
            f"Payment already exists for tenant {tenant_id} due {due_date.isoformat()}"
        )
