"""
List Tenant Payments Use Case

Retrieves a tenant's rent charge history with pagination.
"""
from libs.result import Result, Return, Error
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.app.repositories.errors import LedgerError
from .dtos import TenantPaymentsDTO, payment_to_dto
from .errors import ErrorCode


class ListTenantPayments:
    """
    Use case: View a tenant's rent charges

    Payments are ordered by due_date DESC (most recent first).
    """

    def __init__(self, payment_repo: PaymentRepository, tenant_repo: TenantRepository):
        self.payment_repo = payment_repo
        self.tenant_repo = tenant_repo

    async def execute(
        self, tenant_id: str, limit: int = 50, offset: int = 0
    ) -> Result[TenantPaymentsDTO]:
        """
        List payments for a tenant with pagination.

        Args:
            tenant_id: Tenant identifier
            limit: Maximum number of payments to return (default 50)
            offset: Number of payments to skip (default 0)

        Returns:
            Result[TenantPaymentsDTO]: Paginated payment list, or TENANT_NOT_FOUND
        """
        try:
            account = await self.tenant_repo.get_tenant_with_property(tenant_id)
            if account is None:
                return Return.err(
                    Error(
                        code=ErrorCode.TENANT_NOT_FOUND,
                        message=f"Tenant {tenant_id} not found",
                    )
                )

            payments = await self.payment_repo.list_by_tenant(
                tenant_id, limit=limit, offset=offset
            )
        except LedgerError as e:
            return Return.err(
                Error(
                    code=ErrorCode.LEDGER_ERROR,
                    message=f"Failed to list payments for tenant {tenant_id}",
                    reason=str(e),
                )
            )

        return Return.ok(
            TenantPaymentsDTO(
                tenant_id=tenant_id,
                payments=[payment_to_dto(p) for p in payments],
                limit=limit,
                offset=offset,
            )
        )
