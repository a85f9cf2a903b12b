"""Unit tests for ListTenantPayments use case"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.repositories.errors import LedgerError
from src.app.use_cases.rent.errors import ErrorCode
from src.app.use_cases.rent.list_tenant_payments import ListTenantPayments
from src.domain.payment import Payment
from src.domain.tenant import Tenant, TenantAccount


@pytest.fixture
def mock_tenant_repo():
    repo = AsyncMock()
    repo.get_tenant_with_property.return_value = TenantAccount(
        tenant=Tenant(id="tenant_1", first_name="Ada", last_name="Lovelace")
    )
    return repo


@pytest.fixture
def mock_payment_repo():
    repo = AsyncMock()
    repo.list_by_tenant.return_value = [
        Payment(
            id=f"payment_{month}",
            tenant_id="tenant_1",
            property_id="property_1",
            amount=Decimal("1000.00"),
            due_date=date(2024, month, 1),
        )
        for month in (3, 2)
    ]
    return repo


@pytest.mark.asyncio
class TestListTenantPayments:
    """Test payment history listing"""

    async def test_lists_payments(self, mock_payment_repo, mock_tenant_repo):
        """
        Given: Tenant with two payments
        When: execute is called with pagination
        Then: Payments are returned in repository order with paging echoed
        """
        # Arrange
        use_case = ListTenantPayments(mock_payment_repo, mock_tenant_repo)

        # Act
        result = await use_case.execute("tenant_1", limit=10, offset=0)

        # Assert
        assert result.is_ok()
        assert [p.id for p in result.value.payments] == ["payment_3", "payment_2"]
        assert result.value.limit == 10
        mock_payment_repo.list_by_tenant.assert_called_once_with("tenant_1", limit=10, offset=0)

    async def test_unknown_tenant(self, mock_payment_repo, mock_tenant_repo):
        """
        Given: Unknown tenant
        When: execute is called
        Then: TENANT_NOT_FOUND is returned
        """
        mock_tenant_repo.get_tenant_with_property.return_value = None
        use_case = ListTenantPayments(mock_payment_repo, mock_tenant_repo)

        result = await use_case.execute("missing")

        assert result.is_err()
        assert result.error.code == ErrorCode.TENANT_NOT_FOUND
        mock_payment_repo.list_by_tenant.assert_not_called()

    async def test_read_failure(self, mock_payment_repo, mock_tenant_repo):
        """
        Given: Listing fails
        When: execute is called
        Then: LEDGER_ERROR is returned
        """
        mock_payment_repo.list_by_tenant.side_effect = LedgerError("db down")
        use_case = ListTenantPayments(mock_payment_repo, mock_tenant_repo)

        result = await use_case.execute("tenant_1")

        assert result.is_err()
        assert result.error.code == ErrorCode.LEDGER_ERROR
