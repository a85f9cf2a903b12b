"""Unit tests for MissingPaymentSweepWorker

Tests cover:
- Worker initialization with configuration
- run_once execution and reference date
- Sweep disabled scenario
- Notification when tenants fail
- Use case failure
- Shutdown and cleanup
"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

from libs.result import Error, Return
from src.app.use_cases.rent.dtos import (
    GenerationAction,
    MissingPaymentsReportDTO,
    PaymentGenerationResultDTO,
)
from src.worker.missing_payment_sweep import MissingPaymentSweepWorker, parse_date

MODULE = "src.worker.missing_payment_sweep"


def make_report(errors: int = 0) -> MissingPaymentsReportDTO:
    details = [
        PaymentGenerationResultDTO(
            tenant_id=f"tenant_{i}",
            tenant_name=f"Tenant {i}",
            due_date=date(2024, 3, 15),
            action=GenerationAction.ERROR,
            error_code="TENANT_NOT_ASSIGNABLE",
            error="Tenant not found or has no assigned property",
        )
        for i in range(errors)
    ]
    return MissingPaymentsReportDTO(
        run_date=date(2024, 3, 15),
        checked=3,
        generated=3 - errors,
        existing=0,
        errors=errors,
        results=details,
        error_details=details,
    )


@pytest.fixture
def mock_session():
    """Mock async session"""
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)  # must not suppress exceptions
    return session


@pytest.fixture
def mock_notification_service():
    service = MagicMock()
    service.send_sweep_report = AsyncMock(return_value=True)
    return service


class TestMissingPaymentSweepWorkerInit:
    """Test worker initialization"""

    @patch(f"{MODULE}.ApplicationConfig")
    @patch(f"{MODULE}.create_async_engine")
    @patch(f"{MODULE}.create_notification_service")
    def test_initializes_with_default_config(
        self, mock_create_notification, mock_create_engine, mock_app_config
    ):
        """
        Given: No custom configuration provided
        When: Worker is initialized
        Then: Uses defaults from ApplicationConfig
        """
        # Arrange
        mock_app_config.DB_URI = "sqlite+aiosqlite:///./default.db"
        mock_app_config.MISSING_PAYMENT_NOTIFICATION_WEBHOOK = "https://default.webhook"

        # Act
        worker = MissingPaymentSweepWorker()

        # Assert
        assert worker.db_uri == "sqlite+aiosqlite:///./default.db"
        assert worker.webhook_url == "https://default.webhook"
        mock_create_notification.assert_called_once_with("https://default.webhook")

    @patch(f"{MODULE}.create_async_engine")
    @patch(f"{MODULE}.create_notification_service")
    def test_initializes_with_custom_config(self, mock_create_notification, mock_create_engine):
        """
        Given: Custom database URI and webhook
        When: Worker is initialized
        Then: Custom values are used
        """
        worker = MissingPaymentSweepWorker(
            db_uri="sqlite+aiosqlite:///./custom.db",
            webhook_url="https://custom.webhook",
        )

        assert worker.db_uri == "sqlite+aiosqlite:///./custom.db"
        mock_create_engine.assert_called_once_with(
            "sqlite+aiosqlite:///./custom.db", echo=False, future=True
        )
        mock_create_notification.assert_called_once_with("https://custom.webhook")


@pytest.mark.asyncio
class TestMissingPaymentSweepWorkerRunOnce:
    """Test run_once execution"""

    @patch(f"{MODULE}.ApplicationConfig")
    @patch(f"{MODULE}.CheckMissingPayments")
    @patch(f"{MODULE}.SqlAlchemyUnitOfWork")
    @patch(f"{MODULE}.SqlAlchemyPaymentRepository")
    @patch(f"{MODULE}.SqlAlchemyTenantRepository")
    @patch(f"{MODULE}.create_async_engine")
    @patch(f"{MODULE}.create_notification_service")
    @patch(f"{MODULE}.sessionmaker")
    async def test_run_once_passes_reference_date(
        self,
        mock_sessionmaker,
        mock_create_notification,
        mock_create_engine,
        mock_tenant_repo_class,
        mock_payment_repo_class,
        mock_uow_class,
        mock_use_case_class,
        mock_app_config,
        mock_session,
        mock_notification_service,
    ):
        """
        Given: Sweep enabled and no failures
        When: run_once is called with a date
        Then: The use case runs for that date and no notification is sent
        """
        # Arrange
        mock_app_config.MISSING_PAYMENT_SWEEP_ENABLED = True
        mock_sessionmaker.return_value = MagicMock(return_value=mock_session)
        mock_create_notification.return_value = mock_notification_service
        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(return_value=Return.ok(make_report()))
        mock_use_case_class.return_value = mock_use_case

        worker = MissingPaymentSweepWorker(db_uri="sqlite+aiosqlite://")

        # Act
        report = await worker.run_once(today=date(2024, 3, 15))

        # Assert
        assert report.generated == 3
        command = mock_use_case.execute.call_args[0][0]
        assert command.today == date(2024, 3, 15)
        mock_notification_service.send_sweep_report.assert_not_called()

    @patch(f"{MODULE}.ApplicationConfig")
    @patch(f"{MODULE}.CheckMissingPayments")
    @patch(f"{MODULE}.SqlAlchemyUnitOfWork")
    @patch(f"{MODULE}.SqlAlchemyPaymentRepository")
    @patch(f"{MODULE}.SqlAlchemyTenantRepository")
    @patch(f"{MODULE}.create_async_engine")
    @patch(f"{MODULE}.create_notification_service")
    @patch(f"{MODULE}.sessionmaker")
    async def test_run_once_notifies_on_errors(
        self,
        mock_sessionmaker,
        mock_create_notification,
        mock_create_engine,
        mock_tenant_repo_class,
        mock_payment_repo_class,
        mock_uow_class,
        mock_use_case_class,
        mock_app_config,
        mock_session,
        mock_notification_service,
    ):
        """
        Given: One tenant failed during the sweep
        When: run_once completes
        Then: The report is sent to operators
        """
        # Arrange
        mock_app_config.MISSING_PAYMENT_SWEEP_ENABLED = True
        mock_sessionmaker.return_value = MagicMock(return_value=mock_session)
        mock_create_notification.return_value = mock_notification_service
        report = make_report(errors=1)
        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(return_value=Return.ok(report))
        mock_use_case_class.return_value = mock_use_case

        worker = MissingPaymentSweepWorker(db_uri="sqlite+aiosqlite://")

        # Act
        result = await worker.run_once(today=date(2024, 3, 15))

        # Assert
        assert result.errors == 1
        mock_notification_service.send_sweep_report.assert_called_once_with(report)

    @patch(f"{MODULE}.ApplicationConfig")
    @patch(f"{MODULE}.create_async_engine")
    @patch(f"{MODULE}.create_notification_service")
    async def test_run_once_skips_when_disabled(
        self, mock_create_notification, mock_create_engine, mock_app_config
    ):
        """
        Given: Sweep disabled in config
        When: run_once is called
        Then: Returns None without touching the database
        """
        # Arrange
        mock_app_config.MISSING_PAYMENT_SWEEP_ENABLED = False
        worker = MissingPaymentSweepWorker(db_uri="sqlite+aiosqlite://")
        worker.async_session_factory = MagicMock()

        # Act
        report = await worker.run_once()

        # Assert
        assert report is None
        worker.async_session_factory.assert_not_called()

    @patch(f"{MODULE}.ApplicationConfig")
    @patch(f"{MODULE}.CheckMissingPayments")
    @patch(f"{MODULE}.SqlAlchemyUnitOfWork")
    @patch(f"{MODULE}.SqlAlchemyPaymentRepository")
    @patch(f"{MODULE}.SqlAlchemyTenantRepository")
    @patch(f"{MODULE}.create_async_engine")
    @patch(f"{MODULE}.create_notification_service")
    @patch(f"{MODULE}.sessionmaker")
    async def test_run_once_raises_on_use_case_error(
        self,
        mock_sessionmaker,
        mock_create_notification,
        mock_create_engine,
        mock_tenant_repo_class,
        mock_payment_repo_class,
        mock_uow_class,
        mock_use_case_class,
        mock_app_config,
        mock_session,
    ):
        """
        Given: Tenants cannot be listed
        When: run_once is called
        Then: RuntimeError is raised
        """
        # Arrange
        mock_app_config.MISSING_PAYMENT_SWEEP_ENABLED = True
        mock_sessionmaker.return_value = MagicMock(return_value=mock_session)
        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(
            return_value=Return.err(Error(code="LEDGER_ERROR", message="Failed to fetch tenants"))
        )
        mock_use_case_class.return_value = mock_use_case

        worker = MissingPaymentSweepWorker(db_uri="sqlite+aiosqlite://")

        # Act & Assert
        with pytest.raises(RuntimeError, match="Failed to fetch tenants"):
            await worker.run_once(today=date(2024, 3, 15))


@pytest.mark.asyncio
class TestMissingPaymentSweepWorkerShutdown:
    """Test shutdown"""

    @patch(f"{MODULE}.create_async_engine")
    @patch(f"{MODULE}.create_notification_service")
    async def test_shutdown_disposes_engine(self, mock_create_notification, mock_create_engine):
        """
        Given: Initialized worker
        When: shutdown is called
        Then: The engine is disposed
        """
        mock_engine = MagicMock()
        mock_engine.dispose = AsyncMock()
        mock_create_engine.return_value = mock_engine
        worker = MissingPaymentSweepWorker(db_uri="sqlite+aiosqlite://")

        await worker.shutdown()

        mock_engine.dispose.assert_called_once()


class TestParseDate:
    def test_parses_iso_date(self):
        assert parse_date("2024-03-15") == date(2024, 3, 15)

    def test_rejects_other_formats(self):
        with pytest.raises(ValueError):
            parse_date("15/03/2024")
