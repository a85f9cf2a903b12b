"""Missing Payment Sweep Background Worker

Daily self-healing job: creates every rent charge that is due and missing,
and reports per-tenant failures to operators.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.tenant_repository import SqlAlchemyTenantRepository
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.rent import (
    CheckMissingPayments,
    CheckMissingPaymentsCommandDTO,
    MissingPaymentsReportDTO,
)

logger = logging.getLogger(__name__)


class MissingPaymentSweepWorker:
    """
    Background worker for the missing payment sweep

    Features:
    - Generates charges that are due today and missing
    - Notifies operators when any tenant failed
    - Can run once or continuously
    - Configurable interval (default: daily)

    Usage:
        # Run once
        worker = MissingPaymentSweepWorker()
        report = await worker.run_once()

        # Run continuously
        worker = MissingPaymentSweepWorker()
        await worker.run_forever(interval_seconds=86400)  # Daily
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        webhook_url: Optional[str] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            webhook_url: Report webhook (defaults to
                         ApplicationConfig.MISSING_PAYMENT_NOTIFICATION_WEBHOOK)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.webhook_url = webhook_url or ApplicationConfig.MISSING_PAYMENT_NOTIFICATION_WEBHOOK

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        self.notification_service = create_notification_service(self.webhook_url)

        logger.info("MissingPaymentSweepWorker initialized")

    async def run_once(self, today: Optional[date] = None) -> Optional[MissingPaymentsReportDTO]:
        """
        Run the sweep once

        Args:
            today: Reference date (defaults to date.today())

        Returns:
            MissingPaymentsReportDTO, or None when the sweep is disabled
        """
        if not ApplicationConfig.MISSING_PAYMENT_SWEEP_ENABLED:
            logger.info("Missing payment sweep is disabled, skipping")
            return None

        today = today or date.today()

        async with self.async_session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)
            payment_repo = SqlAlchemyPaymentRepository(session)
            tenant_repo = SqlAlchemyTenantRepository(session)

            use_case = CheckMissingPayments(
                uow=uow,
                payment_repo=payment_repo,
                tenant_repo=tenant_repo,
            )

            result = await use_case.execute(CheckMissingPaymentsCommandDTO(today=today))

            if result.is_err():
                logger.error(f"Missing payment sweep failed: {result.error.message}")
                raise RuntimeError(f"Missing payment sweep failed: {result.error.message}")

            report = result.value

        if report.errors > 0:
            logger.error(f"ALERT: {report.errors} tenants failed during missing payment sweep")
            await self.notification_service.send_sweep_report(report)

        return report

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """
        Run the sweep continuously at specified interval

        Args:
            interval_seconds: Seconds between runs (defaults to
                              ApplicationConfig.MISSING_PAYMENT_SWEEP_INTERVAL_SECONDS)
        """
        interval_seconds = interval_seconds or ApplicationConfig.MISSING_PAYMENT_SWEEP_INTERVAL_SECONDS
        logger.info(
            f"Starting continuous missing payment sweep with {interval_seconds}s interval"
        )

        while True:
            try:
                report = await self.run_once()
                if report is not None:
                    logger.info(
                        f"Sweep cycle complete. Checked {report.checked} tenants, "
                        f"generated {report.generated}, {report.errors} errors "
                        f"in {report.execution_time_ms}ms"
                    )
            except Exception as e:
                logger.error(f"Sweep cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("MissingPaymentSweepWorker shutdown complete")


def parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once for today
        python -m src.worker.missing_payment_sweep

        # Run once for a given date
        python -m src.worker.missing_payment_sweep --date 2024-03-15

        # Run continuously (default: daily)
        python -m src.worker.missing_payment_sweep --continuous
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Missing Payment Sweep Worker")
    parser.add_argument(
        "--continuous", action="store_true", help="Run continuously at the configured interval"
    )
    parser.add_argument(
        "--interval", type=int, default=None,
        help="Interval between runs in seconds (default: MISSING_PAYMENT_SWEEP_INTERVAL_SECONDS)"
    )
    parser.add_argument(
        "--date", type=parse_date, default=None,
        help="Reference date YYYY-MM-DD for a single run (default: today)"
    )
    args = parser.parse_args()

    worker = MissingPaymentSweepWorker()

    try:
        if args.continuous:
            await worker.run_forever(interval_seconds=args.interval)
        else:
            report = await worker.run_once(today=args.date)
            if report is None:
                print("Missing payment sweep is disabled")
                return
            print("Missing payment sweep complete:")
            print(f"  Date: {report.run_date.isoformat()}")
            print(f"  Tenants checked: {report.checked}")
            print(f"  Payments generated: {report.generated}")
            print(f"  Already existing: {report.existing}")
            print(f"  Errors: {report.errors}")
            for detail in report.error_details:
                print(f"  - Tenant {detail.tenant_id}: {detail.error}")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
