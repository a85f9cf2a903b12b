"""Background workers for the rent ledger"""
from .missing_payment_sweep import MissingPaymentSweepWorker

__all__ = ["MissingPaymentSweepWorker"]
