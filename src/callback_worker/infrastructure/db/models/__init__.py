"""Import all models so Base.metadata knows every table."""
from callback_worker.infrastructure.db.models.client_service import ClientServiceModel
from callback_worker.infrastructure.db.models.transaction_log import TransactionLogModel

__all__ = [
    "ClientServiceModel",
    "TransactionLogModel",
]
