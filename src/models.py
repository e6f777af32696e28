from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from amount import Amount


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class DepositState(Enum):
    ACTIVE = "active"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


class ProcessingResult(Enum):
    SUCCESS = "success"
    REJECTED = "rejected"
    DUPLICATE = "duplicate"


@dataclass
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[str] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class DepositRecord:
    amount: Amount
    state: DepositState = DepositState.ACTIVE


@dataclass(frozen=True)
class AccountSnapshot:
    client: int
    available: Amount
    held: Amount
    total: Amount
    locked: bool

    def as_record(self) -> Dict[str, str]:
        """Render as an output row: amounts with four decimal places, lowercase lock flag."""
        return {
            "client": str(self.client),
            "available": self.available.format(),
            "held": self.held.format(),
            "total": self.total.format(),
            "locked": str(self.locked).lower(),
        }


class ProcessingStats:
    """Counters for tracking processing outcomes."""

    def __init__(self):
        self.processed = 0
        self.rejected = 0
        self.duplicates = 0

    def record(self, result: ProcessingResult):
        if result == ProcessingResult.SUCCESS:
            self.processed += 1
        elif result == ProcessingResult.REJECTED:
            self.rejected += 1
        elif result == ProcessingResult.DUPLICATE:
            self.duplicates += 1

    def __repr__(self) -> str:
        return f"Processed: {self.processed}, Rejected: {self.rejected}, Duplicates: {self.duplicates}"
