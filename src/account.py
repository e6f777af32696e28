import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from amount import Amount
from errors import (
    AccountLockedError,
    InsufficientFundsError,
    TransactionNotActiveError,
    TransactionNotDisputedError,
    UnknownTransactionError,
)
from models import AccountSnapshot, DepositRecord, DepositState

logger = logging.getLogger(__name__)


@dataclass
class Account:
    """
    Balance state machine for a single client.

    Tracks every applied deposit so it can later be disputed, resolved or
    charged back. Withdrawals are not tracked and cannot be disputed.
    Each operation either applies completely or raises an AccountOperationError
    (or AmountError) and leaves the account untouched.
    """

    client_id: int
    available: Amount = Amount.ZERO
    held: Amount = Amount.ZERO
    locked: bool = False
    deposits: Dict[int, DepositRecord] = field(default_factory=dict, repr=False)

    @property
    def total(self) -> Amount:
        return self.available.add(self.held)

    def deposit(self, transaction_id: int, amount: Amount) -> None:
        self._ensure_unlocked(transaction_id)

        available = self.available.add(amount)
        # Total must stay representable as well
        available.add(self.held)

        self.available = available
        self.deposits[transaction_id] = DepositRecord(amount=amount)

    def withdraw(self, transaction_id: int, amount: Amount) -> None:
        self._ensure_unlocked(transaction_id)

        if amount > self.available:
            raise InsufficientFundsError(transaction_id, amount, self.available)

        self.available = self.available.sub(amount)

    def dispute(self, transaction_id: int) -> None:
        self._ensure_unlocked(transaction_id)
        record = self._get_deposit(transaction_id)

        if record.state != DepositState.ACTIVE:
            raise TransactionNotActiveError(transaction_id, record.state.value)

        # Funds withdrawn after the deposit cannot be held again
        if record.amount > self.available:
            raise InsufficientFundsError(transaction_id, record.amount, self.available)

        available = self.available.sub(record.amount)
        held = self.held.add(record.amount)

        self.available, self.held = available, held
        record.state = DepositState.DISPUTED

    def resolve(self, transaction_id: int) -> None:
        self._ensure_unlocked(transaction_id)
        record = self._get_disputed_deposit(transaction_id)

        held = self.held.sub(record.amount)
        available = self.available.add(record.amount)

        self.available, self.held = available, held
        record.state = DepositState.ACTIVE

    def chargeback(self, transaction_id: int) -> None:
        self._ensure_unlocked(transaction_id)
        record = self._get_disputed_deposit(transaction_id)

        self.held = self.held.sub(record.amount)
        record.state = DepositState.CHARGED_BACK
        self.locked = True
        logger.info(f"Client {self.client_id}: locked after chargeback of tx {transaction_id}")

    def get_deposit(self, transaction_id: int) -> Optional[DepositRecord]:
        """Retrieve a tracked deposit by ID."""
        return self.deposits.get(transaction_id)

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )

    def _ensure_unlocked(self, transaction_id: int) -> None:
        if self.locked:
            raise AccountLockedError(transaction_id)

    def _get_deposit(self, transaction_id: int) -> DepositRecord:
        record = self.deposits.get(transaction_id)
        if record is None:
            raise UnknownTransactionError(transaction_id)
        return record

    def _get_disputed_deposit(self, transaction_id: int) -> DepositRecord:
        record = self._get_deposit(transaction_id)
        if record.state != DepositState.DISPUTED:
            raise TransactionNotDisputedError(transaction_id, record.state.value)
        return record
