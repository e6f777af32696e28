import logging
from typing import Dict, List, Optional, Set

from account import Account
from amount import Amount
from errors import (
    AccountOperationError,
    AmountError,
    DuplicateTransactionError,
    LedgerInvariantError,
    MissingAmountError,
    NegativeAmountError,
    ValidationError,
)
from models import AccountSnapshot, ProcessingResult, ProcessingStats, Transaction, TransactionType

logger = logging.getLogger(__name__)


class Ledger:
    """
    Applies transactions to client accounts in arrival order.
    Owns the accounts and the set of successfully applied transaction ids.
    Rejected transactions leave no trace and may be replayed.
    """

    def __init__(self):
        self._accounts: Dict[int, Account] = {}
        self._seen_transaction_ids: Set[int] = set()
        self.stats = ProcessingStats()

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS: Applied to the account
            DUPLICATE: Transaction id was already applied, ignored entirely
            REJECTED: Invalid or not allowed in the account's current state, nothing changed
        """
        try:
            self._apply(transaction)
            result = ProcessingResult.SUCCESS
        except DuplicateTransactionError as e:
            logger.warning(f"{transaction}: {e.message}, ignoring")
            result = ProcessingResult.DUPLICATE
        except (AmountError, ValidationError, AccountOperationError) as e:
            logger.warning(f"{transaction}: rejected [{e.code}] {e.message}")
            result = ProcessingResult.REJECTED

        self.stats.record(result)
        return result

    def _apply(self, transaction: Transaction) -> None:
        transaction_id = transaction.transaction_id
        transaction_type = transaction.transaction_type

        # Disputes, resolves and chargebacks reference an existing deposit id
        if transaction_type.carries_amount and transaction_id in self._seen_transaction_ids:
            raise DuplicateTransactionError(transaction_id)

        amount = self._validate_amount(transaction) if transaction_type.carries_amount else None

        account = self.get_or_create_account(transaction.client_id)

        match transaction_type:
            case TransactionType.DEPOSIT:
                account.deposit(transaction_id, amount)
            case TransactionType.WITHDRAWAL:
                account.withdraw(transaction_id, amount)
            case TransactionType.DISPUTE:
                account.dispute(transaction_id)
            case TransactionType.RESOLVE:
                account.resolve(transaction_id)
            case TransactionType.CHARGEBACK:
                account.chargeback(transaction_id)

        if transaction_type.carries_amount:
            self._seen_transaction_ids.add(transaction_id)

    @staticmethod
    def _validate_amount(transaction: Transaction) -> Amount:
        if transaction.amount is None or not transaction.amount.strip():
            raise MissingAmountError(transaction.transaction_id)

        amount = Amount.parse(transaction.amount)
        if amount.is_negative():
            raise NegativeAmountError(transaction.transaction_id, amount)
        return amount

    def get_or_create_account(self, client_id: int) -> Account:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = Account(client_id=client_id)
        return self._accounts[client_id]

    def get_account(self, client_id: int) -> Optional[Account]:
        """Return the account for a client, or None if it has never been referenced."""
        return self._accounts.get(client_id)

    def is_transaction_seen(self, transaction_id: int) -> bool:
        """Check if a deposit or withdrawal with this ID was successfully applied."""
        return transaction_id in self._seen_transaction_ids

    def account_snapshots(self) -> List[AccountSnapshot]:
        """
        Snapshot every known account, ordered by client id.

        Raises:
            LedgerInvariantError: available + held overflowed, which no valid sequence of operations can produce
        """
        snapshots = []
        for client_id in sorted(self._accounts):
            try:
                snapshots.append(self._accounts[client_id].snapshot())
            except AmountError as e:
                raise LedgerInvariantError(f"Client {client_id}: total out of range ({e.message})", client_id) from e
        return snapshots
