"""Error codes and exceptions for transaction processing.

Error code ranges:
  1xxx: Amount
  2xxx: Transaction validation
  3xxx: Account operations
  4xxx: Ledger
  9xxx: Internal invariants
"""

from typing import Optional


class PaymentsError(Exception):
    """Base error carrying a numeric code."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: Amount ---

class AmountError(PaymentsError):
    pass


class AmountParseError(AmountError):
    def __init__(self, text: str) -> None:
        super().__init__(1001, f"Invalid amount: {text!r}")


class AmountOverflowError(AmountError):
    def __init__(self) -> None:
        super().__init__(1002, "Amount overflow")


class AmountUnderflowError(AmountError):
    def __init__(self) -> None:
        super().__init__(1003, "Amount underflow")


# --- 2xxx: Validation ---

class ValidationError(PaymentsError):
    def __init__(self, code: int, message: str, transaction_id: int) -> None:
        self.transaction_id = transaction_id
        super().__init__(code, message)


class MissingAmountError(ValidationError):
    def __init__(self, transaction_id: int) -> None:
        super().__init__(2001, f"Missing amount (tx {transaction_id})", transaction_id)


class NegativeAmountError(ValidationError):
    def __init__(self, transaction_id: int, amount: object) -> None:
        super().__init__(2002, f"Negative amount {amount} (tx {transaction_id})", transaction_id)


# --- 3xxx: Account ---

class AccountOperationError(PaymentsError):
    def __init__(self, code: int, message: str, transaction_id: int) -> None:
        self.transaction_id = transaction_id
        super().__init__(code, message)


class AccountLockedError(AccountOperationError):
    def __init__(self, transaction_id: int) -> None:
        super().__init__(3001, f"Account is locked (tx {transaction_id})", transaction_id)


class InsufficientFundsError(AccountOperationError):
    def __init__(self, transaction_id: int, required: object, available: object) -> None:
        super().__init__(
            3002,
            f"Insufficient funds: required {required}, available {available} (tx {transaction_id})",
            transaction_id,
        )


class UnknownTransactionError(AccountOperationError):
    def __init__(self, transaction_id: int) -> None:
        super().__init__(3003, f"Unknown deposit (tx {transaction_id})", transaction_id)


class TransactionNotActiveError(AccountOperationError):
    def __init__(self, transaction_id: int, state: object) -> None:
        super().__init__(3004, f"Deposit cannot be disputed in state {state} (tx {transaction_id})", transaction_id)


class TransactionNotDisputedError(AccountOperationError):
    def __init__(self, transaction_id: int, state: object) -> None:
        super().__init__(3005, f"Deposit is not disputed, state {state} (tx {transaction_id})", transaction_id)


# --- 4xxx: Ledger ---

class DuplicateTransactionError(PaymentsError):
    def __init__(self, transaction_id: int) -> None:
        self.transaction_id = transaction_id
        super().__init__(4001, f"Transaction already processed (tx {transaction_id})")


# --- 9xxx: Internal ---

class LedgerInvariantError(PaymentsError):
    def __init__(self, message: str, client_id: Optional[int] = None) -> None:
        self.client_id = client_id
        super().__init__(9001, message)
