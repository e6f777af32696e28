import csv
import logging
import sys
from typing import Dict, Iterable, List, Optional

from ledger import Ledger
from models import AccountSnapshot, Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2 ** 16 - 1
MAX_TRANSACTION_ID = 2 ** 32 - 1


class PaymentsEngine:
    """
    Reads transactions from CSV and applies them to a ledger in file order.
    Malformed rows are logged and skipped; I/O errors propagate to the caller.
    """

    def __init__(self, ledger: Optional[Ledger] = None):
        self._ledger = ledger if ledger is not None else Ledger()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def process_file(self, filepath: str) -> List[AccountSnapshot]:
        """Process CSV file and return final account snapshots."""
        logger.info(f"Processing transactions from {filepath}")

        with open(filepath, "r", newline="") as f:
            self.process_rows(csv.DictReader(f))

        logger.info("Processing complete")

        # Print final processing report to stderr
        print(self._ledger.stats, file=sys.stderr)
        return self._ledger.account_snapshots()

    def process_rows(self, rows: Iterable[Dict[str, Optional[str]]]) -> None:
        for row in rows:
            transaction = self._parse_csv_row(row)
            if transaction:
                self._ledger.process_transaction(transaction)

    def _parse_csv_row(self, row: Dict[str, Optional[str]]) -> Optional[Transaction]:
        """Parse CSV row into Transaction."""
        try:
            normalized = {k.strip(): (v or "").strip() for k, v in row.items() if isinstance(k, str)}

            transaction_type_str = normalized["type"].lower()
            client_id = _parse_id(normalized["client"], MAX_CLIENT_ID)
            transaction_id = _parse_id(normalized["tx"], MAX_TRANSACTION_ID)

            amount = normalized.get("amount") or None

            return Transaction(
                transaction_type=TransactionType(transaction_type_str),
                client_id=client_id,
                transaction_id=transaction_id,
                amount=amount,
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to parse row {row}: {e}")
            return None


def _parse_id(value: str, maximum: int) -> int:
    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"invalid id {value!r}")
    parsed = int(value)
    if not 0 <= parsed <= maximum:
        raise ValueError(f"id {parsed} out of range [0, {maximum}]")
    return parsed
