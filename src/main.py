import csv
import logging
import sys
from typing import Iterable, TextIO

from payments_engine import PaymentsEngine
from models import AccountSnapshot

logger = logging.getLogger(__name__)

OUTPUT_FIELDS = ["client", "available", "held", "total", "locked"]


def write_snapshots(snapshots: Iterable[AccountSnapshot], stream: TextIO) -> None:
    """Write account snapshots as CSV with four decimal places per amount."""
    writer = csv.DictWriter(stream, fieldnames=OUTPUT_FIELDS, lineterminator="\n")
    writer.writeheader()
    for snapshot in snapshots:
        writer.writerow(snapshot.as_record())


def main():
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if len(sys.argv) != 2:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        sys.exit(1)

    filepath = sys.argv[1]
    engine = PaymentsEngine()
    try:
        snapshots = engine.process_file(filepath)
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        logger.error(f"Unable to read {filepath}: {e}")
        sys.exit(1)

    write_snapshots(snapshots, sys.stdout)


if __name__ == "__main__":
    main()
