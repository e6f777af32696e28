import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from amount import Amount
from payments_engine import PaymentsEngine


def run(tmp_path, rows):
    csv_file = tmp_path / "large_test.csv"
    csv_file.write_text('\n'.join(["type, client, tx, amount"] + rows))

    engine = PaymentsEngine()
    snapshots = engine.process_file(str(csv_file))
    return engine, {snapshot.client: snapshot for snapshot in snapshots}


class TestPaymentsEngineLargeScale:
    def test_1000_accounts_6000_transactions(self, tmp_path):
        num_clients = 1000
        rows = []
        tx_id = 1

        # Per client: deposits 100 + 200 + 300, withdrawals 50 + 100, then a late deposit of 50.0001
        for client_id in range(1, num_clients + 1):
            for kind, value in [("deposit", "100"), ("deposit", "200"), ("deposit", "300"),
                                ("withdrawal", "50"), ("withdrawal", "100")]:
                rows.append(f"{kind}, {client_id}, {tx_id}, {value}")
                tx_id += 1
        for client_id in range(1, num_clients + 1):
            rows.append(f"deposit, {client_id}, {tx_id}, 50.0001")
            tx_id += 1

        engine, accounts = run(tmp_path, rows)

        assert len(accounts) == num_clients
        assert engine.ledger.stats.processed == 6 * num_clients
        for client_id in range(1, num_clients + 1):
            assert accounts[client_id].available == Amount.parse("500.0001"), f"Client {client_id}"
            assert accounts[client_id].held == Amount.ZERO
            assert accounts[client_id].locked is False

    def test_mixed_lifecycles(self, tmp_path):
        rows = []

        def deposits(client_ids, values):
            for client_id in client_ids:
                for offset, value in enumerate(values, start=1):
                    rows.append(f"deposit, {client_id}, {client_id * 100 + offset}, {value}")

        def follow_up(kind, client_ids, offset):
            for client_id in client_ids:
                rows.append(f"{kind}, {client_id}, {client_id * 100 + offset},")

        plain = range(1, 11)
        resolved = range(11, 21)
        charged_back = range(21, 31)
        replayed = range(31, 41)
        overdrawn = range(41, 51)

        deposits(plain, ["100", "150", "250"])

        deposits(resolved, ["100", "150", "250"])
        follow_up("dispute", resolved, 2)
        follow_up("resolve", resolved, 2)

        deposits(charged_back, ["100", "150", "250"])
        follow_up("dispute", charged_back, 1)
        follow_up("chargeback", charged_back, 1)
        # Locked accounts ignore further activity
        for client_id in charged_back:
            rows.append(f"withdrawal, {client_id}, {client_id * 100 + 9}, 10")
        follow_up("dispute", charged_back, 2)

        # Reusing ids from another client's deposits is ignored
        deposits(replayed, ["75"])
        for client_id in replayed:
            rows.append(f"deposit, {client_id}, {(client_id - 30) * 100 + 1}, 1000")

        # Withdraw most funds, then a dispute would overdraw available
        deposits(overdrawn, ["80", "10"])
        for client_id in overdrawn:
            rows.append(f"withdrawal, {client_id}, {client_id * 100 + 3}, 80")
        follow_up("dispute", overdrawn, 1)
        follow_up("dispute", overdrawn, 2)

        engine, accounts = run(tmp_path, rows)

        for client_id in plain:
            assert accounts[client_id].available == Amount.parse("500"), f"Client {client_id}"
            assert accounts[client_id].held == Amount.ZERO

        for client_id in resolved:
            assert accounts[client_id].available == Amount.parse("500"), f"Client {client_id}"
            assert accounts[client_id].held == Amount.ZERO
            assert accounts[client_id].locked is False

        for client_id in charged_back:
            assert accounts[client_id].available == Amount.parse("400"), f"Client {client_id}"
            assert accounts[client_id].held == Amount.ZERO
            assert accounts[client_id].locked is True

        for client_id in replayed:
            assert accounts[client_id].available == Amount.parse("75"), f"Client {client_id}"

        # Dispute of tx 1 rejected (80 > 10 available), dispute of tx 2 accepted
        for client_id in overdrawn:
            assert accounts[client_id].available == Amount.ZERO, f"Client {client_id}"
            assert accounts[client_id].held == Amount.parse("10")

        for snapshot in accounts.values():
            assert not snapshot.available.is_negative()
            assert not snapshot.held.is_negative()
            assert snapshot.total == snapshot.available.add(snapshot.held)

        assert engine.ledger.stats.duplicates == len(replayed)
