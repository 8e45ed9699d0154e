from datetime import date

import pytest

from passbook.ledger import (
    Bank,
    Entry,
    LedgerError,
    NewAccount,
    apply_deposits,
    apply_withdrawals,
    find_record,
    merge_transactions,
    open_accounts,
    sort_by_date,
)
from passbook.storage import Record, StorageError, Transaction

TODAY = date(2024, 6, 15)


def _records():
    return [
        Record(1, 1, 2020, 11, "alice", 500),
        Record(5, 3, 2021, 22, "bob", 1000),
    ]


def _txn(day, month, year, accno=1):
    return Transaction(day, month, year, accno, "x", 0, 0, 0)


def test_sort_by_date_orders_and_is_stable():
    a = _txn(5, 3, 2021, 1)
    b = _txn(1, 1, 2020, 2)
    c = _txn(5, 3, 2021, 3)
    d = _txn(30, 12, 2020, 4)
    result = sort_by_date([a, b, c, d])
    assert [t.accno for t in result] == [2, 4, 1, 3]


def test_find_record():
    records = _records()
    assert find_record(records, 22).name == "bob"
    with pytest.raises(LedgerError):
        find_record(records, 99)


def test_open_accounts_records_keep_order_transactions_sorted():
    accounts = [
        NewAccount("5-3-2021", 22, "bob", 1000),
        NewAccount("1/1/2020", 11, "alice", 500),
    ]
    records, txns = open_accounts(accounts)
    assert [r.accno for r in records] == [22, 11]
    assert [t.accno for t in txns] == [11, 22]
    assert records[1] == Record(1, 1, 2020, 11, "alice", 500)
    for txn in txns:
        assert txn.deposit == 0 and txn.withdraw == 0
        assert txn.balance == find_record(records, txn.accno).balance


@pytest.mark.parametrize("count", [0, 6])
def test_open_accounts_batch_size(count):
    accounts = [NewAccount("1-1-2020", n, "n", 100) for n in range(count)]
    with pytest.raises(LedgerError):
        open_accounts(accounts)


def test_open_accounts_rejects_invalid_date():
    with pytest.raises(LedgerError):
        open_accounts([NewAccount("30-2-2020", 1, "a", 100)])


def test_deposit_updates_balance_and_date():
    records = _records()
    updated, posted = apply_deposits(records, [Entry(11, "10-3-2024", 200)], TODAY)
    assert len(posted) == 1
    txn = posted[0]
    assert (txn.day, txn.month, txn.year) == (10, 3, 2024)
    assert txn.name == "alice"
    assert txn.deposit == 200 and txn.withdraw == 0
    assert txn.balance == 500 + 200
    alice = find_record(updated, 11)
    assert alice.balance == txn.balance
    assert (alice.day, alice.month, alice.year) == (10, 3, 2024)
    assert find_record(updated, 22) == records[1]
    assert records[0].balance == 500


def test_deposits_accumulate_within_batch():
    entries = [Entry(11, "1-2-2024", 100), Entry(11, "1-3-2024", 300)]
    updated, posted = apply_deposits(_records(), entries, TODAY)
    assert posted[1].balance == posted[0].balance + 300
    assert find_record(updated, 11).balance == posted[1].balance


@pytest.mark.parametrize("amount", [100, 1_000_000])
def test_deposit_amount_bounds_accepted(amount):
    _, posted = apply_deposits(_records(), [Entry(22, "1-1-2024", amount)], TODAY)
    assert posted[0].deposit == amount


@pytest.mark.parametrize("amount", [99, 1_000_001])
def test_deposit_amount_bounds_rejected(amount):
    with pytest.raises(LedgerError):
        apply_deposits(_records(), [Entry(22, "1-1-2024", amount)], TODAY)


@pytest.mark.parametrize("text", ["1-2-2021", "20-6-2024", "1-7-2024", "31-4-2023"])
def test_deposit_rejects_dates_out_of_range(text):
    with pytest.raises(LedgerError):
        apply_deposits(_records(), [Entry(22, text, 500)], TODAY)


def test_deposit_unknown_account():
    with pytest.raises(LedgerError):
        apply_deposits(_records(), [Entry(99, "1-1-2024", 500)], TODAY)


def test_withdrawal_lowers_balance_and_keeps_date():
    records = _records()
    updated, posted = apply_withdrawals(records, [Entry(22, "1-6-2024", 400)], TODAY)
    assert posted[0].withdraw == 400 and posted[0].deposit == 0
    assert posted[0].balance == 1000 - 400
    bob = find_record(updated, 22)
    assert bob.balance == posted[0].balance
    assert (bob.day, bob.month, bob.year) == (5, 3, 2021)


def test_withdrawal_whole_balance_allowed():
    updated, _ = apply_withdrawals(_records(), [Entry(11, "1-6-2024", 500)], TODAY)
    assert find_record(updated, 11).balance == 0


@pytest.mark.parametrize("amount", [0, -5, 501])
def test_withdrawal_invalid_amount(amount):
    with pytest.raises(LedgerError):
        apply_withdrawals(_records(), [Entry(11, "1-6-2024", amount)], TODAY)


def test_withdrawals_cannot_overdraw_across_batch():
    entries = [Entry(11, "1-6-2024", 300), Entry(11, "2-6-2024", 300)]
    with pytest.raises(LedgerError):
        apply_withdrawals(_records(), entries, TODAY)


def test_merge_transactions_sorted():
    existing = [_txn(1, 1, 2020, 1), _txn(1, 1, 2023, 2)]
    new = [_txn(1, 1, 2021, 3)]
    merged = merge_transactions(existing, new)
    assert [t.accno for t in merged] == [1, 3, 2]


def test_bank_round_trip(tmp_path):
    bank = Bank(tmp_path)
    bank.create(
        [NewAccount("5-3-2021", 22, "bob", 1000), NewAccount("1-1-2020", 11, "alice", 500)]
    )
    assert bank.load_records() == [
        Record(5, 3, 2021, 22, "bob", 1000),
        Record(1, 1, 2020, 11, "alice", 500),
    ]
    assert [t.accno for t in bank.load_transactions()] == [11, 22]

    posted = bank.deposit([Entry(11, "10-3-2024", 200)], TODAY)
    withdrawn = bank.withdraw([Entry(22, "1-2-2022", 100)], TODAY)

    txns = bank.load_transactions()
    assert len(txns) == 4
    assert txns == sort_by_date(txns)
    assert posted[0] in txns and withdrawn[0] in txns
    assert find_record(bank.load_records(), 11).balance == posted[0].balance
    assert find_record(bank.load_records(), 22).balance == withdrawn[0].balance


def test_bank_rejected_posting_leaves_files(tmp_path):
    bank = Bank(tmp_path)
    bank.create([NewAccount("1-1-2020", 11, "alice", 500)])
    before = bank.load_transactions()
    with pytest.raises(LedgerError):
        bank.withdraw([Entry(11, "1-1-2024", 600)], TODAY)
    assert bank.load_transactions() == before


def test_bank_missing_files(tmp_path):
    bank = Bank(tmp_path / "absent")
    with pytest.raises(StorageError):
        bank.load_records()
    with pytest.raises(StorageError):
        bank.deposit([Entry(1, "1-1-2024", 500)], TODAY)