"""Opening accounts and posting deposits and withdrawals to the ledger."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Sequence

from passbook.dates import format_date, is_valid_date, is_within_range, parse_date
from passbook.storage import (
    Record,
    Transaction,
    read_records,
    read_transactions,
    write_records,
    write_transactions,
)

MAX_BATCH = 5
MIN_DEPOSIT = 100
MAX_DEPOSIT = 1_000_000

TRANSACTIONS_FILE = "txn.bin"
RECORDS_FILE = "rec.bin"


class LedgerError(Exception):
    """Raised when an account or a posting is rejected."""


@dataclass(frozen=True)
class NewAccount:
    """Details of an account to be opened."""

    date: str
    accno: int
    name: str
    opening_balance: int


@dataclass(frozen=True)
class Entry:
    """A deposit or withdrawal against an existing account."""

    accno: int
    date: str
    amount: int


def _check_batch(items: Sequence, what: str) -> None:
    if not 1 <= len(items) <= MAX_BATCH:
        raise LedgerError(f"the number of {what} must be between 1 and {MAX_BATCH}")


def sort_by_date(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return the transactions ordered by date, oldest first."""
    return sorted(transactions, key=lambda t: (t.year, t.month, t.day))


def find_record(records: Iterable[Record], accno: int) -> Record:
    """Return the first record with account number ``accno``."""
    for record in records:
        if record.accno == accno:
            return record
    raise LedgerError(f"no account numbered {accno}")


def open_accounts(accounts: Sequence[NewAccount]) -> tuple[list[Record], list[Transaction]]:
    """Build the records and the opening transactions for new accounts.

    Records keep the given order; transactions are sorted by opening date.
    """
    accounts = list(accounts)
    _check_batch(accounts, "accounts")
    records = []
    for account in accounts:
        if not is_valid_date(account.date):
            raise LedgerError(f"invalid opening date: {account.date!r}")
        day, month, year = parse_date(account.date)
        records.append(
            Record(day, month, year, account.accno, account.name, account.opening_balance)
        )
    transactions = sort_by_date(
        Transaction(r.day, r.month, r.year, r.accno, r.name, 0, 0, r.balance)
        for r in records
    )
    return records, transactions


def _record_date(record: Record) -> str:
    return format_date(record.day, record.month, record.year)


def _post(
    records: Sequence[Record],
    entries: Sequence[Entry],
    today: date | None,
    kind: str,
    check_amount: Callable[[int, int], None],
    sign: int,
) -> list[Transaction]:
    _check_batch(entries, kind)
    if today is None:
        today = date.today()
    balances: dict[int, int] = {}
    for record in records:
        balances.setdefault(record.accno, record.balance)

    posted = []
    for entry in entries:
        record = find_record(records, entry.accno)
        if not (
            is_valid_date(entry.date, today)
            and is_within_range(entry.date, _record_date(record), today)
        ):
            raise LedgerError(f"invalid {kind[:-1]} date: {entry.date!r}")
        check_amount(entry.amount, balances[entry.accno])
        balances[entry.accno] += sign * entry.amount
        day, month, year = parse_date(entry.date)
        posted.append(
            Transaction(
                day,
                month,
                year,
                entry.accno,
                record.name,
                entry.amount if sign > 0 else 0,
                entry.amount if sign < 0 else 0,
                balances[entry.accno],
            )
        )
    return posted


def _check_deposit(amount: int, balance: int) -> None:
    if amount < MIN_DEPOSIT or amount > MAX_DEPOSIT:
        raise LedgerError(
            f"deposit must be between {MIN_DEPOSIT} and {MAX_DEPOSIT}, got {amount}"
        )


def _check_withdrawal(amount: int, balance: int) -> None:
    if amount <= 0 or amount > balance:
        raise LedgerError(f"invalid withdrawal amount: {amount}")


def apply_deposits(
    records: Sequence[Record], entries: Sequence[Entry], today: date | None = None
) -> tuple[list[Record], list[Transaction]]:
    """Post deposits; return the updated records and the new transactions.

    A record takes the date of a deposit that falls on or after its own date,
    and the highest balance reached.
    """
    records = list(records)
    entries = list(entries)
    posted = _post(records, entries, today, "deposits", _check_deposit, 1)
    if today is None:
        today = date.today()
    updated = []
    for record in records:
        record = replace(record)
        for txn in posted:
            if txn.accno != record.accno:
                continue
            txn_date = format_date(txn.day, txn.month, txn.year)
            if is_within_range(txn_date, _record_date(record), today):
                record.day, record.month, record.year = txn.day, txn.month, txn.year
            record.balance = max(record.balance, txn.balance)
        updated.append(record)
    return updated, posted


def apply_withdrawals(
    records: Sequence[Record], entries: Sequence[Entry], today: date | None = None
) -> tuple[list[Record], list[Transaction]]:
    """Post withdrawals; return the updated records and the new transactions.

    A record keeps its date and takes the lowest balance reached.
    """
    records = list(records)
    entries = list(entries)
    posted = _post(records, entries, today, "withdrawals", _check_withdrawal, -1)
    updated = []
    for record in records:
        record = replace(record)
        for txn in posted:
            if txn.accno == record.accno:
                record.balance = min(record.balance, txn.balance)
        updated.append(record)
    return updated, posted


def merge_transactions(
    existing: Iterable[Transaction], new: Iterable[Transaction]
) -> list[Transaction]:
    """Combine two transaction lists into one ordered by date."""
    return sort_by_date([*existing, *new])


class Bank:
    """The pair of data files kept in one directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        self.transactions_path = self.directory / TRANSACTIONS_FILE
        self.records_path = self.directory / RECORDS_FILE

    def create(self, accounts: Sequence[NewAccount]) -> list[Record]:
        """Replace both files with freshly opened accounts."""
        records, transactions = open_accounts(accounts)
        write_transactions(self.transactions_path, transactions)
        write_records(self.records_path, records)
        return records

    def _post(self, apply, entries, today) -> list[Transaction]:
        records = self.load_records()
        existing = self.load_transactions()
        updated, posted = apply(records, entries, today)
        write_records(self.records_path, updated)
        write_transactions(self.transactions_path, merge_transactions(existing, posted))
        return posted

    def deposit(self, entries: Sequence[Entry], today: date | None = None) -> list[Transaction]:
        """Post deposits to the files and return the new transactions."""
        return self._post(apply_deposits, entries, today)

    def withdraw(self, entries: Sequence[Entry], today: date | None = None) -> list[Transaction]:
        """Post withdrawals to the files and return the new transactions."""
        return self._post(apply_withdrawals, entries, today)

    def load_records(self) -> list[Record]:
        return read_records(self.records_path)

    def load_transactions(self) -> list[Transaction]:
        return read_transactions(self.transactions_path)