"""Plain-text tables of account records and transaction history."""

from __future__ import annotations

from typing import Iterable

from passbook.storage import Record, Transaction

RECORDS_TITLE = "Record file: "
TRANSACTIONS_TITLE = "Deposit file: "
NO_ACCOUNT_MESSAGE = "No such account number is found."


def _date_cell(day: int, month: int, year: int) -> str:
    return f"{day:>5}-{month}-{year}"


def _records_header() -> str:
    return f"{'Date':>10}{'Acc. no':>12}{'Name':>11}{'Balance':>15}"


def _transactions_header() -> str:
    return (
        f"{'Date':>10}{'Acc. no':>12}{'Name':>13}"
        f"{'Deposit':>15}{'Withdraw':>15}{'Balance':>15}"
    )


def _record_row(record: Record) -> str:
    return (
        _date_cell(record.day, record.month, record.year)
        + f"{record.accno:>9}{record.name:>12}{record.balance:>14}"
    )


def _transaction_row(txn: Transaction) -> str:
    return (
        _date_cell(txn.day, txn.month, txn.year)
        + f"{txn.accno:>8}{txn.name:>15}{txn.deposit:>12}"
        + f"{txn.withdraw:>15}{txn.balance:>16}"
    )


def _lines(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def format_records(records: Iterable[Record]) -> str:
    """Render every account record under a titled table header."""
    return _lines([RECORDS_TITLE, _records_header(), *map(_record_row, records)])


def format_transactions(transactions: Iterable[Transaction]) -> str:
    """Render the full transaction history under a titled table header."""
    return _lines(
        [TRANSACTIONS_TITLE, _transactions_header(), *map(_transaction_row, transactions)]
    )


def format_account_history(transactions: Iterable[Transaction], accno: int) -> str:
    """Render the transactions of one account.

    When the account has no transactions, a single notice line is returned
    instead of a table.
    """
    matching = [txn for txn in transactions if txn.accno == accno]
    if not matching:
        return _lines([NO_ACCOUNT_MESSAGE])
    return _lines([_transactions_header(), *map(_transaction_row, matching)])