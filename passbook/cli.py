"""Interactive menu for opening accounts, posting entries and viewing reports."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Callable, TextIO, TypeVar

from passbook.dates import format_date, is_valid_date, is_within_range
from passbook.ledger import (
    MAX_BATCH,
    MAX_DEPOSIT,
    MIN_DEPOSIT,
    Bank,
    Entry,
    LedgerError,
    NewAccount,
    find_record,
)
from passbook.reports import format_account_history, format_records, format_transactions
from passbook.storage import NAME_SIZE, Record, StorageError, Transaction

Ask = Callable[[str], str]
T = TypeVar("T")

SEPARATOR = "_" * 66
DATE_FORMATS = "(dd-mm-yyyy or dd/mm/yyyy)"

MENU = (
    f"{SEPARATOR}\n\n\n"
    "1. Create an account file (destroys all current files).\n"
    "2. Deposit.\n"
    "3. Withdraw.\n"
    "4. Read all transaction history.\n"
    "5. Read transaction history of given account number.\n"
    "6. View the total balance of all account holders. \n"
    "7. Exit.\n"
)
MENU_PROMPT = "Enter your choice: "
INVALID_CHOICE = "Invalid input.\n"


def _token(answer: str) -> str:
    tokens = answer.split()
    if not tokens:
        raise ValueError("empty answer")
    return tokens[0]


def _integer(answer: str) -> int:
    return int(_token(answer))


def _ask_until(
    ask: Ask,
    prompt: str,
    retry: str,
    convert: Callable[[str], T],
    accept: Callable[[T], bool] = lambda value: True,
) -> T:
    """Ask until an answer converts and is accepted, switching to ``retry`` after a miss."""
    current = prompt
    while True:
        answer = ask(current)
        try:
            value = convert(answer)
        except ValueError:
            pass
        else:
            if accept(value):
                return value
        current = retry


def _ask_count(ask: Ask, prompt: str, retry: str) -> int:
    return _ask_until(ask, prompt, retry, _integer, lambda n: 1 <= n <= MAX_BATCH)


def _fits_name(name: str) -> bool:
    return len(name.encode("utf-8")) < NAME_SIZE


def create_accounts_interactive(bank: Bank, ask: Ask, out: TextIO) -> list[Record]:
    """Ask for new accounts and replace the bank's files with them."""
    count = _ask_count(
        ask,
        "Enter the number of accounts you want to enter: ",
        "Enter a valid number. The given number should be less than "
        f"{MAX_BATCH}.\nEnter the number of accounts: ",
    )
    accounts = []
    for number in range(1, count + 1):
        out.write(f"Enter account {number} details: \n")
        opened = _ask_until(
            ask,
            f"Enter the date of opening the account {DATE_FORMATS}: ",
            "Enter a valid date.\n",
            _token,
            is_valid_date,
        )
        accno = _ask_until(ask, "Enter account number: ", "Enter account number: ", _integer)
        name = _ask_until(ask, "Enter name: ", "Enter name: ", _token, _fits_name)
        balance = _ask_until(
            ask, "Enter opening balance: ", "Enter opening balance: ", _integer
        )
        out.write("\n")
        accounts.append(NewAccount(opened, accno, name, balance))
    return bank.create(accounts)


def _list_accounts(records: list[Record], out: TextIO) -> None:
    out.write("Account numbers and their last deposits: \n")
    for record in records:
        out.write(f"{record.accno} -> {format_date(record.day, record.month, record.year)}\n")


def _collect_entries(
    records: list[Record],
    count: int,
    ask: Ask,
    out: TextIO,
    today: date,
    date_prompt: str,
    amount_prompt: str,
    amount_retry: str,
    amount_ok: Callable[[int, int], bool],
    sign: int,
) -> list[Entry]:
    known = {record.accno for record in records}
    balances: dict[int, int] = {}
    for record in records:
        balances.setdefault(record.accno, record.balance)

    entries = []
    for _ in range(count):
        accno = _ask_until(
            ask,
            "Enter account number: ",
            "Enter a valid account number: ",
            _integer,
            lambda n: n in known,
        )
        record = find_record(records, accno)
        opened = format_date(record.day, record.month, record.year)
        when = _ask_until(
            ask,
            date_prompt,
            f"Enter a valid date {DATE_FORMATS}: ",
            _token,
            lambda text: is_valid_date(text, today) and is_within_range(text, opened, today),
        )
        amount = _ask_until(
            ask,
            amount_prompt,
            amount_retry,
            _integer,
            lambda value: amount_ok(value, balances[accno]),
        )
        out.write("\n")
        balances[accno] += sign * amount
        entries.append(Entry(accno, when, amount))
    return entries


def _load_accounts(bank: Bank) -> list[Record]:
    records = bank.load_records()
    bank.load_transactions()
    if not records:
        raise LedgerError("there are no accounts")
    return records


def deposit_interactive(
    bank: Bank, ask: Ask, out: TextIO, today: date | None = None
) -> list[Transaction]:
    """Ask for deposits, post them and return the new transactions."""
    if today is None:
        today = date.today()
    records = _load_accounts(bank)
    count = _ask_count(
        ask,
        "Enter the number of deposits: ",
        f"Invalid number, enter a number less than {MAX_BATCH}: ",
    )
    _list_accounts(records, out)
    bounds = f"(>{MIN_DEPOSIT} and <{MAX_DEPOSIT})"
    entries = _collect_entries(
        records,
        count,
        ask,
        out,
        today,
        f"Enter the date of deposit {DATE_FORMATS}: ",
        f"Enter deposit amount {bounds}: ",
        f"Enter a valid deposit amount {bounds}: ",
        lambda amount, balance: MIN_DEPOSIT <= amount <= MAX_DEPOSIT,
        1,
    )
    return bank.deposit(entries, today)


def withdraw_interactive(
    bank: Bank, ask: Ask, out: TextIO, today: date | None = None
) -> list[Transaction]:
    """Ask for withdrawals, post them and return the new transactions."""
    if today is None:
        today = date.today()
    records = _load_accounts(bank)
    count = _ask_count(
        ask,
        "Enter the number of withdrawal: ",
        f"Enter a number less than {MAX_BATCH}: ",
    )
    _list_accounts(records, out)
    entries = _collect_entries(
        records,
        count,
        ask,
        out,
        today,
        f"Enter withdrawal date {DATE_FORMATS}: ",
        "Enter withdrawal amount: ",
        "Invalid withdrawal amount.\nEnter Withdrawal amount: ",
        lambda amount, balance: 0 < amount <= balance,
        -1,
    )
    return bank.withdraw(entries, today)


def show_records(bank: Bank, out: TextIO) -> None:
    """Write the table of account records."""
    out.write(format_records(bank.load_records()))


def show_transactions(bank: Bank, out: TextIO) -> None:
    """Write the full transaction history."""
    out.write(format_transactions(bank.load_transactions()))


def show_account_history(bank: Bank, ask: Ask, out: TextIO) -> None:
    """Ask for an account number and write its transaction history."""
    transactions = bank.load_transactions()
    accno = _ask_until(ask, "Enter account number: ", "Enter account number: ", _integer)
    out.write(format_account_history(transactions, accno))


def run_menu(bank: Bank, ask: Ask, out: TextIO) -> None:
    """Show the menu and carry out choices until the user exits or input ends."""
    actions: dict[str, Callable[[], object]] = {
        "1": lambda: create_accounts_interactive(bank, ask, out),
        "2": lambda: deposit_interactive(bank, ask, out),
        "3": lambda: withdraw_interactive(bank, ask, out),
        "4": lambda: show_transactions(bank, out),
        "5": lambda: show_account_history(bank, ask, out),
        "6": lambda: show_records(bank, out),
    }
    try:
        while True:
            out.write(MENU)
            answer = ask(MENU_PROMPT).strip()
            choice = answer[:1]
            if choice == "7":
                break
            action = actions.get(choice)
            if action is None:
                out.write(INVALID_CHOICE)
            else:
                try:
                    action()
                except (StorageError, LedgerError) as exc:
                    out.write(f"Error: {exc}\n")
            out.write("\n\n")
    except EOFError:
        return


def main(argv: list[str] | None = None) -> int:
    """Run the interactive menu on the data files in a directory."""
    parser = argparse.ArgumentParser(description="Keep a small ledger of bank accounts.")
    parser.add_argument(
        "--data",
        default="Files",
        help="directory holding the account and transaction files",
    )
    args = parser.parse_args(argv)
    directory = Path(args.data)
    directory.mkdir(parents=True, exist_ok=True)
    run_menu(Bank(directory), input, sys.stdout)
    return 0