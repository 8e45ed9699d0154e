# passbook

A small interactive bank ledger kept in two binary files in one directory:

- `rec.bin` holds one record per account: a date (the opening date, moved
  forward by later deposits), the account number, the holder's name and
  the current balance.
- `txn.bin` holds every transaction in date order: the date, account
  number, name, amount deposited, amount withdrawn and the balance after it.

Both files start with a 4-byte little-endian entry count followed by
fixed-size entries; names are stored in a 30-byte field, so a name must be
shorter than 30 bytes in UTF-8.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
passbook
passbook --data path/to/directory
```

`--data` names the directory that holds the two files (default `Files`);
it is created if it does not exist. The menu offers:

1. Create an account file (destroys all current files).
2. Deposit.
3. Withdraw.
4. Read all transaction history.
5. Read transaction history of given account number.
6. View the total balance of all account holders (the table of account
   records).
7. Exit.

The menu also ends when input runs out. A missing or damaged data file, or
a rejected entry, is reported as an `Error: ...` line and the menu is shown
again.

Rules applied to what is entered:

- Between one and five accounts, deposits or withdrawals are entered in one
  go.
- Dates are typed as `dd-mm-yyyy` or `dd/mm/yyyy` (any single character
  separates the fields) and must be real calendar dates, not in a later
  year and not after today within the current month.
- A deposit or withdrawal date must also lie between the account's recorded
  date and today.
- A deposit must be between 100 and 1000000 inclusive; a withdrawal must be
  positive and no greater than the balance.
- A prompt is repeated until an acceptable answer is given.

## Using it from Python

```python
import datetime
from passbook.ledger import Bank, NewAccount, Entry
from passbook.reports import format_records, format_transactions

bank = Bank("Files")
bank.create([NewAccount(date="1-1-2020", accno=1, name="alice", opening_balance=500)])
bank.deposit([Entry(accno=1, date="5-1-2020", amount=250)], datetime.date.today())
bank.withdraw([Entry(accno=1, date="6-1-2020", amount=100)])
print(format_records(bank.load_records()))
print(format_transactions(bank.load_transactions()))
```

The modules:

- `passbook.dates`: `is_leap`, `parse_date`, `format_date`, `is_valid_date`
  and `is_within_range`.
- `passbook.storage`: the `Record` and `Transaction` dataclasses with
  `pack`/`unpack`, and `read_records`, `write_records`,
  `read_transactions`, `write_transactions`; problems raise `StorageError`.
- `passbook.ledger`: `Bank`, `NewAccount`, `Entry`, and the file-free
  functions `open_accounts`, `apply_deposits`, `apply_withdrawals`,
  `merge_transactions`, `sort_by_date` and `find_record`; rejected input
  raises `LedgerError`.
- `passbook.reports`: `format_records`, `format_transactions` and
  `format_account_history`, which return the tables as text.
- `passbook.cli`: the menu (`run_menu`, `main`) and its interactive steps,
  each taking a prompt function and an output stream.

## What it does not do

The ledger has no interest, no account closing, no editing or deleting of
past transactions, and no locking: two processes working on the same
directory at once can overwrite each other's changes.