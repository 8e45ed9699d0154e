"""A file-based bank ledger: accounts, deposits, withdrawals and statements."""

__version__ = "0.1.0"