"""Fixed-layout binary files holding account records and transactions."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Iterable

NAME_SIZE = 30
_COUNT = struct.Struct("<i")


class StorageError(Exception):
    """Raised when a data file is missing, truncated or cannot hold a value."""


def _encode_name(name: str) -> bytes:
    raw = name.encode("utf-8")
    if len(raw) >= NAME_SIZE:
        raise StorageError(f"name longer than {NAME_SIZE - 1} bytes: {name!r}")
    return raw


def _decode_name(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass
class Transaction:
    """One line of the transaction history."""

    day: int
    month: int
    year: int
    accno: int
    name: str
    deposit: int = 0
    withdraw: int = 0
    balance: int = 0

    LAYOUT: ClassVar[struct.Struct] = struct.Struct(f"<4i{NAME_SIZE}s2x3i")

    def pack(self) -> bytes:
        return self.LAYOUT.pack(
            self.day,
            self.month,
            self.year,
            self.accno,
            _encode_name(self.name),
            self.deposit,
            self.withdraw,
            self.balance,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "Transaction":
        if len(data) != cls.LAYOUT.size:
            raise StorageError("truncated transaction")
        day, month, year, accno, name, deposit, withdraw, balance = cls.LAYOUT.unpack(data)
        return cls(day, month, year, accno, _decode_name(name), deposit, withdraw, balance)


@dataclass
class Record:
    """An account: the date of its latest activity, its holder and balance."""

    day: int
    month: int
    year: int
    accno: int
    name: str
    balance: int = 0

    LAYOUT: ClassVar[struct.Struct] = struct.Struct(f"<4i{NAME_SIZE}s2xi")

    def pack(self) -> bytes:
        return self.LAYOUT.pack(
            self.day,
            self.month,
            self.year,
            self.accno,
            _encode_name(self.name),
            self.balance,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "Record":
        if len(data) != cls.LAYOUT.size:
            raise StorageError("truncated record")
        day, month, year, accno, name, balance = cls.LAYOUT.unpack(data)
        return cls(day, month, year, accno, _decode_name(name), balance)


def _read_all(path: Path | str, kind):
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise StorageError(f"cannot open {path.name}: {exc.strerror}") from exc
    if len(data) < _COUNT.size:
        raise StorageError(f"{path.name} has no header")
    (count,) = _COUNT.unpack_from(data)
    if count < 0:
        raise StorageError(f"{path.name} has a negative entry count")
    size = kind.LAYOUT.size
    body = data[_COUNT.size:]
    if len(body) < count * size:
        raise StorageError(f"{path.name} is truncated")
    return [kind.unpack(body[start:start + size]) for start in range(0, count * size, size)]


def _write_all(path: Path | str, items) -> None:
    items = list(items)
    payload = b"".join(item.pack() for item in items)
    path = Path(path)
    try:
        path.write_bytes(_COUNT.pack(len(items)) + payload)
    except OSError as exc:
        raise StorageError(f"cannot write {path.name}: {exc.strerror}") from exc


def read_transactions(path: Path | str) -> list[Transaction]:
    """Load every transaction from a transaction file."""
    return _read_all(path, Transaction)


def write_transactions(path: Path | str, transactions: Iterable[Transaction]) -> None:
    """Replace a transaction file with ``transactions``."""
    _write_all(path, transactions)


def read_records(path: Path | str) -> list[Record]:
    """Load every account record from a record file."""
    return _read_all(path, Record)


def write_records(path: Path | str, records: Iterable[Record]) -> None:
    """Replace a record file with ``records``."""
    _write_all(path, records)