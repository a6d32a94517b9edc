import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional

from exceptions import MalformedRecordError, RecordSourceError
from models import Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1
MAX_AMOUNT_INTEGER_DIGITS = 28
MAX_AMOUNT_SCALE = 28


class CsvRecordSource:
    """
    Reads transactions from a CSV file with a `type, client, tx, amount` header.
    Whitespace is trimmed and the amount column may be missing on dispute rows.

    With strict parsing a malformed row raises MalformedRecordError, otherwise
    the row is logged and skipped. A file that is not valid UTF-8 CSV is
    always fatal.
    """

    def __init__(self, filepath: str, strict: bool = True):
        self._filepath = filepath
        self._strict = strict

    def __iter__(self) -> Iterator[Transaction]:
        with open(self._filepath, "r", newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f, skipinitialspace=True)
            try:
                for row in reader:
                    transaction = self._parse_or_skip(row, reader.line_num)
                    if transaction:
                        yield transaction
            except UnicodeDecodeError as e:
                # decoding runs ahead of the csv reader, so there is no reliable line number
                raise RecordSourceError(f"{self._filepath} is not valid UTF-8: {e}") from e
            except csv.Error as e:
                raise MalformedRecordError(reader.line_num, None, str(e)) from e

    def _parse_or_skip(self, row: Dict[str, Optional[str]], line_number: int) -> Optional[Transaction]:
        try:
            return parse_csv_row(row, line_number)
        except MalformedRecordError as e:
            if self._strict:
                raise
            logger.warning(f"Skipping row: {e}")
            return None


def parse_csv_row(row: Dict[str, Optional[str]], line_number: int = 0) -> Transaction:
    """Parse CSV row into Transaction."""
    normalized = {
        k.strip(): (v or "").strip()
        for k, v in row.items()
        if isinstance(k, str)
    }

    try:
        transaction_type = TransactionType(normalized["type"].lower())
    except KeyError:
        raise MalformedRecordError(line_number, row, "missing type column") from None
    except ValueError:
        raise MalformedRecordError(line_number, row, f"unknown transaction type {normalized['type']!r}") from None

    client_id = _parse_unsigned(normalized, "client", MAX_CLIENT_ID, line_number, row)
    transaction_id = _parse_unsigned(normalized, "tx", MAX_TRANSACTION_ID, line_number, row)

    amount = None
    amount_str = normalized.get("amount", "")
    if amount_str and transaction_type.carries_amount:
        amount = _parse_amount(amount_str, line_number, row)

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_unsigned(normalized: Dict[str, str], column: str, maximum: int, line_number: int, row) -> int:
    value = normalized.get(column, "")
    if not (value.isascii() and value.isdigit()):
        raise MalformedRecordError(line_number, row, f"{column} must be an unsigned integer, got {value!r}")
    parsed = int(value)
    if parsed > maximum:
        raise MalformedRecordError(line_number, row, f"{column} {parsed} exceeds {maximum}")
    return parsed


def _parse_amount(value: str, line_number: int, row) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise MalformedRecordError(line_number, row, f"invalid amount {value!r}") from None
    if not amount.is_finite() or amount < 0:
        raise MalformedRecordError(line_number, row, f"amount must be a non-negative number, got {value!r}")
    if amount.adjusted() >= MAX_AMOUNT_INTEGER_DIGITS or amount.as_tuple().exponent < -MAX_AMOUNT_SCALE:
        raise MalformedRecordError(line_number, row, f"amount {value!r} is out of range")
    return amount
