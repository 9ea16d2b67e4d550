from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from payments_ledger.errors import InvalidField, MissingField, UnknownTransactionType
from payments_ledger.models import Transaction, TransactionType

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1
# Widest amount accepted: 28 integer digits, 28 decimal places
MAX_AMOUNT_DIGITS = 28


def parse_transaction(row: Dict[Optional[str], object]) -> Transaction:
    """
    Parse a csv.DictReader row into a Transaction.

    Raises an EventError subclass when a field is missing or malformed, or
    the type token is unknown. The amount column is only read for deposits
    and withdrawals.
    """
    normalized = _normalize(row)

    type_str = _required(normalized, "type").lower()
    try:
        transaction_type = TransactionType(type_str)
    except ValueError:
        raise UnknownTransactionType(type_str) from None

    client_id = _parse_id(normalized, "client", MAX_CLIENT_ID)
    transaction_id = _parse_id(normalized, "tx", MAX_TRANSACTION_ID)

    amount = None
    if transaction_type.requires_amount:
        amount = _parse_amount(_required(normalized, "amount"))

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _normalize(row: Dict[Optional[str], object]) -> Dict[str, str]:
    # DictReader stores surplus values under the None key and fills short
    # rows with None. Header names match case-insensitively, ignoring a BOM.
    return {
        key.strip().lstrip("\ufeff").strip().lower(): value.strip()
        for key, value in row.items()
        if key is not None and isinstance(value, str)
    }


def _required(normalized: Dict[str, str], field: str) -> str:
    value = normalized.get(field, "")
    if not value:
        raise MissingField(field)
    return value


def _parse_id(normalized: Dict[str, str], field: str, maximum: int) -> int:
    value = _required(normalized, field)
    if not (value.isascii() and value.isdigit()):
        raise InvalidField(field, value, "not an unsigned integer")
    parsed = int(value)
    if parsed > maximum:
        raise InvalidField(field, value, f"out of range 0..{maximum}")
    return parsed


def _parse_amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise InvalidField("amount", value, "not a decimal number") from None
    if not amount.is_finite():
        raise InvalidField("amount", value, "not a finite number")
    if amount < 0:
        raise InvalidField("amount", value, "must not be negative")
    if amount.adjusted() >= MAX_AMOUNT_DIGITS or amount.as_tuple().exponent < -MAX_AMOUNT_DIGITS:
        raise InvalidField("amount", value, "out of range")
    return amount
