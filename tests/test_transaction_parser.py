import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from payments_ledger.errors import EventError, InvalidField, MissingField, UnknownTransactionType
from payments_ledger.models import TransactionType
from payments_ledger.transaction_parser import parse_transaction


def row(type_=" deposit", client=" 1", tx=" 2", amount=" 1.5"):
    return {"type": type_, " client": client, " tx": tx, " amount": amount}


class TestParseTransaction:
    def test_deposit(self):
        transaction = parse_transaction(row())
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 2
        assert transaction.amount == Decimal("1.5")

    def test_withdrawal_keeps_precision(self):
        transaction = parse_transaction(row(type_="withdrawal", amount="0.1000"))
        assert transaction.transaction_type == TransactionType.WITHDRAWAL
        assert str(transaction.amount) == "0.1000"

    def test_type_is_case_insensitive(self):
        transaction = parse_transaction(row(type_="DePoSiT"))
        assert transaction.transaction_type == TransactionType.DEPOSIT

    @pytest.mark.parametrize("type_,expected", [
        ("dispute", TransactionType.DISPUTE),
        ("resolve", TransactionType.RESOLVE),
        ("chargeback", TransactionType.CHARGEBACK),
    ])
    def test_dispute_lifecycle_ignores_amount(self, type_, expected):
        for amount in (None, "", "12", "garbage"):
            transaction = parse_transaction(row(type_=type_, amount=amount))
            assert transaction.transaction_type == expected
            assert transaction.amount is None

    def test_short_row_without_amount_column(self):
        transaction = parse_transaction({"type": "dispute", "client": "3", "tx": "4"})
        assert transaction.client_id == 3
        assert transaction.transaction_id == 4

    def test_surplus_values_ignored(self):
        data = row()
        data[None] = ["extra"]
        assert parse_transaction(data).amount == Decimal("1.5")

    def test_unknown_type(self):
        with pytest.raises(UnknownTransactionType) as exc_info:
            parse_transaction(row(type_="transfer"))
        assert exc_info.value.token == "transfer"

    @pytest.mark.parametrize("field", ["type", "client", "tx"])
    def test_missing_required_field(self, field):
        data = {"type": "deposit", "client": "1", "tx": "1", "amount": "1"}
        data[field] = ""
        with pytest.raises(MissingField) as exc_info:
            parse_transaction(data)
        assert exc_info.value.field == field

    @pytest.mark.parametrize("type_", ["deposit", "withdrawal"])
    def test_missing_amount(self, type_):
        with pytest.raises(MissingField) as exc_info:
            parse_transaction(row(type_=type_, amount=None))
        assert exc_info.value.field == "amount"

    @pytest.mark.parametrize("client", ["abc", "-1", "1.0", "65536"])
    def test_invalid_client(self, client):
        with pytest.raises(InvalidField) as exc_info:
            parse_transaction(row(client=client))
        assert exc_info.value.field == "client"

    def test_transaction_id_bounds(self):
        assert parse_transaction(row(tx="4294967295")).transaction_id == 4294967295
        with pytest.raises(InvalidField):
            parse_transaction(row(tx="4294967296"))

    @pytest.mark.parametrize("amount", ["abc", "NaN", "Infinity", "-1.5"])
    def test_invalid_amount(self, amount):
        with pytest.raises(InvalidField) as exc_info:
            parse_transaction(row(amount=amount))
        assert exc_info.value.field == "amount"

    def test_errors_share_base_class(self):
        assert issubclass(MissingField, EventError)
        assert issubclass(InvalidField, EventError)
        assert issubclass(UnknownTransactionType, EventError)

    def test_header_names_ignore_case_and_bom(self):
        data = {"\ufeffType": "deposit", "Client": "1", " TX": "2", "AMOUNT ": "3.5"}
        transaction = parse_transaction(data)
        assert transaction.client_id == 1
        assert transaction.transaction_id == 2
        assert transaction.amount == Decimal("3.5")

    @pytest.mark.parametrize("amount", ["1E+28", "79228162514264337593543950336", "0.00000000000000000000000000001"])
    def test_amount_out_of_range(self, amount):
        with pytest.raises(InvalidField) as exc_info:
            parse_transaction(row(amount=amount))
        assert "out of range" in str(exc_info.value)

    def test_widest_amounts_accepted(self):
        assert parse_transaction(row(amount="9999999999999999999999999999")).amount == Decimal("9999999999999999999999999999")
        assert parse_transaction(row(amount="0.0000000000000000000000000001")).amount == Decimal("1E-28")
