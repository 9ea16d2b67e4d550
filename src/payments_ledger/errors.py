"""
Exception types raised by the ledger core and the event parser.

Account errors form one class per failure kind. Kinds shared by several
operations inherit from each operation's base class, so catching
``DisputeError`` catches exactly the ways a dispute can fail.
"""
from typing import Optional


class PaymentsError(Exception):
    """Base class for all errors raised by this project."""


class AccountError(PaymentsError):
    """An account operation was rejected. Account state is unchanged."""

    message = "Account operation rejected"

    def __init__(self, transaction_id: Optional[int] = None):
        self.transaction_id = transaction_id
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.transaction_id is None:
            return self.message
        return f"{self.message} (tx {self.transaction_id})"


class DepositError(AccountError):
    pass


class WithdrawError(AccountError):
    pass


class DisputeError(AccountError):
    pass


class ResolveError(AccountError):
    pass


class ChargebackError(AccountError):
    pass


class AccountLocked(DepositError, WithdrawError):
    message = "Account is locked"


class DuplicateTransactionId(DepositError):
    message = "Transaction ID has already been used"


class InsufficientFunds(WithdrawError):
    message = "Insufficient funds"


class DepositDoesNotExist(DisputeError, ResolveError, ChargebackError):
    message = "Deposit does not exist"


class DepositAlreadyDisputed(DisputeError):
    message = "Deposit is already disputed"


class DepositNotDisputed(ResolveError, ChargebackError):
    message = "Deposit is not currently disputed"


class DepositAlreadyReversed(DisputeError, ResolveError, ChargebackError):
    message = "Deposit has already been reversed"


class EventError(PaymentsError):
    """A CSV record could not be turned into a transaction."""


class MissingField(EventError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f'Missing required field "{field}"')


class InvalidField(EventError):
    def __init__(self, field: str, value: str, reason: str = "not a valid value"):
        self.field = field
        self.value = value
        super().__init__(f'Error parsing {field} "{value}": {reason}')


class UnknownTransactionType(EventError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f'Unknown type: "{token}"')
