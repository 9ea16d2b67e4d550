from decimal import Decimal

from payments_ledger.amounts import add_amounts, subtract_amounts
from payments_ledger.deposit_ledger import DepositLedger
from payments_ledger.errors import AccountLocked, InsufficientFunds


class Account:
    """
    Balances and lock flag of one client.

    Every operation checks its preconditions before touching any state, so a
    raised AccountError leaves the account exactly as it was.
    Only deposit and withdraw are gated on the lock flag.
    """

    def __init__(self, client_id: int):
        self.client_id = client_id
        self._available = Decimal("0")
        self._held = Decimal("0")
        self._locked = False
        self._ledger = DepositLedger()

    @property
    def available(self) -> Decimal:
        return self._available

    @property
    def held(self) -> Decimal:
        return self._held

    @property
    def total(self) -> Decimal:
        return add_amounts(self._available, self._held)

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def ledger(self) -> DepositLedger:
        return self._ledger

    def deposit(self, transaction_id: int, amount: Decimal) -> None:
        if self._locked:
            raise AccountLocked(transaction_id)

        self._ledger.insert(transaction_id, amount)
        self._available = add_amounts(self._available, amount)

    def withdraw(self, amount: Decimal) -> None:
        if self._locked:
            raise AccountLocked()
        if self._available < amount:
            raise InsufficientFunds()

        self._available = subtract_amounts(self._available, amount)

    def dispute(self, transaction_id: int) -> None:
        amount = self._ledger.dispute(transaction_id)
        self._available = subtract_amounts(self._available, amount)
        self._held = add_amounts(self._held, amount)

    def resolve(self, transaction_id: int) -> None:
        amount = self._ledger.resolve(transaction_id)
        self._held = subtract_amounts(self._held, amount)
        self._available = add_amounts(self._available, amount)

    def chargeback(self, transaction_id: int) -> None:
        amount = self._ledger.chargeback(transaction_id)
        self._held = subtract_amounts(self._held, amount)
        self._locked = True

    def __repr__(self) -> str:
        return f"Account(client={self.client_id}, available={self._available}, held={self._held}, locked={self._locked})"
