from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional

from payments_ledger.errors import (
    DepositAlreadyDisputed,
    DepositAlreadyReversed,
    DepositDoesNotExist,
    DepositNotDisputed,
    DuplicateTransactionId,
)


class DepositState(Enum):
    MAYBE_SETTLED = "maybe_settled"
    DISPUTED = "disputed"
    REVERSED = "reversed"


@dataclass
class DepositRecord:
    amount: Decimal
    state: DepositState = DepositState.MAYBE_SETTLED


class DepositLedger:
    """
    Dispute state of every deposit accepted by one account.

        MAYBE_SETTLED --dispute--> DISPUTED --resolve--> MAYBE_SETTLED
                                   DISPUTED --chargeback--> REVERSED

    REVERSED is terminal. Each transition returns the deposit amount and
    leaves the balance bookkeeping to the caller.
    """

    def __init__(self):
        self._deposits: Dict[int, DepositRecord] = {}

    def __len__(self) -> int:
        return len(self._deposits)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._deposits

    def state_of(self, transaction_id: int) -> Optional[DepositState]:
        record = self._deposits.get(transaction_id)
        return record.state if record else None

    def insert(self, transaction_id: int, amount: Decimal) -> None:
        """Record a new deposit. Ids are never reused, even once reversed."""
        if transaction_id in self._deposits:
            raise DuplicateTransactionId(transaction_id)
        self._deposits[transaction_id] = DepositRecord(amount=amount)

    def dispute(self, transaction_id: int) -> Decimal:
        record = self._get(transaction_id)
        if record.state == DepositState.DISPUTED:
            raise DepositAlreadyDisputed(transaction_id)
        if record.state == DepositState.REVERSED:
            raise DepositAlreadyReversed(transaction_id)

        record.state = DepositState.DISPUTED
        return record.amount

    def resolve(self, transaction_id: int) -> Decimal:
        record = self._get_disputed(transaction_id)
        record.state = DepositState.MAYBE_SETTLED
        return record.amount

    def chargeback(self, transaction_id: int) -> Decimal:
        record = self._get_disputed(transaction_id)
        record.state = DepositState.REVERSED
        return record.amount

    def _get(self, transaction_id: int) -> DepositRecord:
        record = self._deposits.get(transaction_id)
        if record is None:
            raise DepositDoesNotExist(transaction_id)
        return record

    def _get_disputed(self, transaction_id: int) -> DepositRecord:
        record = self._get(transaction_id)
        if record.state == DepositState.MAYBE_SETTLED:
            raise DepositNotDisputed(transaction_id)
        if record.state == DepositState.REVERSED:
            raise DepositAlreadyReversed(transaction_id)
        return record
