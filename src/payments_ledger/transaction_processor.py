import logging

from payments_ledger.account import Account
from payments_ledger.errors import AccountError
from payments_ledger.models import Transaction, TransactionType, ProcessingResult
from payments_ledger.state_manager import StateManager

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions to the accounts held by a StateManager.
    Account errors are logged and reported as REJECTED, never raised.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS: Applied to the account
            REJECTED: The account refused it (locked, insufficient funds,
                duplicate or unknown deposit, wrong dispute state); nothing changed
        """
        account = self._state.get_or_create_account(transaction.client_id)

        try:
            self._apply(account, transaction)
        except AccountError as e:
            logger.debug(f"Failed to apply {transaction.transaction_type.value} tx {transaction.transaction_id} for client {transaction.client_id}: {e}")
            return ProcessingResult.REJECTED

        return ProcessingResult.SUCCESS

    def _apply(self, account: Account, transaction: Transaction) -> None:
        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                account.deposit(transaction.transaction_id, transaction.amount)
            case TransactionType.WITHDRAWAL:
                account.withdraw(transaction.amount)
            case TransactionType.DISPUTE:
                account.dispute(transaction.transaction_id)
            case TransactionType.RESOLVE:
                account.resolve(transaction.transaction_id)
            case TransactionType.CHARGEBACK:
                account.chargeback(transaction.transaction_id)
