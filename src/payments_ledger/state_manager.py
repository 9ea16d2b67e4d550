from typing import Dict

from payments_ledger.account import Account


class StateManager:
    """
    Owns every client account of one run.
    Accounts are created on first reference and never removed.
    """

    def __init__(self):
        self._accounts: Dict[int, Account] = {}

    def __len__(self) -> int:
        return len(self._accounts)

    def get_or_create_account(self, client_id: int) -> Account:
        """Get existing account or create new one."""
        account = self._accounts.get(client_id)
        if account is None:
            account = Account(client_id)
            self._accounts[client_id] = account
        return account

    def get_all_accounts(self) -> Dict[int, Account]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
