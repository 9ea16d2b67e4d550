import csv
import logging
from typing import Dict, Iterable, Optional, TextIO

from payments_ledger.account import Account
from payments_ledger.amounts import format_amount
from payments_ledger.errors import EventError
from payments_ledger.models import Transaction, ProcessingResult, ProcessingStats
from payments_ledger.state_manager import StateManager
from payments_ledger.transaction_parser import parse_transaction
from payments_ledger.transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)

OUTPUT_HEADER = "client,available,held,total,locked"


class PaymentsEngine:
    """
    Replays a CSV transaction log against client accounts, in input order.

    Unparseable records and rejected transactions are logged and skipped.
    Only I/O and CSV framing errors escape process_file / process_stream.
    """

    def __init__(self):
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, Account]:
        """Process CSV file and return final account states."""
        with open(filepath, "r", encoding="utf-8-sig", newline="") as f:
            return self.process_stream(f)

    def process_stream(self, stream: Iterable[str]) -> Dict[int, Account]:
        """Process CSV text (header first) and return final account states."""
        logger.info("Starting processing")

        reader = csv.DictReader(stream, skipinitialspace=True)
        for row in reader:
            transaction = self._parse_csv_row(reader.line_num, row)
            if transaction is not None:
                self.handle_transaction(transaction)

        logger.info(f"Processing complete. {self._stats}")
        return self._state.get_all_accounts()

    def handle_transaction(self, transaction: Transaction) -> ProcessingResult:
        result = self._processor.process_transaction(transaction)
        if result == ProcessingResult.SUCCESS:
            self._stats.record_success()
        else:
            self._stats.record_rejection()
        return result

    def write_accounts_state(self, stream: TextIO) -> None:
        """Write one CSV row per account, ordered by client id."""
        accounts = self._state.get_all_accounts()

        stream.write(OUTPUT_HEADER + "\n")
        for client_id in sorted(accounts.keys()):
            account = accounts[client_id]
            stream.write(
                f"{client_id},"
                f"{format_amount(account.available)},"
                f"{format_amount(account.held)},"
                f"{format_amount(account.total)},"
                f"{str(account.locked).lower()}\n"
            )

    def _parse_csv_row(self, line_num: int, row: Dict) -> Optional[Transaction]:
        try:
            return parse_transaction(row)
        except EventError as e:
            self._stats.record_skipped()
            logger.warning(f"Skipping line {line_num}: {e}")
            return None


def run(input_stream: Iterable[str], output_stream: TextIO) -> PaymentsEngine:
    """Process a whole CSV stream and write the final account states."""
    engine = PaymentsEngine()
    engine.process_stream(input_stream)
    engine.write_accounts_state(output_stream)
    return engine
