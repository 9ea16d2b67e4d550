import csv
import logging
import os
import sys

from payments_ledger.payments_engine import PaymentsEngine

DEFAULT_FILE = "transactions.csv"
LOG_LEVEL_ENV = "PAYMENTS_LOG_LEVEL"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print("Usage: payments-ledger [input.csv]", file=sys.stderr)
        return 1

    configure_logging()

    filepath = args[0] if args else DEFAULT_FILE
    engine = PaymentsEngine()
    try:
        engine.process_file(filepath)
    except OSError as e:
        logger.error(f'Error opening "{filepath}": {e}')
        return 1
    except (csv.Error, UnicodeDecodeError) as e:
        logger.error(f'Fatal error reading "{filepath}": {e}')
        return 1

    engine.write_accounts_state(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
