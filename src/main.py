import sys
import logging

from config import EngineConfig
from exceptions import PaymentsError
from payments_engine import PaymentsEngine
from report import write_report


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Usage: payments-engine <input.csv>", file=sys.stderr)
        return 1

    try:
        config = EngineConfig.from_env()
    except PaymentsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level_value,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    engine = PaymentsEngine(config)
    try:
        accounts = engine.process_file(argv[0])
    except (PaymentsError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    write_report(accounts.values(), precision=config.precision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
