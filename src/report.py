import csv
import sys
from decimal import ROUND_HALF_EVEN, Decimal, Inexact
from typing import Iterable, Optional, TextIO

from models import MONEY_CONTEXT, ClientAccount

HEADER = ["client", "available", "held", "total", "locked"]

# Same range as balance arithmetic, but rounding to the output precision is expected.
REPORT_CONTEXT = MONEY_CONTEXT.copy()
REPORT_CONTEXT.traps[Inexact] = False


def format_decimal(value: Decimal, precision: int = 4) -> str:
    """Format decimal with exactly `precision` decimal places."""
    quantum = Decimal(1).scaleb(-precision)
    return f"{value.quantize(quantum, rounding=ROUND_HALF_EVEN, context=REPORT_CONTEXT):f}"


def write_report(accounts: Iterable[ClientAccount], precision: int = 4, out: Optional[TextIO] = None) -> None:
    """Write one CSV row per account, sorted by client id."""
    writer = csv.writer(out if out is not None else sys.stdout, lineterminator="\n")
    writer.writerow(HEADER)
    for account in sorted(accounts, key=lambda a: a.client_id):
        writer.writerow([
            account.client_id,
            format_decimal(account.available, precision),
            format_decimal(account.held, precision),
            format_decimal(account.total, precision),
            str(account.locked).lower(),
        ])
