import sys
import os
import io
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import ClientAccount
from report import format_decimal, write_report


class TestFormatDecimal:
    def test_pads_to_precision(self):
        assert format_decimal(Decimal("1.5")) == "1.5000"
        assert format_decimal(Decimal("0")) == "0.0000"
        assert format_decimal(Decimal("100")) == "100.0000"

    def test_rounds_half_even(self):
        assert format_decimal(Decimal("1.23455")) == "1.2346"
        assert format_decimal(Decimal("1.23445")) == "1.2344"

    def test_custom_precision(self):
        assert format_decimal(Decimal("2.5"), precision=2) == "2.50"
        assert format_decimal(Decimal("2.5"), precision=0) == "2"

    def test_never_scientific(self):
        assert format_decimal(Decimal("1E+3")) == "1000.0000"


class TestWriteReport:
    def test_rows_sorted_by_client(self):
        accounts = [
            ClientAccount(client_id=2, available=Decimal("2"), held=Decimal("0.5")),
            ClientAccount(client_id=1, available=Decimal("1.5"), locked=True),
        ]
        out = io.StringIO()

        write_report(accounts, out=out)

        assert out.getvalue().splitlines() == [
            "client,available,held,total,locked",
            "1,1.5000,0.0000,1.5000,true",
            "2,2.0000,0.5000,2.5000,false",
        ]

    def test_empty(self):
        out = io.StringIO()
        write_report([], out=out)
        assert out.getvalue() == "client,available,held,total,locked\n"


class TestFormatLargeValues:
    def test_large_value_keeps_every_digit(self):
        assert format_decimal(Decimal("1e25")) == "10000000000000000000000000.0000"
        assert format_decimal(Decimal("123456789012345678901234567.00015")) == "123456789012345678901234567.0002"

    def test_report_with_large_deposit(self):
        out = io.StringIO()
        write_report([ClientAccount(client_id=1, available=Decimal("1e25"))], out=out)

        assert out.getvalue().splitlines()[1] == (
            "1,10000000000000000000000000.0000,0.0000,10000000000000000000000000.0000,false"
        )
