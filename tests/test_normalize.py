import datetime as dt

import pytest

from cashpulse.data.normalize import (
    load_transactions,
    parse_amount,
    parse_csv_data,
    read_csv_records,
    sample_template,
    validate_financial_data,
)
from cashpulse.data.schemas import TransactionStatus, TransactionType
from cashpulse.errors import ParseError, ValidationError

from conftest import SAMPLE_CSV


def test_sample_template_parses_to_two_transactions():
    out = parse_csv_data(SAMPLE_CSV, "demo")
    assert len(out) == 2
    first, second = out
    assert first.date == dt.date(2024, 1, 15)
    assert first.description == "Client Payment - ABC Corp"
    assert first.category == "Revenue"
    assert first.amount == 5000
    assert first.type == TransactionType.INCOME
    assert second.type == TransactionType.EXPENSE
    assert second.user_id == "demo"


def test_template_accessor_matches_documented_layout():
    assert sample_template().splitlines()[0] == "Date,Description,Category,Amount,Type"


def test_sign_decides_type_when_column_absent():
    csv_text = "date,description,category,amount\n2024-02-01,Refund,Supplies,-150\n2024-02-02,Sale,Revenue,300\n"
    refund, sale = parse_csv_data(csv_text, "u1")
    assert (refund.amount, refund.type) == (150, TransactionType.EXPENSE)
    assert (sale.amount, sale.type) == (300, TransactionType.INCOME)


def test_zero_amount_without_type_is_expense():
    (t,) = parse_csv_data("Amount\n0\n", "u1")
    assert t.type == TransactionType.EXPENSE
    assert t.amount == 0


@pytest.mark.parametrize(
    "value, expected",
    [
        ("income", TransactionType.INCOME),
        ("INCOME", TransactionType.INCOME),
        ("Income", TransactionType.INCOME),
        ("expense", TransactionType.EXPENSE),
        ("transfer", TransactionType.EXPENSE),
    ],
)
def test_explicit_type_column(value, expected):
    (t,) = parse_csv_data(f"AMOUNT,TYPE\n-200,{value}\n", "u1")
    assert t.type == expected
    assert t.amount == 200


def test_empty_type_cell_falls_back_to_sign():
    (t,) = parse_csv_data("Amount,Type\n75,\n", "u1")
    assert t.type == TransactionType.INCOME


def test_defaults_for_missing_columns():
    (t,) = parse_csv_data("Amount\n42.5\n", "u1")
    assert t.description == "Unknown"
    assert t.category == "Other"
    assert t.date == dt.date.today()
    assert t.status == TransactionStatus.COMPLETED


def test_cells_are_trimmed():
    (t,) = parse_csv_data("Date, Description , Category,Amount\n2024-03-01,  Coffee  , Meals ,  12\n", "u1")
    assert t.description == "Coffee"
    assert t.category == "Meals"
    assert t.amount == 12


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.5", 12.5),
        ("-3", -3.0),
        ("12.5 USD", 12.5),
        (".75", 0.75),
        ("abc", 0.0),
        ("$100", 0.0),
        ("", 0.0),
        (None, 0.0),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_unparseable_amount_defaults_to_zero():
    (t,) = parse_csv_data("Amount,Description\nn/a,Mystery\n", "u1")
    assert t.amount == 0
    assert t.type == TransactionType.EXPENSE


def test_non_iso_date_is_accepted():
    (t,) = parse_csv_data("Date,Amount\n01/15/2024,10\n", "u1")
    assert t.date == dt.date(2024, 1, 15)


def test_invalid_date_raises_parse_error():
    with pytest.raises(ParseError, match="row 2"):
        parse_csv_data("Date,Amount\nnot-a-date,10\n", "u1")


@pytest.mark.parametrize("value", ["NaT", "nat", "NaN", "nan"])
def test_missing_value_date_tokens_raise_parse_error(value):
    with pytest.raises(ParseError, match="row 2"):
        parse_csv_data(f"Date,Amount,Type\n{value},100,income\n2024-01-02,50,income\n", "u1")


def test_malformed_csv_raises_parse_error():
    with pytest.raises(ParseError, match="Failed to parse CSV data"):
        parse_csv_data("a,b\n1,2\n3,4,5,6\n", "u1")


def test_empty_input_raises_parse_error():
    with pytest.raises(ParseError):
        read_csv_records("")


def test_validate_financial_data():
    assert validate_financial_data([]) is False
    assert validate_financial_data([{"Amount": "1"}, {"AMOUNT": "2"}, {"amount": "3"}]) is True
    assert validate_financial_data([{"Total": "1"}]) is False
    assert validate_financial_data([{"Amount": "1"}, {"Total": "1"}]) is False


def test_load_transactions_rejects_file_without_amount_column():
    with pytest.raises(ValidationError):
        load_transactions("Date,Description\n2024-01-01,Thing\n", "u1")


def test_load_transactions_rejects_header_only_file():
    with pytest.raises(ValidationError):
        load_transactions("Date,Amount\n", "u1")


def test_load_transactions_accepts_valid_file():
    assert len(load_transactions(SAMPLE_CSV, "u1")) == 2
