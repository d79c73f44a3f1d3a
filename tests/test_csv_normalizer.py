"""Tests for parse_stock_csv: both header layouts and row rejection rules."""

import pytest

from src.application.services.csv_normalizer import parse_stock_csv
from src.domain.errors import ParseError


def test_single_price_layout_copies_close_into_every_price():
    records = parse_stock_csv("Date,Close Price\n2024-01-02,1610.5\n2024-01-03,1650\n")

    assert [r.date for r in records] == ["2024-01-02", "2024-01-03"]
    for r in records:
        assert r.open == r.high == r.low == r.close
    assert records[0].close == 1610.5


def test_single_price_layout_skips_rows_with_bad_close():
    text = "Date,Close Price\n2024-01-02,1610.5\n2024-01-03,n/a\n2024-01-04,\n2024-01-05,0\n"

    records = parse_stock_csv(text)

    assert [r.date for r in records] == ["2024-01-02"]


def test_ohlc_layout_defaults_unparsable_prices_to_zero():
    text = "date,open,high,low,close\n2024-01-02,1600,1620,1590,1610\n2024-01-03,x,1655,,1650\n"

    records = parse_stock_csv(text)

    assert len(records) == 2
    assert records[1].open == 0
    assert records[1].low == 0
    assert records[1].high == 1655
    assert records[1].close == 1650


def test_dates_are_normalized_to_iso():
    records = parse_stock_csv("Date,Close Price\n03-Jan-2024,1610\n")

    assert records[0].date == "2024-01-03"


def test_rows_without_a_readable_date_are_skipped():
    text = "date,open,high,low,close\n,1,2,3,4\nnot a date,1,2,3,4\n2024-01-02,1,2,3,4\n"

    records = parse_stock_csv(text)

    assert [r.date for r in records] == ["2024-01-02"]


def test_short_rows_do_not_abort_the_batch():
    text = "Date,Close Price\n2024-01-02\n2024-01-03,1650\n"

    records = parse_stock_csv(text)

    assert [r.date for r in records] == ["2024-01-03"]


def test_no_usable_rows_raises_parse_error_naming_both_layouts():
    with pytest.raises(ParseError) as excinfo:
        parse_stock_csv("Date,Close Price\n2024-01-02,abc\n")

    message = str(excinfo.value)
    assert "Date, Close Price" in message
    assert "date, open, high, low, close" in message


@pytest.mark.parametrize("text", ["", "ticker,price\nBAJAJ,1600\n", "Date,Close Price\n"])
def test_unknown_or_empty_input_raises_parse_error(text):
    with pytest.raises(ParseError):
        parse_stock_csv(text)


def test_unbalanced_quote_raises_parse_error_instead_of_tokenizer_error():
    with pytest.raises(ParseError) as excinfo:
        parse_stock_csv('date,open,high,low,close\n"2024-01-02,1,2,3,4\n')

    assert "Expected columns" in str(excinfo.value)


def test_file_with_both_layouts_falls_back_to_ohlc_columns():
    text = "Date,Close Price,date,open,high,low,close\n2024-01-02,abc,2024-01-02,1,2,0.5,1.5\n"

    records = parse_stock_csv(text)

    assert [(r.open, r.high, r.low, r.close) for r in records] == [(1.0, 2.0, 0.5, 1.5)]
