"""
Application service: turn uploaded CSV text into StockRecord entities.

Two header layouts are accepted, checked row by row in this order:
  - Single price:  Date, Close Price   (open/high/low copied from close)
  - Full OHLC:     date, open, high, low, close

Numeric policy differs between the two layouts. A single-price row whose close
cannot be parsed is dropped; a full-OHLC row keeps going with 0 for any price
that cannot be parsed. Both behaviours match what the dashboard has always
accepted, so they are kept as-is.
"""

import csv
import io
import math
from typing import Optional

import pandas as pd

from src.domain.entities.stock_record import StockRecord
from src.domain.errors import ParseError

EXPECTED_SCHEMAS = "Date, Close Price or date, open, high, low, close"

_SINGLE_PRICE_COLUMNS = ("Date", "Close Price")
_OHLC_COLUMNS = ("date", "open", "high", "low", "close")


def parse_stock_csv(text: str) -> list[StockRecord]:
    """Parse CSV *text* into records, skipping rows that cannot be used.

    Raises:
        ParseError: if no row yields a record.
    """
    frame = _read_frame(text)
    columns = set(frame.columns)
    single_price = all(c in columns for c in _SINGLE_PRICE_COLUMNS)
    ohlc = all(c in columns for c in _OHLC_COLUMNS)

    records: list[StockRecord] = []
    for row in frame.to_dict(orient="records"):
        record = _from_single_price(row) if single_price else None
        if record is None and ohlc:
            record = _from_ohlc(row)
        if record is not None:
            records.append(record)

    if not records:
        raise ParseError(
            f"No valid stock data found in CSV. Expected columns: {EXPECTED_SCHEMAS}"
        )
    return records


def _read_frame(text: str) -> pd.DataFrame:
    try:
        frame = _read_csv(text, engine="c")
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except pd.errors.ParserError:
        # The python engine can step over rows the C tokenizer gives up on.
        try:
            frame = _read_csv(text, engine="python")
        except (pd.errors.ParserError, csv.Error) as exc:
            raise ParseError(
                f"Could not read CSV ({exc}). Expected columns: {EXPECTED_SCHEMAS}"
            ) from exc
    frame.columns = [str(c).strip() for c in frame.columns]
    return frame.fillna("")


def _read_csv(text: str, engine: str) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(text),
        engine=engine,
        dtype=str,
        keep_default_na=False,
        index_col=False,
        skip_blank_lines=True,
        skipinitialspace=True,
        on_bad_lines="skip",
    )


def _from_single_price(row: dict) -> Optional[StockRecord]:
    close = _parse_price(row["Close Price"])
    date = _normalize_date(row["Date"])
    # A zero close is treated like a missing one.
    if not close or date is None:
        return None
    return StockRecord(date=date, open=close, high=close, low=close, close=close)


def _from_ohlc(row: dict) -> Optional[StockRecord]:
    date = _normalize_date(row["date"])
    if date is None:
        return None
    return StockRecord(
        date=date,
        open=_parse_price(row["open"]) or 0.0,
        high=_parse_price(row["high"]) or 0.0,
        low=_parse_price(row["low"]) or 0.0,
        close=_parse_price(row["close"]) or 0.0,
    )


def _parse_price(value: str) -> Optional[float]:
    try:
        price = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(price) or math.isinf(price):
        return None
    return price


def _normalize_date(value: str) -> Optional[str]:
    value = str(value).strip()
    if not value:
        return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.strftime("%Y-%m-%d")
