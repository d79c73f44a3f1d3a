"""
Application service: map a free-text question to a StockFilter.

RULES is evaluated top to bottom and the first rule that returns a filter
wins. Its order is the precedence: a month mention always beats a keyword,
so "highest in Jan-24" reads the whole of January 2024.
"""

import calendar
import re
from typing import Callable, Optional

from src.domain.entities.stock_record import SortKey, StockFilter

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_MONTH = r"(" + "|".join(MONTHS) + r")-(\d{2})(?!\d)"
_RANGE_PATTERN = re.compile(_MONTH + r"\s*(?:to|from)\s*" + _MONTH)
_MONTH_PATTERN = re.compile(_MONTH)

Rule = tuple[str, Callable[[str], Optional[StockFilter]]]


def _month_start(month: str, year: str) -> str:
    return f"20{year}-{MONTHS[month]:02d}-01"


def _month_end(month: str, year: str) -> str:
    full_year = 2000 + int(year)
    last_day = calendar.monthrange(full_year, MONTHS[month])[1]
    return f"{full_year}-{MONTHS[month]:02d}-{last_day:02d}"


def _date_range(text: str) -> Optional[StockFilter]:
    match = _RANGE_PATTERN.search(text)
    if not match:
        return None
    start_month, start_year, end_month, end_year = match.groups()
    return StockFilter(
        rule="range",
        sort_key=SortKey.DATE,
        descending=False,
        start_date=_month_start(start_month, start_year),
        end_date=_month_end(end_month, end_year),
    )


def _single_month(text: str) -> Optional[StockFilter]:
    match = _MONTH_PATTERN.search(text)
    if not match:
        return None
    month, year = match.groups()
    return StockFilter(
        rule="month",
        sort_key=SortKey.DATE,
        descending=False,
        start_date=_month_start(month, year),
        end_date=_month_end(month, year),
    )


def _keywords(
    rule: str, words: tuple[str, ...], sort_key: SortKey, descending: bool, limit: int
) -> Callable[[str], Optional[StockFilter]]:
    def build(text: str) -> Optional[StockFilter]:
        if not any(word in text for word in words):
            return None
        return StockFilter(rule=rule, sort_key=sort_key, descending=descending, limit=limit)

    return build


DEFAULT_FILTER = StockFilter(rule="default", sort_key=SortKey.DATE, descending=True, limit=20)

RULES: tuple[Rule, ...] = (
    ("range", _date_range),
    ("month", _single_month),
    ("highest", _keywords("highest", ("highest", "maximum"), SortKey.HIGH, True, 10)),
    ("lowest", _keywords("lowest", ("lowest", "minimum"), SortKey.LOW, False, 10)),
    ("average", _keywords("average", ("average", "avg"), SortKey.DATE, True, 30)),
    ("recent", _keywords("recent", ("recent", "latest"), SortKey.DATE, True, 10)),
    ("compare", _keywords("compare", ("compare", "performance"), SortKey.DATE, True, 60)),
    ("default", lambda text: DEFAULT_FILTER),
)


def classify_question(question: str) -> StockFilter:
    """Return the filter of the first rule in RULES that matches *question*."""
    text = question.lower()
    for _name, build in RULES:
        stock_filter = build(text)
        if stock_filter is not None:
            return stock_filter
    return DEFAULT_FILTER
