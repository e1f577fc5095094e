"""Tests for money and pagination helpers."""

from decimal import Decimal

import pytest

from dashboard.core.money import format_currency, to_cents
from dashboard.core.pagination import clamp_page, page_offset, total_pages


# ─── Money ──────────────────────────────────────────────────────

@pytest.mark.parametrize("amount,cents", [
    ("0.005", 1),
    ("0.004", 0),
    ("19.99", 1999),
    ("49.99", 4999),
    ("1", 100),
    ("1234.565", 123457),
])
def test_to_cents(amount, cents):
    assert to_cents(Decimal(amount)) == cents


def test_to_cents_returns_int():
    assert type(to_cents(Decimal("2.50"))) is int


@pytest.mark.parametrize("cents,text", [
    (0, "$0.00"),
    (1, "$0.01"),
    (4999, "$49.99"),
    (123456, "$1,234.56"),
])
def test_format_currency(cents, text):
    assert format_currency(cents) == text


# ─── Pagination ─────────────────────────────────────────────────

def test_clamp_page():
    assert clamp_page(0) == 1
    assert clamp_page(-3) == 1
    assert clamp_page(4) == 4


def test_page_offset():
    assert page_offset(1, 6) == 0
    assert page_offset(3, 6) == 12
    assert page_offset(0, 6) == 0


@pytest.mark.parametrize("count,pages", [(0, 0), (1, 1), (6, 1), (7, 2), (13, 3)])
def test_total_pages(count, pages):
    assert total_pages(count, 6) == pages


def test_total_pages_rejects_non_positive_page_size():
    with pytest.raises(ValueError):
        total_pages(10, 0)
