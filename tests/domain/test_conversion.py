"""
🧪 test_conversion.py — unit-тести для чистої конвертації валют

Перевіряє:
- Тотожність для однакових валют
- Формули from == base / to == base / через базу
- Повернення 0 для відсутніх та невалідних курсів
- Граматику та розбір тексту суми
"""

import math

import pytest

from fxconv.domain.currency.conversion import (
    convert,
    exchange_rate,
    format_amount,
    is_amount_text_valid,
    parse_amount,
)

TABLE = {"USD": 1.0, "EUR": 0.9, "JPY": 150.0, "GBP": 0.8}


@pytest.mark.parametrize("amount", [0.0, 1.0, 12.5, 1e9])
def test_same_currency_returns_amount_unchanged(amount):
    assert convert(amount, "EUR", "EUR", "USD", TABLE) == amount
    assert convert(amount, "XXX", "XXX", "USD", {}) == amount


def test_from_base_multiplies_by_target_rate():
    assert convert(10, "USD", "EUR", "USD", TABLE) == pytest.approx(9.0)
    assert convert(2, "USD", "JPY", "USD", TABLE) == pytest.approx(300.0)


def test_to_base_divides_by_source_rate():
    assert convert(9, "EUR", "USD", "USD", TABLE) == pytest.approx(10.0)


def test_cross_rate_pivots_through_base():
    assert convert(2, "EUR", "JPY", "USD", TABLE) == pytest.approx(2 / 0.9 * 150)


def test_round_trip_restores_amount():
    there = convert(123.45, "GBP", "JPY", "USD", TABLE)
    back = convert(there, "JPY", "GBP", "USD", TABLE)
    assert back == pytest.approx(123.45)


def test_base_entry_missing_from_table_is_tolerated():
    table = {"EUR": 0.9}
    assert convert(10, "USD", "EUR", "USD", table) == pytest.approx(9.0)


@pytest.mark.parametrize("bad_rate", [0, -1.5, math.inf, math.nan, "abc", None])
def test_invalid_rate_degrades_to_zero(bad_rate):
    table = {"EUR": 0.9, "BAD": bad_rate}
    assert convert(10, "EUR", "BAD", "USD", table) == 0.0
    assert convert(10, "BAD", "EUR", "USD", table) == 0.0
    assert convert(10, "USD", "BAD", "USD", table) == 0.0


def test_missing_target_returns_zero():
    assert convert(5, "EUR", "CHF", "USD", TABLE) == 0.0
    assert convert(5, "USD", "CHF", "USD", {}) == 0.0


def test_exchange_rate_is_conversion_of_one_unit():
    assert exchange_rate("USD", "JPY", "USD", TABLE) == pytest.approx(150.0)
    assert exchange_rate("JPY", "USD", "USD", TABLE) == pytest.approx(1 / 150)


@pytest.mark.parametrize("text", ["", "0", "12", "12.", ".5", "12,50", "007"])
def test_amount_text_accepted(text):
    assert is_amount_text_valid(text)


@pytest.mark.parametrize("text", ["1.2.3", "1,2.3", "-1", "abc", "1e5", " 1", "12,,", "10\n", "١٠"])
def test_amount_text_rejected(text):
    assert not is_amount_text_valid(text)


def test_parse_amount_handles_both_separators():
    assert parse_amount("12,5") == 12.5
    assert parse_amount("12.5") == 12.5
    assert parse_amount("12.") == 12.0
    assert parse_amount(".") == 0.0
    assert parse_amount("") == 0.0
    assert parse_amount(None) == 0.0


def test_format_amount_fixed_decimals():
    assert format_amount(9) == "9.00"
    assert format_amount(2 / 0.9 * 150) == "333.33"
    assert format_amount(1.23456, 4) == "1.2346"
