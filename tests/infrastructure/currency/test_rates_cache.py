import json
import math
from datetime import datetime, timezone

import pytest

from fxconv.domain.currency import RateSnapshot
from fxconv.infrastructure.currency import RatesCache, sanitize_rates


def test_sanitize_rates_keeps_only_finite_numbers():
    raw = {"USD": 1, "EUR": 0.9, "BAD": "x", "NAN": math.nan, "FLAG": True, "": 1.0, 5: 2.0, "ZERO": 0}
    assert sanitize_rates(raw) == {"USD": 1.0, "EUR": 0.9, "ZERO": 0.0}


@pytest.mark.asyncio
async def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "rates.json"
    cache = RatesCache(path)
    fetched = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    await cache.save(RateSnapshot("EUR", {"EUR": 1.0, "USD": 1.1}, fetched))

    assert path.exists()
    loaded = await cache.load()
    assert loaded.base_currency == "EUR"
    assert loaded.fetched_at == fetched
    assert dict(loaded.table) == {"EUR": 1.0, "USD": 1.1}


@pytest.mark.asyncio
async def test_missing_file_gives_none(tmp_path):
    assert await RatesCache(tmp_path / "absent.json").load() is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        json.dumps({"rates": {"USD": 1}}),
        json.dumps({"base_currency": "USD", "rates": {"USD": 1}, "fetched_at": "yesterday"}),
    ],
)
async def test_corrupt_file_gives_none(tmp_path, content):
    path = tmp_path / "rates.json"
    path.write_text(content, encoding="utf-8")
    assert await RatesCache(path).load() is None


@pytest.mark.asyncio
async def test_naive_timestamp_is_treated_as_utc(tmp_path):
    path = tmp_path / "rates.json"
    path.write_text(
        json.dumps({"base_currency": "USD", "fetched_at": "2024-01-01T00:00:00", "rates": {"USD": 1}}),
        encoding="utf-8",
    )
    loaded = await RatesCache(path).load()
    assert loaded.fetched_at.tzinfo is timezone.utc
