"""
🧪 test_converter_session.py — інтеграція PreferenceStore + RateStore + SyncController
"""

import pytest

from conftest import FakeProvider
from fxconv.application import ConverterSession
from fxconv.domain.converter import EditSide
from fxconv.domain.currency import FetchStatus
from fxconv.errors import RateFetchError
from fxconv.infrastructure.currency import RateStore
from fxconv.infrastructure.storage import PreferenceStore


def _session(storage, provider, **kwargs) -> ConverterSession:
    prefs = PreferenceStore.load(storage, locale="en_US")
    return ConverterSession(prefs, RateStore(provider), **kwargs)


@pytest.mark.asyncio
async def test_start_fetches_rates_and_fills_pair(memory_storage, fake_provider):
    session = _session(memory_storage, fake_provider)
    assert session.pair.to_amount == ""

    await (await session.start())

    assert session.status is FetchStatus.SUCCEEDED
    assert (session.pair.from_currency, session.pair.to_currency) == ("USD", "EUR")
    assert session.pair.to_amount == "0.90"

    session.edit_from("10")
    assert session.pair.to_amount == "9.00"
    summary = session.rate_summary()
    assert (summary.direct, summary.inverse) == ("0.90", "1.11")
    await session.close()
    assert fake_provider.closed


@pytest.mark.asyncio
async def test_set_base_currency_refetches_for_new_base(memory_storage, fake_provider):
    session = _session(memory_storage, fake_provider)
    await (await session.start())

    await session.set_base_currency("EUR")

    assert memory_storage.data["baseCurrency"] == "EUR"
    assert session.status is FetchStatus.SUCCEEDED
    assert session.rate_store.snapshot.base_currency == "EUR"
    assert fake_provider.calls == ["USD", "EUR"]
    # USD → EUR через таблицю бази EUR: 1 / 1.11
    assert session.pair.to_amount == "0.90"
    await session.close()


@pytest.mark.asyncio
async def test_set_same_base_while_succeeded_does_not_refetch(memory_storage, fake_provider):
    session = _session(memory_storage, fake_provider)
    await (await session.start())

    await session.set_base_currency("USD")

    assert fake_provider.calls == ["USD"]
    assert session.status is FetchStatus.SUCCEEDED
    assert memory_storage.data["baseCurrency"] == "USD"
    await session.close()


@pytest.mark.asyncio
async def test_failed_fetch_keeps_fields_and_exposes_error(memory_storage):
    provider = FakeProvider({})
    provider.errors["USD"] = RateFetchError("Exchange rate API is unreachable")
    session = _session(memory_storage, provider)

    await (await session.start())

    assert session.status is FetchStatus.FAILED
    assert session.error == "Exchange rate API is unreachable"
    session.edit_to("5")
    assert session.pair.last_edited is EditSide.TO
    assert session.pair.from_amount == "1"
    assert session.rate_summary() is None
    await session.close()


@pytest.mark.asyncio
async def test_currency_list_lazily_fetches_and_orders_favorites(memory_storage, fake_provider):
    session = _session(memory_storage, fake_provider)
    session.toggle_favorite("JPY")

    assert session.currency_list() == []
    await session.rate_store._task
    assert fake_provider.calls == ["USD"]

    items = session.currency_list()
    assert [item.code for item in items] == ["JPY", "EUR"]
    assert items[0].is_favorite
    assert [item.code for item in session.currency_list("yen")] == ["JPY"]
    assert session.available_currencies() == ("USD", "EUR", "JPY")
    assert fake_provider.calls == ["USD"]
    await session.close()


@pytest.mark.asyncio
async def test_default_target_falls_back_to_first_available(memory_storage):
    provider = FakeProvider({"USD": {"USD": 1.0, "CAD": 1.35}})
    session = _session(memory_storage, provider)

    await (await session.start())

    assert session.pair.to_currency == "USD"
    session.select_to("CAD")
    session.swap()
    assert (session.pair.from_currency, session.pair.to_currency) == ("CAD", "USD")
    assert session.pair.to_amount == "0.74"
    await session.close()


@pytest.mark.asyncio
async def test_base_change_leaves_succeeded_before_refetch_completes(memory_storage, fake_provider):
    session = _session(memory_storage, fake_provider)
    await (await session.start())
    assert session.status is FetchStatus.SUCCEEDED

    session.preferences.set_base_currency("EUR")

    assert session.status is FetchStatus.LOADING
    assert session.rate_store.snapshot is None
    assert session.rate_store.pending_base == "EUR"
    assert session.rate_summary() is None

    await session.rate_store._task
    assert session.status is FetchStatus.SUCCEEDED
    assert session.rate_store.snapshot.base_currency == "EUR"
    await session.close()
