import pytest

from conftest import FakeProvider, MemoryStorage
from fxconv.config.setup import Container
from fxconv.config.setup.container import _int_or_default
from fxconv.errors import ConfigurationError
from fxconv.infrastructure.currency import ExchangeRateApiClient


class DictConfig:
    def __init__(self, values):
        self.values = values

    def get(self, key, default=None):
        return self.values.get(key, default)


def test_int_or_default():
    assert _int_or_default("5", 1) == 5
    assert _int_or_default(None, 1) == 1
    assert _int_or_default("x", 1) == 1


def test_container_wires_session_from_config(tmp_path):
    config = DictConfig(
        {
            "files.preferences": str(tmp_path / "prefs.json"),
            "files.rates_cache": str(tmp_path / "rates.json"),
            "preferences.locale": "ru_RU",
            "converter.default_to_currency": "USD",
            "converter.default_amount": "100",
            "exchange_api.ttl_sec": "120",
        }
    )
    container = Container(config, provider=FakeProvider())

    assert container.preferences.base_currency == "RUB"
    assert container.rates_cache.path == tmp_path / "rates.json"
    assert container.rate_store._ttl_sec == 120
    pair = container.session.pair
    assert (pair.from_currency, pair.to_currency, pair.from_amount) == ("RUB", "USD", "100")


def test_container_uses_persisted_preferences():
    storage = MemoryStorage({"baseCurrency": "JPY"})
    container = Container(DictConfig({}), provider=FakeProvider(), storage=storage)
    assert container.preferences.base_currency == "JPY"
    assert container.rates_cache is None


def test_container_builds_http_provider_by_default(tmp_path):
    config = DictConfig({"exchange_api.api_key": "k", "files.preferences": str(tmp_path / "p.json")})
    container = Container(config)
    assert isinstance(container.provider, ExchangeRateApiClient)


def test_missing_api_key_fails_fast(tmp_path):
    with pytest.raises(ConfigurationError):
        Container(DictConfig({"files.preferences": str(tmp_path / "p.json")}))
