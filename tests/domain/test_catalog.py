from fxconv.domain.currency.catalog import build_currency_list, currency_name

TABLE = {"USD": 1.0, "JPY": 150.0, "EUR": 0.9, "GBP": 0.8, "XYZ": 0.0}


def test_base_is_excluded_and_favorites_come_first():
    items = build_currency_list(TABLE, "USD", {"JPY"})
    codes = [item.code for item in items]
    assert "USD" not in codes
    assert codes == ["JPY", "EUR", "GBP", "XYZ"]
    assert items[0].is_favorite is True
    assert all(not item.is_favorite for item in items[1:])


def test_search_matches_code_and_name_case_insensitive():
    assert [i.code for i in build_currency_list(TABLE, "USD", set(), "eu")] == ["EUR"]
    assert [i.code for i in build_currency_list(TABLE, "USD", set(), "pound")] == ["GBP"]
    assert build_currency_list(TABLE, "USD", set(), "nothing-like-this") == []


def test_reverse_rate():
    items = {i.code: i for i in build_currency_list(TABLE, "USD", set())}
    assert items["EUR"].reverse_rate == 1 / 0.9
    assert items["XYZ"].reverse_rate == 0.0


def test_currency_name_falls_back_to_code():
    assert currency_name("EUR") == "Euro"
    assert currency_name("XYZ") == "XYZ"
