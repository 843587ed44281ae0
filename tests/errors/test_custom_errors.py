from fxconv.errors import (
    AppError,
    ConfigurationError,
    ErrorCode,
    RateFetchError,
    UserVisibleError,
)


def test_rate_fetch_error_is_user_visible_and_carries_context():
    err = RateFetchError(
        "Exchange rate API responded with HTTP 500",
        url="https://api.test/***/latest/USD",
        status_code=500,
        base_currency="USD",
    )
    assert isinstance(err, UserVisibleError)
    assert isinstance(err, AppError)
    assert str(err) == err.message
    assert err.code == ErrorCode.NETWORK
    assert err.to_log_extra() == {
        "error_code": ErrorCode.NETWORK,
        "url": "https://api.test/***/latest/USD",
        "status_code": 500,
        "base_currency": "USD",
    }


def test_rate_fetch_error_code_override_is_per_instance():
    payload_error = RateFetchError("bad payload", code=ErrorCode.PAYLOAD)
    assert payload_error.code == ErrorCode.PAYLOAD
    assert RateFetchError("x").code == ErrorCode.NETWORK


def test_configuration_error_defaults_message_from_key():
    err = ConfigurationError("exchange_api.api_key")
    assert err.message == "Config 'exchange_api.api_key' is required."
    assert err.to_log_extra() == {"error_code": ErrorCode.CONFIG, "details": "exchange_api.api_key"}
