# 🌐 fxconv/infrastructure/currency/exchange_rate_api.py
"""
🌐 HTTP-клієнт ExchangeRate-API (v6) — провайдер курсів для RateStore.

🔹 `GET {base_url}/{api_key}/latest/{BASE}` → payload з `conversion_rates`.
🔹 Повторює спроби при мережевих збоях; HTTP-помилки та битий формат — одразу `RateFetchError`.
🔹 Таймаут задає транспорт (httpx), клієнт створюється ледачо.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx														# 🌐 Async HTTP-клієнт

# 🔠 Системні імпорти
import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.currency.interfaces import CurrencyCode, IRatesProvider
from fxconv.errors import ConfigurationError, ErrorCode, RateFetchError
from fxconv.shared.utils.logger import LOG_NAME


logger = logging.getLogger(f"{LOG_NAME}.infrastructure.exchange_rate_api")

DEFAULT_BASE_URL = "https://v6.exchangerate-api.com/v6"


class ExchangeRateApiClient(IRatesProvider):
    """
    📈 Провайдер курсів поверх exchangerate-api.com.

    Параметри беруться з вузла `exchange_api` конфігурації
    (див. `from_config`); клієнт httpx можна передати ззовні для тестів.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_sec: float = 10.0,
        retry_attempts: int = 2,
        retry_delay_sec: float = 1.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_key or not isinstance(api_key, str):
            raise ConfigurationError("exchange_api.api_key", "Exchange rate API key is not configured.")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_sec
        self._retries = max(1, int(retry_attempts))
        self._retry_delay = max(0.0, float(retry_delay_sec))
        self._client = client
        self._owns_client = client is None
        logger.debug(
            "⚙️ ExchangeRateApiClient: url=%s timeout=%s retries=%s",
            self._base_url,
            self._timeout,
            self._retries,
        )

    @classmethod
    def from_config(cls, config: Any) -> "ExchangeRateApiClient":
        """Будує клієнт з `ConfigService` (або будь-чого з методом `get`)."""
        return cls(
            api_key=config.get("exchange_api.api_key") or "",
            base_url=config.get("exchange_api.base_url", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
            timeout_sec=float(config.get("exchange_api.timeout_sec", 10) or 10),
            retry_attempts=int(config.get("exchange_api.retry_attempts", 2) or 2),
            retry_delay_sec=float(config.get("exchange_api.retry_delay_sec", 1) or 0),
        )

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    async def fetch(self, base_currency: CurrencyCode) -> Mapping[str, Any]:
        """Повертає payload для бази або піднімає `RateFetchError`."""
        client = self._ensure_client()
        url = f"{self._base_url}/{self._api_key}/latest/{base_currency}"
        public_url = f"{self._base_url}/***/latest/{base_currency}"		# 🙈 Без ключа у логах

        last_error: Optional[httpx.RequestError] = None
        for attempt in range(self._retries):
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise RateFetchError(
                    f"Exchange rate API responded with HTTP {exc.response.status_code}",
                    url=public_url,
                    status_code=exc.response.status_code,
                    base_currency=base_currency,
                ) from exc
            except httpx.RequestError as exc:
                last_error = exc
                logger.error(
                    "❌ Спроба %s/%s: помилка API курсів — %s",
                    attempt + 1,
                    self._retries,
                    exc,
                )
                if attempt < self._retries - 1:
                    await asyncio.sleep(self._retry_delay)
                continue
            return self._validate_payload(response, public_url, base_currency)

        raise RateFetchError(
            "Exchange rate API is unreachable",
            details=str(last_error) if last_error else None,
            url=public_url,
            base_currency=base_currency,
        ) from last_error

    async def close(self) -> None:
        if self._client is not None and self._owns_client and not self._client.is_closed:
            await self._client.aclose()
            logger.info("🔌 HTTP-клієнт курсів закрито.")

    # ================================
    # 🔒 ВНУТРІШНЄ
    # ================================
    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @staticmethod
    def _validate_payload(response: httpx.Response, url: str, base_currency: str) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise RateFetchError(
                "Exchange rate API returned a non-JSON body",
                url=url,
                status_code=response.status_code,
                base_currency=base_currency,
                code=ErrorCode.PAYLOAD,
            ) from exc

        if not isinstance(payload, dict):
            raise RateFetchError(
                f"Unexpected payload type: {type(payload).__name__}",
                url=url,
                base_currency=base_currency,
                code=ErrorCode.PAYLOAD,
            )
        if payload.get("result", "success") != "success":
            raise RateFetchError(
                f"Exchange rate API error: {payload.get('error-type', 'unknown')}",
                url=url,
                status_code=response.status_code,
                base_currency=base_currency,
                code=ErrorCode.PAYLOAD,
            )
        if not isinstance(payload.get("conversion_rates"), dict):
            raise RateFetchError(
                "Payload has no 'conversion_rates' object",
                url=url,
                base_currency=base_currency,
                code=ErrorCode.PAYLOAD,
            )
        logger.info("✅ Курси для %s отримано (%d валют).", base_currency, len(payload["conversion_rates"]))
        return payload
