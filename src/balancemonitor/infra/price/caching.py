"""In-memory price cache in front of the price API.

Successful lookups live for a day, failed ones for an hour, so a currency the price
API does not know is retried regularly without hammering the API on every request.
Concurrent misses for one pair share a single upstream call, and a hit on an entry
older than ``refresh_after_seconds`` is served immediately while the entry is
reloaded in the background. When that reload fails the cached success keeps its
expiry and the next reload waits for ``failure_ttl_seconds``.
"""

import asyncio
import logging
import threading
import time
from decimal import Decimal
from typing import Callable, NamedTuple, Protocol

from cachetools import TLRUCache, TTLCache

from balancemonitor.domain.models.price import CurrencyPrice
from balancemonitor.exceptions import PriceResponseError
from balancemonitor.infra.price.rest_source import current_time_millis

logger = logging.getLogger(__name__)

USD = "USD"


class PriceSource(Protocol):
    async def get_price(self, base_currency: str, counter_currency: str) -> CurrencyPrice | None: ...


class _CacheEntry(NamedTuple):
    price: CurrencyPrice | None  # None marks a failed lookup
    loaded_at: float


class CachingPriceService:
    def __init__(
        self,
        source: PriceSource,
        ttl_seconds: float = 24 * 3600,
        failure_ttl_seconds: float = 3600,
        refresh_after_seconds: float = 3600,
        max_size: int = 10_000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._ttl = ttl_seconds
        self._failure_ttl = failure_ttl_seconds
        self._refresh_after = refresh_after_seconds
        self._timer = timer
        self._cache: TLRUCache[str, _CacheEntry] = TLRUCache(maxsize=max_size, ttu=self._time_to_use, timer=timer)
        # keys whose refresh-ahead reload failed recently
        self._failed_reloads: TTLCache[str, float] = TTLCache(maxsize=max_size, ttl=failure_ttl_seconds, timer=timer)
        self._lock = threading.Lock()
        self._in_flight: dict[str, asyncio.Future[_CacheEntry]] = {}
        self._background_tasks: set[asyncio.Task] = set()

    def _time_to_use(self, key: str, entry: _CacheEntry, now: float) -> float:
        return now + (self._ttl if entry.price is not None else self._failure_ttl)

    async def get_price(self, base_currency: str, counter_currency: str) -> CurrencyPrice | None:
        if base_currency == counter_currency:
            return CurrencyPrice(
                price=Decimal(1),
                base_currency=base_currency,
                counter_currency=counter_currency,
                as_of_millis=current_time_millis(),
            )

        key = f"{base_currency}/{counter_currency}"
        with self._lock:
            entry = self._cache.get(key)
            if (
                entry is not None
                and self._timer() - entry.loaded_at >= self._refresh_after
                and key not in self._failed_reloads
            ):
                self._start_load(key, base_currency, counter_currency, background=True)
            future = None if entry is not None else self._start_load(key, base_currency, counter_currency)

        if future is not None:
            # shield: one caller being cancelled must not cancel the lookup shared with the others
            entry = await asyncio.shield(future)
        return entry.price

    async def get_value(self, base_currency: str, counter_currency: str, amount: Decimal) -> Decimal | None:
        price = await self.get_price(base_currency, counter_currency)
        if price is None:
            return None
        return amount * price.price

    async def get_usd_price(self, currency: str) -> Decimal | None:
        price = await self.get_price(currency, USD)
        return price.price if price is not None else None

    async def get_usd_value(self, currency: str, amount: Decimal) -> Decimal | None:
        return await self.get_value(currency, USD, amount)

    async def refresh_usd_prices(self, currencies: list[str]) -> list[CurrencyPrice]:
        """Fetch the USD price of every currency regardless of entry age. Returns the prices that were refreshed."""
        logger.info("Refreshing USD prices of %d currencies", len(currencies))
        refreshed = []
        for currency in currencies:
            if currency == USD:
                continue
            price = await self._fetch(currency, USD)
            if price is None:
                continue
            self._put(price)
            refreshed.append(price)
        return refreshed

    def populate(self, prices: list[CurrencyPrice]) -> None:
        """Seed the cache with previously saved prices, e.g. at startup."""
        logger.info("Populating price cache with %d prices", len(prices))
        for price in prices:
            self._put(price)

    def _put(self, price: CurrencyPrice) -> None:
        key = f"{price.base_currency}/{price.counter_currency}"
        with self._lock:
            self._cache[key] = _CacheEntry(price, self._timer())
            self._failed_reloads.pop(key, None)

    def _start_load(
        self, key: str, base_currency: str, counter_currency: str, background: bool = False
    ) -> asyncio.Future[_CacheEntry]:
        """Join the in-flight lookup for key or start a new one. Caller holds the lock."""
        future = self._in_flight.get(key)
        if future is not None:
            return future

        future = asyncio.ensure_future(self._load(key, base_currency, counter_currency))
        self._in_flight[key] = future
        future.add_done_callback(lambda f: self._forget_in_flight(key, f))
        if background:
            self._background_tasks.add(future)
            future.add_done_callback(self._background_tasks.discard)
        return future

    def _forget_in_flight(self, key: str, future: asyncio.Future) -> None:
        with self._lock:
            if self._in_flight.get(key) is future:
                del self._in_flight[key]

    async def _load(self, key: str, base_currency: str, counter_currency: str) -> _CacheEntry:
        price = await self._fetch(base_currency, counter_currency)
        with self._lock:
            current = self._cache.get(key)
            # a failed reload never replaces what is already cached
            if price is None and current is not None:
                self._failed_reloads[key] = self._timer()
                return current
            entry = _CacheEntry(price, self._timer())
            self._cache[key] = entry
            self._failed_reloads.pop(key, None)
        return entry

    async def _fetch(self, base_currency: str, counter_currency: str) -> CurrencyPrice | None:
        try:
            return await self._source.get_price(base_currency, counter_currency)
        except PriceResponseError as e:
            logger.error("[%s/%s] Could not get price (%s): %s", base_currency, counter_currency, e.reason_tag, e)
        except Exception:
            logger.exception("[%s/%s] Could not get price", base_currency, counter_currency)
        return None
