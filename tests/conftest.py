from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from balancemonitor.db.session import Base
from balancemonitor.domain.models.price import CurrencyPrice
import balancemonitor.db.models  # noqa: F401


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture()
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def session(session_factory) -> AsyncSession:
    async with session_factory() as sess:
        yield sess


class FakePriceService:
    """Stands in for CachingPriceService with a fixed USD price table."""

    def __init__(self, usd_prices: dict[str, Decimal] | None = None) -> None:
        self.usd_prices = dict(usd_prices or {})
        self.refresh_usd_prices = AsyncMock(return_value=[])
        self.populate = MagicMock()

    async def get_usd_price(self, currency: str) -> Decimal | None:
        if currency == "USD":
            return Decimal(1)
        return self.usd_prices.get(currency)

    async def get_usd_value(self, currency: str, amount: Decimal) -> Decimal | None:
        price = await self.get_usd_price(currency)
        return amount * price if price is not None else None

    async def get_price(self, base_currency: str, counter_currency: str) -> CurrencyPrice | None:
        price = await self.get_usd_price(base_currency) if counter_currency == "USD" else None
        if price is None:
            return None
        return CurrencyPrice(price=price, base_currency=base_currency, counter_currency="USD", as_of_millis=0)


@pytest.fixture()
def price_service():
    return FakePriceService({"ETH": Decimal(100), "BTC": Decimal(20000)})
