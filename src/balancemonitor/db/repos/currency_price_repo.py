from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from balancemonitor.db.models.currency_price import CurrencyPriceSnapshot
from balancemonitor.domain.models.price import CurrencyPrice


class CurrencyPriceRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save_many(self, prices: list[CurrencyPrice]) -> None:
        """Insert or overwrite the saved price of every pair in prices."""
        if not prices:
            return
        result = await self._session.execute(
            select(CurrencyPriceSnapshot).where(
                CurrencyPriceSnapshot.base_currency.in_(sorted({p.base_currency for p in prices}))
            )
        )
        saved = {(s.base_currency, s.counter_currency): s for s in result.scalars().all()}
        for price in prices:
            snapshot = saved.get((price.base_currency, price.counter_currency))
            if snapshot is None:
                snapshot = CurrencyPriceSnapshot(
                    base_currency=price.base_currency, counter_currency=price.counter_currency
                )
                self._session.add(snapshot)
                saved[(price.base_currency, price.counter_currency)] = snapshot
            snapshot.price = price.price
            snapshot.as_of_millis = price.as_of_millis
        await self._session.flush()

    async def find_all(self) -> list[CurrencyPrice]:
        result = await self._session.execute(
            select(CurrencyPriceSnapshot).order_by(
                CurrencyPriceSnapshot.base_currency, CurrencyPriceSnapshot.counter_currency
            )
        )
        return [
            CurrencyPrice(
                price=s.price,
                base_currency=s.base_currency,
                counter_currency=s.counter_currency,
                as_of_millis=s.as_of_millis,
            )
            for s in result.scalars().all()
        ]
