import logging
import traceback
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.requests import Request
from starlette.responses import JSONResponse

from balancemonitor.api.balance import router as balance_router
from balancemonitor.api.blockchain_wallets import router as blockchain_wallets_router
from balancemonitor.api.currency_assets import router as currency_assets_router
from balancemonitor.api.deps import get_session_factory
from balancemonitor.api.exchange_wallets import router as exchange_wallets_router
from balancemonitor.api.schemas.health import HealthResponse
from balancemonitor.config import settings
from balancemonitor.container import Container
from balancemonitor.db.session import Base

logger = logging.getLogger("balancemonitor.api")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    configure_logging(container.settings().log_level)

    engine = container.engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    price_refresh_scheduler = container.price_refresh_scheduler()
    await price_refresh_scheduler.load_saved_prices()
    price_refresh_scheduler.schedule_refreshing()
    scheduler = container.scheduler()
    scheduler.start()
    logger.info("Balance monitor started")
    yield
    scheduler.shutdown(wait=False)
    for client in (container.http_client(), container.service_http_client(), container.exchange_mediator_http_client()):
        await client.close()
    await engine.dispose()


app = FastAPI(title="Balance Monitor", version="0.1.0", debug=settings.debug, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(balance_router)
app.include_router(blockchain_wallets_router)
app.include_router(exchange_wallets_router)
app.include_router(currency_assets_router)


@app.get("/health", response_model=HealthResponse)
async def health(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> HealthResponse:
    unhealthy_reasons = []
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database health check failed")
        unhealthy_reasons.append("Database is not reachable")
    return HealthResponse(healthy=not unhealthy_reasons, unhealthy_reasons=unhealthy_reasons)
