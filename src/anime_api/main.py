from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text

from anime_api.authorization import AuthorizationMiddleware
from anime_api.db.session import async_session, shutdown
from anime_api.dependencies import DB
from anime_api.error_handlers import register_exception_handlers
from anime_api.logging import get_logger
from anime_api.middleware import RequestIDMiddleware
from anime_api.routers.anime import router as anime_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Code before yield runs on startup, after yield on shutdown."""
    logger.info("application_started")
    yield
    await shutdown()
    logger.info("application_stopped")


app = FastAPI(title="Anime API", lifespan=lifespan)
# Sessions for the credential lookup done by AuthorizationMiddleware
app.state.session_factory = async_session

# Last added runs first: request id is bound before the policy is evaluated.
app.add_middleware(AuthorizationMiddleware)
app.add_middleware(RequestIDMiddleware)
register_exception_handlers(app)
app.include_router(anime_router)


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Health check endpoint — verifies database connectivity.

    Public in the authorization policy so load balancers can reach it.
    """
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
