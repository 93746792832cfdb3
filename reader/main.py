"""Scripture Reader - FastAPI app entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reader import __version__
from reader.core.config import get_settings
from reader.core.errors import setup_exception_handlers
from reader.core.logging_config import get_logger, setup_logging
from reader.db.base import Base
from reader.db.session import engine, AsyncSessionLocal
from reader.routers import api, auth
from reader.services.seeding import seed_books

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables_on_startup:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    if settings.seed_on_startup:
        async with AsyncSessionLocal() as db:
            await seed_books(db)

    logger.info("%s %s started", settings.app_name, __version__)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Scripture text, accounts, reading preferences and progress",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_exception_handlers(app)

app.include_router(auth.router)
app.include_router(api.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
