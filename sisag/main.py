import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sisag.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


def _create_tables() -> None:
    """Create missing tables (alembic remains the migration path)."""
    import sisag.models  # noqa: F401  registers every model on Base.metadata
    from sisag.database import Base, engine

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%d tables).", len(Base.metadata.tables))


@asynccontextmanager
async def lifespan(app: FastAPI):
    _create_tables()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get(f"{settings.API_PREFIX}/health")
def health_check():
    return {"status": "ok", "app": settings.APP_NAME}


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

# PAG objective catalog
from sisag.routers import objectives  # noqa: E402

app.include_router(objectives.router, prefix=f"{settings.API_PREFIX}/objectives")

# Projects and their alignment / maturity sub-resources
from sisag.routers import alignment, maturity, projects  # noqa: E402

app.include_router(projects.router, prefix=f"{settings.API_PREFIX}/projects")
app.include_router(alignment.router, prefix=f"{settings.API_PREFIX}/projects")
app.include_router(maturity.router, prefix=f"{settings.API_PREFIX}/projects")

# Phase tracker (/projects/{id}/phases and /phases/{id})
from sisag.routers import phases  # noqa: E402

app.include_router(phases.router, prefix=settings.API_PREFIX)

# Planning alerts and global project alerts
from sisag.routers import alerts  # noqa: E402

app.include_router(
    alerts.planning_router,
    prefix=f"{settings.API_PREFIX}/planning-alerts",
)
app.include_router(
    alerts.router,
    prefix=f"{settings.API_PREFIX}/alerts",
)

# Government dashboard indicators
from sisag.routers import indicators  # noqa: E402

app.include_router(
    indicators.router,
    prefix=f"{settings.API_PREFIX}/indicators",
)
