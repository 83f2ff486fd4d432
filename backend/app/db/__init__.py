import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from app.config import settings
from app.utils.logging import get_logger

log = get_logger("app.db", "DB")

DATABASE_URL = settings.DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    """
    Pool options for the engine.

    Every request checks out one connection; the pool is bounded (no overflow)
    so a burst of checkouts queues for up to DB_POOL_TIMEOUT seconds instead
    of opening extra connections.
    """
    kwargs = {"future": True, "echo": False}
    if url.startswith("sqlite"):
        # sessions are used from FastAPI's threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            return kwargs
    kwargs.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=settings.DB_POOL_TIMEOUT,
    )
    if not url.startswith("sqlite"):
        kwargs["pool_pre_ping"] = True
    return kwargs


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# model modules must be imported so Base.metadata knows every table
MODEL_MODULES = [
    "app.models.user",
    "app.models.product",
    "app.models.coupon",
    "app.models.order",
    "app.models.newsletter",
]


def init_db(reset: bool = False):
    """
    Create the tables the shop reads and writes.

    With reset=True (or RESET_DB set) existing tables are dropped first, which
    is what the test-suite uses to start every test from an empty store.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset or settings.RESET_DB:
        log.info("Resetting database (dropping all tables)")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.debug("Database initialized")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
