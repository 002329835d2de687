"""Async SQLAlchemy engine and session helpers."""

import ssl
from typing import Any, AsyncGenerator, Dict, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.config import settings


def _normalize_db_url(url: str) -> str:
    """Select an async-capable driver for the configured database.

    Bare "postgres://" or "postgresql://" URLs become "postgresql+asyncpg://",
    and a bare "sqlite://" URL becomes "sqlite+aiosqlite://". Explicit drivers
    are respected.
    """
    u = make_url(url)
    driver = (u.drivername or "").lower()
    if "+" in driver:
        return u.render_as_string(hide_password=False)
    if driver in ("postgres", "postgresql"):
        u = u.set(drivername="postgresql+asyncpg")
    elif driver == "sqlite":
        u = u.set(drivername="sqlite+aiosqlite")
    return u.render_as_string(hide_password=False)


def _ssl_connect_args(sslmode: str) -> Dict[str, Any]:
    mode = sslmode.lower()
    if mode == "disable":
        return {"ssl": False}
    if mode in {"allow", "prefer"}:
        # asyncpg negotiates TLS on its own when the server requires it.
        return {}
    if mode == "require":
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        return {"ssl": ssl_context}
    if mode == "verify-ca":
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        return {"ssl": ssl_context}
    return {"ssl": ssl.create_default_context()}


def prepare_connection(url: str) -> Tuple[str, Dict[str, Any]]:
    """Return the engine URL and driver connect kwargs for ``url``.

    asyncpg rejects libpq-style ``sslmode`` and ``channel_binding`` query
    args, so they are stripped and translated into an ``ssl`` connect arg.
    """
    normalized_url = _normalize_db_url(url)
    if not normalized_url.startswith("postgresql+asyncpg"):
        return normalized_url, {}

    split = urlsplit(normalized_url)
    sslmode = None
    filtered_pairs = []
    for key, value in parse_qsl(split.query, keep_blank_values=True):
        if key == "sslmode":
            sslmode = value
            continue
        if key == "channel_binding":
            continue
        filtered_pairs.append((key, value))

    cleaned_query = urlencode(filtered_pairs, doseq=True)
    cleaned_url = urlunsplit(split._replace(query=cleaned_query)).rstrip("?")
    connect_args = _ssl_connect_args(sslmode) if sslmode else {}
    return cleaned_url, connect_args


DATABASE_URL, CONNECT_ARGS = prepare_connection(settings.database_url)

engine = create_async_engine(
    DATABASE_URL,
    echo=settings.sql_echo,
    pool_pre_ping=True,
    connect_args=CONNECT_ARGS,
)
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session."""
    async with SessionLocal() as session:
        yield session

async def init_db():
    """Create the players table if it does not exist yet."""
    # Import locally so metadata is populated without a circular import
    from app.schemas import players  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

async def dispose_engine() -> None:
    """Dispose of the async engine and its connection pool."""
    await engine.dispose()

def describe_database_url(url: str) -> str:
    """Return a sanitized, human-readable description of the DB URL for logging.

    Example: "postgresql+asyncpg://user@host:5432/dbname"
    Passwords are never included.
    """
    try:
        u = make_url(url)
    except Exception:
        return "<unparseable database URL>"
    if u.drivername.startswith("sqlite"):
        return f"{u.drivername}:///{u.database or ':memory:'}"
    auth = u.username or "?"
    host = u.host or "?"
    port = f":{u.port}" if u.port else ""
    db = u.database or "?"
    return f"{u.drivername}://{auth}@{host}{port}/{db}"
