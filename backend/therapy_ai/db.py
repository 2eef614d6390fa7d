from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from therapy_ai.config import STORE_DATABASE_URL


class Base(DeclarativeBase):
    pass


def make_engine(url: str = STORE_DATABASE_URL):
    if url == "sqlite://" or url.startswith("sqlite") and ":memory:" in url:
        # one shared connection, otherwise every session sees an empty database
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = make_engine()
SessionLocal = sessionmaker(engine, expire_on_commit=False)


def init_db(bind=None):
    from therapy_ai import models  # noqa: F401  (registers tables)

    Base.metadata.create_all(bind=bind or engine)
