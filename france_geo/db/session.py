from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from france_geo.core.config import DatabaseSettings, settings


def build_engine(db_settings: DatabaseSettings) -> Engine:
    if db_settings.is_sqlite:
        # SQLite ignores pool sizing; allow use from the threadpool
        return create_engine(
            db_settings.database_url,
            echo=db_settings.echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        db_settings.database_url,
        echo=db_settings.echo,
        pool_size=db_settings.pool_size,
        max_overflow=db_settings.max_overflow,
        pool_timeout=db_settings.pool_timeout,
        pool_recycle=db_settings.pool_recycle,
        pool_pre_ping=db_settings.pool_pre_ping,
    )


class DBSessionManager:

    def __init__(self, db_settings: DatabaseSettings = settings.database) -> None:
        self.engine = build_engine(db_settings)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            expire_on_commit=False,
        )

    def get_session(self) -> Generator[Session, None, None]:
        session: Session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def create_all(self) -> None:
        # Models must be imported so their tables are registered
        import france_geo.models  # noqa: F401
        from france_geo.db.base import Base

        Base.metadata.create_all(bind=self.engine)


db_manager = DBSessionManager()


def get_db() -> Generator[Session, None, None]:
    yield from db_manager.get_session()
