"""Engine and session handling.

The engine is created lazily from ``settings.SQLALCHEMY_DATABASE_URI`` the
first time it is needed (normally in the application lifespan) and disposed
at shutdown. Request handlers get their session from ``Database.session()``.
"""
import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

Base = declarative_base()


def json_serializer(value: Any) -> str:
    """JSON columns keep non-ASCII text as-is so tags can be matched literally."""
    return json.dumps(value, ensure_ascii=False)


class Database:
    def __init__(self):
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    def init_app(self, url: Optional[str] = None, **engine_kwargs) -> None:
        """Create the engine and session factory once."""
        if self._engine is not None:
            return

        url = url or str(settings.SQLALCHEMY_DATABASE_URI)
        if url.startswith("sqlite"):
            # SQLite connections are shared with the threadpool running sync handlers
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        else:
            engine_kwargs.setdefault("pool_size", 5)
            engine_kwargs.setdefault("max_overflow", 10)
            engine_kwargs.setdefault("pool_timeout", 30)

        engine_kwargs.setdefault("json_serializer", json_serializer)
        self._engine = create_engine(url, pool_pre_ping=True, **engine_kwargs)
        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info(f"Database engine created for {self._engine.url.render_as_string(hide_password=True)}")

    @property
    def engine(self) -> Engine:
        self.init_app()
        return self._engine

    async def check_connection(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {str(e)}")
            return False

    def init_db(self) -> None:
        """Create the tables of every registered model."""
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        tables = ", ".join(sorted(Base.metadata.tables))
        logger.info(f"Tables ready: {tables}")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session committed on success, rolled back on any error."""
        self.init_app()
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        if self._engine is None:
            return
        logger.info("Disposing database connection...")
        self._engine.dispose()
        self._engine = None
        self._session_factory = None


db = Database()
