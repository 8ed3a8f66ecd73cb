from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from market.config import settings
from market.deadline import Deadline
from market.exceptions import MarketError, OperationTimeout, StoreError

# psycopg2 QueryCanceled, raised when statement_timeout fires
PG_QUERY_CANCELED = "57014"


def make_engine(url: str):
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

        # pysqlite defers BEGIN; take the write lock up front so that
        # read-check-write sequences are serialized between connections.
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

        return engine

    # READ COMMITTED: a statement run after a row or advisory lock is granted
    # sees the holder's committed writes.
    return create_engine(
        url,
        isolation_level=settings.DATABASE_ISOLATION_LEVEL,
        pool_pre_ping=True,
    )


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def utcnow() -> datetime:
    """Current UTC time without tzinfo, the form every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dialect_name(db: Session) -> str:
    return db.get_bind().dialect.name


def _apply_statement_timeout(db: Session, deadline: Deadline):
    deadline.check("begin")
    if dialect_name(db) == "postgresql":
        ms = max(1, int(deadline.remaining() * 1000))
        db.execute(text(f"SET LOCAL statement_timeout = {ms}"))


@contextmanager
def unit_of_work(db: Session, deadline: Deadline | None = None):
    """
    One transaction, committed once.
    Any failure rolls back every write made inside the block.
    """
    deadline = deadline or Deadline()
    try:
        _apply_statement_timeout(db, deadline)
        yield deadline
        deadline.check("commit")
        db.commit()
    except MarketError:
        db.rollback()
        raise
    except OperationalError as exc:
        db.rollback()
        if getattr(exc.orig, "pgcode", None) == PG_QUERY_CANCELED:
            raise OperationTimeout("request timed out", detail=str(exc.orig)) from exc
        raise StoreError("store failure", detail=str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("store failure", detail=str(exc)) from exc
    except Exception:
        db.rollback()
        raise
