"""
Human-readable document numbers ("S-0000042", "C-0000007").

A number is a 2-character kind prefix followed by a counter zero-padded to at
least 7 digits. The next number is derived from the greatest one already stored,
so the read must run in the same transaction as the insert it numbers.
"""
import zlib

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from market.database import dialect_name
from market.exceptions import CorruptSequence

SALE_PREFIX = "S-"
COMING_PREFIX = "C-"

PREFIX_LENGTH = 2
WIDTH = 7
SEED = "0000001"


def next_suffix(last: str | None) -> str:
    """Return the counter that follows ``last`` (a stored, prefixed id)."""
    if not last:
        return SEED

    digits = last[PREFIX_LENGTH:]
    # isdigit() alone accepts characters such as "²" that int() rejects
    if not digits.isdigit():
        raise CorruptSequence("malformed increment id", detail=repr(last))

    try:
        number = int(digits)
    except ValueError:
        raise CorruptSequence("malformed increment id", detail=repr(last))

    return f"{number + 1:0{WIDTH}d}"


def last_increment(db: Session, column) -> str | None:
    # Zero-padded strings: within one width the string max is the numeric max,
    # and a wider counter always outranks a narrower one.
    row = (
        db.query(column)
        .order_by(func.length(column).desc(), column.desc())
        .first()
    )
    return row[0] if row else None


def next_increment(db: Session, model, column_name: str = "increment_id") -> str:
    """
    Next 7+ digit suffix for ``model.column_name``, without the prefix.

    On PostgreSQL a transaction-scoped advisory lock keyed by the table keeps
    concurrent document creations from reading the same maximum.
    """
    if dialect_name(db) == "postgresql":
        key = zlib.crc32(model.__tablename__.encode())
        db.execute(select(func.pg_advisory_xact_lock(key)))

    last = last_increment(db, getattr(model, column_name))
    suffix = next_suffix(last)
    logger.debug(f"{model.__tablename__}.{column_name}: last={last!r} next={suffix}")
    return suffix
