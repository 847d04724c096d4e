from contextlib import contextmanager
from typing import Iterator

import asyncpg


class DatabaseError(Exception):
    """Base for all round-store errors."""


class NotFoundError(DatabaseError):
    """Round or league not found."""


class DuplicateError(DatabaseError):
    """Unique constraint violation (e.g. a round id already stored)."""


class IntegrityError(DatabaseError):
    """Foreign key or check constraint violation."""


@contextmanager
def translated_errors() -> Iterator[None]:
    """Re-raise asyncpg constraint errors as round-store errors."""
    try:
        yield
    except asyncpg.UniqueViolationError as e:
        raise DuplicateError(str(e)) from e
    except (asyncpg.ForeignKeyViolationError, asyncpg.CheckViolationError) as e:
        raise IntegrityError(str(e)) from e
