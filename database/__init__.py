from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import AwardRepositoryDB, LeagueRepositoryDB, RoundRepositoryDB
from database.exceptions import DatabaseError, NotFoundError, DuplicateError, IntegrityError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "RoundRepositoryDB",
    "AwardRepositoryDB",
    "LeagueRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
]
