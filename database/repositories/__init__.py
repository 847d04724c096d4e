from .round_repo import RoundRepositoryDB
from .award_repo import AwardRepositoryDB
from .league_repo import LeagueRepositoryDB

__all__ = ["RoundRepositoryDB", "AwardRepositoryDB", "LeagueRepositoryDB"]
