import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from geodle.storage import KeyValueStore

logger = logging.getLogger(__name__)

STATS_KEY = "geodle-stats"


class Statistics(BaseModel):
    """
    A player's totals across every daily round they've finished.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    played: int = 0
    won: int = 0
    streak: int = 0  # current run of wins
    max_streak: int = Field(default=0, alias="maxStreak")

    def record(self, won: bool) -> "Statistics":
        """
        Returns these statistics with one more finished round counted.
        """
        if won:
            streak = self.streak + 1
            return Statistics(
                played=self.played + 1,
                won=self.won + 1,
                streak=streak,
                max_streak=max(self.max_streak, streak),
            )
        return self.model_copy(update={"played": self.played + 1, "streak": 0})

    @property
    def win_rate(self) -> float:
        return self.won / self.played if self.played else 0.0


class StatisticsRepository:
    """
    Reads and writes a player's Statistics. They're stored on their own,
    separately from (and not tied to the date of) the daily round.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def get(self) -> Statistics:
        """
        Gets the saved statistics, starting from zero if there aren't any (or
        they can't be read).
        """
        raw = await self.store.get(STATS_KEY)
        if raw is None:
            return Statistics()

        try:
            return Statistics.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable statistics record")
            return Statistics()

    async def save(self, stats: Statistics) -> None:
        await self.store.set(STATS_KEY, stats.model_dump_json(by_alias=True))


def get_statistics_repository(store: KeyValueStore) -> StatisticsRepository:
    return StatisticsRepository(store)
