"""
Saving and resuming today's round. Only the names of the guessed countries are
stored; the feedback for each is recalculated when the round is restored.
"""

import logging
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from geodle.country import CountryPool
from geodle.round import DailyRound
from geodle.storage import KeyValueStore

logger = logging.getLogger(__name__)

STATE_KEY = "geodle-state"


class DailyStateRecord(BaseModel):
    """
    The saved form of a day's round.
    """

    model_config = ConfigDict(populate_by_name=True)

    date: str
    guess_names: list[str] = Field(alias="guessNames")
    game_over: bool = Field(alias="gameOver")
    won: bool

    @classmethod
    def from_round(cls, daily_round: DailyRound, day: date) -> "DailyStateRecord":
        return cls(
            date=day.isoformat(),
            guess_names=daily_round.guessed_names,
            game_over=daily_round.is_over,
            won=daily_round.won,
        )


class DailyStateRepository:
    """
    Reads and writes the record of today's round. A record from any other day
    is ignored, as is one that can't be read; either way the player just gets
    a fresh round.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def save(self, daily_round: DailyRound, day: date) -> None:
        record = DailyStateRecord.from_round(daily_round, day)
        await self.store.set(STATE_KEY, record.model_dump_json(by_alias=True))

    async def load(self, day: date) -> DailyStateRecord | None:
        raw = await self.store.get(STATE_KEY)
        if raw is None:
            return None

        try:
            record = DailyStateRecord.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable daily state record")
            return None

        if record.date != day.isoformat():
            logger.debug("Ignoring saved round from %s", record.date)
            return None

        return record

    async def restore(self, daily_round: DailyRound, pool: CountryPool, day: date) -> bool:
        """
        Restores today's saved guesses into the given round, returning whether
        there was anything to restore.
        """
        record = await self.load(day)
        if record is None:
            return False

        daily_round.restore(pool, record.guess_names, record.game_over, record.won)
        return True


def get_daily_state_repository(store: KeyValueStore) -> DailyStateRepository:
    return DailyStateRepository(store)
