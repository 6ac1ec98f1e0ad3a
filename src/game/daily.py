import logging
from datetime import date
from typing import Iterable

from geodle.country import Country, CountryPool, build_pool
from geodle.persistence import DailyStateRepository
from geodle.round import DailyRound, GuessFeedback
from geodle.selector import get_daily_country
from geodle.share import share_text
from geodle.statistics import Statistics, StatisticsRepository

logger = logging.getLogger("game.daily")


class DailySession:
    """
    One player's daily game: today's round, and their statistics. Nothing can
    be played until `load()` has been given the country data.
    """

    def __init__(
        self,
        state_repo: DailyStateRepository,
        stats_repo: StatisticsRepository,
        day: date | None = None,
    ):
        self.state_repo = state_repo
        self.stats_repo = stats_repo
        self.day = day or date.today()

        self.pool: CountryPool | None = None
        self.round: DailyRound | None = None
        self.stats = Statistics()

    @property
    def ready(self) -> bool:
        return self.round is not None

    @property
    def target(self) -> Country | None:
        return self.round.target if self.round else None

    async def load(self, countries: Iterable[Country]) -> bool:
        """
        Sets up today's round from the given countries, resuming it if the
        player has already played today. Only runs once per session, since the
        pool's order decides the day's country.
        """
        if self.ready:
            return True

        pool = build_pool(countries)
        target = get_daily_country(pool, self.day)
        if target is None:
            logger.warning("No playable countries, today's round can't start")
            return False

        self.pool = pool
        self.round = DailyRound(target)
        self.stats = await self.stats_repo.get()

        if await self.state_repo.restore(self.round, pool, self.day):
            logger.info(
                "Resumed round for %s with %d guesses", self.day, self.round.guess_count
            )
        return True

    async def handle_guess(self, input: str) -> GuessFeedback | None:
        """
        Processes a guess by country name. Saves the round after every
        accepted guess, and ends the game if either end condition is reached
        (reached max guesses or guessed correctly).
        """
        if not self.ready:
            return None

        country = self.pool.lookup(input)
        if country is None:
            self.round.guess_error.emit()
            return None

        was_over = self.round.is_over
        feedback = self.round.submit_guess(country)
        if feedback is None:
            return None

        await self.state_repo.save(self.round, self.day)

        if self.round.is_over and not was_over:
            await self.end_game(self.round.won)

        return feedback

    async def end_game(self, won: bool) -> Statistics:
        """
        Counts the finished round in the player's statistics and saves them.
        """
        self.stats = self.stats.record(won)
        await self.stats_repo.save(self.stats)
        logger.info("Round over (won=%s), streak now %d", won, self.stats.streak)
        return self.stats

    async def save(self) -> None:
        if self.ready:
            await self.state_repo.save(self.round, self.day)

    def suggestions(self, text: str) -> list[Country]:
        if not self.ready:
            return []
        return self.pool.suggest(text, exclude=self.round.guessed_names)

    def share(self) -> str | None:
        if not self.ready or not self.round.is_over:
            return None
        return share_text(self.round, self.day)
