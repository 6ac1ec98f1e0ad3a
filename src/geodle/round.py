"""
This file contains classes and methods to be used for managing a game round.
"""

import logging
import os
from enum import Enum
from typing import Iterable

from nicegui import Event

from geodle.country import Country, CountryPool
from geodle.geo import Direction, bearing_octant, distance_km

logger = logging.getLogger(__name__)

MAX_GUESSES = int(os.getenv("GEODLE_MAX_GUESSES", "6"))
FOUND_DISTANCE_KM = float(os.getenv("GEODLE_FOUND_DISTANCE_KM", "50"))


class GuessFeedback:
    """
    Class that contains feedback for a guess.

    `distance` is in kilometers, and `direction` points from the guess toward
    the answer. `region` and `continent` are True on an exact match (continent
    compares primary continents only).
    """

    country: Country
    distance: float
    direction: Direction
    region: bool
    continent: bool

    def __init__(
        self,
        country: Country,
        distance: float,
        direction: Direction,
        region: bool,
        continent: bool,
    ):
        self.country = country
        self.distance = distance
        self.direction = direction
        self.region = region
        self.continent = continent


def compare_countries(guess: Country, answer: Country) -> GuessFeedback:
    """
    Grades a guess against the answer:
    - Distance between the two
    - Direction to travel from the guess to reach the answer
    - Region
    - Primary continent
    """
    distance = distance_km(guess.coordinates, answer.coordinates)

    if distance < FOUND_DISTANCE_KM or guess.name == answer.name:
        direction = Direction.FOUND
    else:
        direction = bearing_octant(guess.coordinates, answer.coordinates)

    return GuessFeedback(
        country=guess,
        distance=distance,
        direction=direction,
        region=guess.region == answer.region,
        continent=guess.continent is not None and guess.continent == answer.continent,
    )


class RoundStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class DailyRound:
    """
    Class to hold all of the data for a single round, to be passed around while
    playing. Once the round is over (won, or out of guesses) it no longer
    accepts guesses.
    """

    target: Country | None
    guesses: list[GuessFeedback]
    max_guesses: int
    is_over: bool
    won: bool
    guess_graded: Event
    game_ended: Event
    guess_error: Event

    def __init__(self, target: Country | None, max_guesses: int = MAX_GUESSES):
        self.target = target
        self.guesses = []
        self.max_guesses = max_guesses
        self.is_over = False
        self.won = False

        self.guess_graded = Event[Country, GuessFeedback]()
        self.game_ended = Event[bool]()
        self.guess_error = Event()

    @property
    def guessed_names(self) -> list[str]:
        return [feedback.country.name for feedback in self.guesses]

    @property
    def guess_count(self) -> int:
        return len(self.guesses)

    @property
    def remaining(self) -> int:
        return self.max_guesses - len(self.guesses)

    @property
    def status(self) -> RoundStatus:
        if self.won:
            return RoundStatus.WON
        if self.is_over:
            return RoundStatus.LOST
        return RoundStatus.IN_PROGRESS

    def submit_guess(self, country: Country) -> GuessFeedback | None:
        """
        Grades and records a guess. Returns None, changing nothing, if the
        round is over, has no target, or the country was already guessed.
        """
        if self.is_over or self.target is None:
            return None
        if country.name in self.guessed_names:
            return None

        feedback = compare_countries(country, self.target)
        self.guesses.append(feedback)

        self.won = country.name == self.target.name
        self.is_over = self.won or len(self.guesses) == self.max_guesses

        self.guess_graded.emit(country, feedback)
        if self.is_over:
            self.game_ended.emit(self.won)

        return feedback

    def restore(self, pool: CountryPool, names: Iterable[str], is_over: bool, won: bool):
        """
        Rebuilds the guesses from saved country names, grading each one again
        against the current target. Names that aren't in the pool are dropped.
        Doesn't emit game_ended, since the round was already ended (and
        recorded) when it was first played.
        """
        if self.target is None:
            return

        self.guesses = []
        for name in names:
            if len(self.guesses) == self.max_guesses or self.target.name in self.guessed_names:
                break
            country = pool.find(name)
            if country is None:
                logger.info("Dropping saved guess %r, not in the country pool", name)
                continue
            if name in self.guessed_names:
                continue
            self.guesses.append(compare_countries(country, self.target))

        self.won = bool(self.guesses) and self.guesses[-1].country.name == self.target.name
        self.is_over = is_over or self.won or len(self.guesses) == self.max_guesses
        if won != self.won:
            logger.info("Saved round said won=%s, restored guesses say won=%s", won, self.won)
