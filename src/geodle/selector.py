import math
import random
from datetime import date

from geodle.country import Country, CountryPool


def day_key(day: date) -> int:
    """
    Integer key for a calendar day, e.g. 2024-03-07 -> 20240307. Strictly
    increasing from one day to the next.
    """
    return day.year * 10000 + day.month * 100 + day.day


def seeded_random(seed: int) -> float:
    """
    Reproducible value in [0, 1) for the given seed. Uses its own generator so
    the module-level random state is left alone.
    """
    return random.Random(seed).random()


def get_daily_index(day: date, pool_size: int) -> int:
    return math.floor(seeded_random(day_key(day)) * pool_size)


def get_daily_country(pool: CountryPool, day: date | None = None) -> Country | None:
    """
    Gets the country for the given date (today by default), deterministically.
    The same date and the same pool ordering always give the same country.
    """
    if not len(pool):
        return None
    day = day or date.today()
    return pool[get_daily_index(day, len(pool))]
