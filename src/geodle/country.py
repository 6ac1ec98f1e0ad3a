"""
Country data as the game sees it, and the candidate pool built from it.
"""

import logging
import os
from typing import Iterable, Sequence

from countryinfo import CountryInfo
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

MIN_POPULATION = int(os.getenv("GEODLE_MIN_POPULATION", "100000"))
MIN_SUGGESTION_LENGTH = 2
MAX_SUGGESTIONS = 5


class Country(BaseModel):
    """
    A single country. `continents` is ordered, the first entry being the
    country's primary continent.
    """

    name: str
    code: str = ""
    region: str = ""
    subregion: str = ""
    continents: list[str] = []
    population: int = 0
    area: float = 0
    latlng: list[float] = []
    capital: list[str] = []

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latlng[0], self.latlng[1])

    @property
    def continent(self) -> str | None:
        return self.continents[0] if self.continents else None

    def is_candidate(self) -> bool:
        """
        Whether this country can be a daily answer or a suggestion.
        """
        return self.population > MIN_POPULATION and len(self.latlng) == 2

    @classmethod
    def from_restcountries(cls, data: dict) -> "Country":
        """Create a Country from a REST Countries v3.1 record"""
        return cls(
            name=data["name"]["common"],
            code=data.get("cca2", ""),
            region=data.get("region", ""),
            subregion=data.get("subregion", ""),
            continents=data.get("continents") or [],
            population=data.get("population", 0),
            area=data.get("area") or 0,
            latlng=data.get("latlng") or [],
            capital=data.get("capital") or [],
        )


class CountryPool(Sequence[Country]):
    """
    Ordered, index-addressable set of candidate countries. The order is fixed
    when the pool is built; daily selection and restoring saved guesses both
    index into it, so a pool must not be rebuilt mid-day.
    """

    def __init__(self, countries: Iterable[Country]):
        self._countries = tuple(countries)
        self._by_name = {country.name: country for country in self._countries}
        self._by_folded_name = {country.name.casefold(): country for country in self._countries}

    def __getitem__(self, index):
        return self._countries[index]

    def __len__(self) -> int:
        return len(self._countries)

    @property
    def names(self) -> list[str]:
        return [country.name for country in self._countries]

    def find(self, name: str) -> Country | None:
        """Exact (case-sensitive) lookup by common name"""
        return self._by_name.get(name)

    def lookup(self, text: str) -> Country | None:
        """
        Resolves typed input to a country, falling back to a case-insensitive
        match on the name.
        """
        text = text.strip()
        country = self.find(text)
        if country is None:
            country = self._by_folded_name.get(text.casefold())
        return country

    def suggest(
        self, text: str, exclude: Iterable[str] = (), limit: int = MAX_SUGGESTIONS
    ) -> list[Country]:
        """
        Countries whose name contains `text` (ignoring case), skipping any
        already in `exclude`. Nothing is suggested for very short input.
        """
        if len(text) < MIN_SUGGESTION_LENGTH:
            return []

        needle = text.lower()
        excluded = set(exclude)
        matches = []
        for country in self._countries:
            if needle in country.name.lower() and country.name not in excluded:
                matches.append(country)
                if len(matches) == limit:
                    break
        return matches


def build_pool(countries: Iterable[Country]) -> CountryPool:
    """
    Filters out countries that can't be played (too small, or no usable
    coordinates), keeping the source order.
    """
    countries = list(countries)
    pool = CountryPool(c for c in countries if c.is_candidate())
    logger.debug("Built pool of %d candidates from %d countries", len(pool), len(countries))
    return pool


# countryinfo has no continent data and groups South America with the rest of
# Latin America, so South American countries are listed by ISO alpha-2 code
SOUTH_AMERICA = {
    "AR", "BO", "BR", "CL", "CO", "EC", "FK", "GF", "GY", "PE", "PY", "SR", "UY", "VE",
}


def _continents_for(region: str, code: str) -> list[str]:
    if region == "Americas":
        return ["South America"] if code in SOUTH_AMERICA else ["North America"]
    if code == "AQ" or region in ("Polar", "Antarctic"):
        return ["Antarctica"]
    return [region] if region else []


def map_to_country_obj(obj: CountryInfo) -> Country:
    """
    Maps a countryinfo record onto a Country. countryinfo has no continent
    data, so the continent is derived from the region and country code.
    """
    info = obj.info()
    capital = info.get("capital")
    region = info.get("region") or ""
    code = (info.get("ISO") or {}).get("alpha2", "")

    return Country(
        name=info["name"],
        code=code,
        region=region,
        subregion=info.get("subregion") or "",
        continents=_continents_for(region, code.upper()),
        population=info.get("population") or 0,
        area=info.get("area") or 0,
        latlng=info.get("latlng") or [],
        capital=[capital] if capital else [],
    )


def load_offline_countries() -> list[Country]:
    """
    Every country bundled with countryinfo, sorted by name so the order is
    stable between runs. Returns an empty list if the dataset can't be read.
    """
    try:
        keys = sorted(CountryInfo.all())
    except (OSError, ValueError) as e:
        logger.warning("Couldn't read the countryinfo dataset: %s", e)
        return []

    countries = []
    for key in keys:
        try:
            countries.append(map_to_country_obj(CountryInfo(key)))
        except (LookupError, ValidationError):
            logger.warning("Skipping unusable countryinfo record %r", key)
    return countries


def format_population(n: int) -> str:
    if n >= 1e9:
        return f"{n / 1e9:.1f}B"
    if n >= 1e6:
        return f"{n / 1e6:.1f}M"
    if n >= 1e3:
        return f"{n / 1e3:.0f}K"
    return str(n)


def flag_emoji(code: str) -> str:
    """Regional indicator flag for a two-letter country code"""
    return "".join(chr(0x1F1E6 + ord(c) - ord("A")) for c in code.upper())
