from datetime import date

import pytest

from geodle.country import Country, build_pool

pytest_plugins = ["nicegui.testing.user_plugin"]


def make_country(name, code, region, subregion, continents, population, latlng, area=1000):
    return Country(
        name=name,
        code=code,
        region=region,
        subregion=subregion,
        continents=continents,
        population=population,
        area=area,
        latlng=latlng,
    )


FRANCE = make_country(
    "France", "FR", "Europe", "Western Europe", ["Europe"], 67391582, [46.6, 2.2], 551695
)
GERMANY = make_country(
    "Germany", "DE", "Europe", "Western Europe", ["Europe"], 83240525, [51.2, 9.5], 357114
)
SPAIN = make_country(
    "Spain", "ES", "Europe", "Southern Europe", ["Europe"], 47351567, [40.0, -4.0], 505992
)
FINLAND = make_country(
    "Finland", "FI", "Europe", "Northern Europe", ["Europe"], 5530719, [64.0, 26.0], 338424
)
BRAZIL = make_country(
    "Brazil", "BR", "Americas", "South America", ["South America"], 212559409, [-10.0, -55.0]
)
JAPAN = make_country("Japan", "JP", "Asia", "Eastern Asia", ["Asia"], 125836021, [36.0, 138.0])
AUSTRALIA = make_country(
    "Australia", "AU", "Oceania", "Australia and New Zealand", ["Oceania"], 25687041, [-27.0, 133.0]
)
EGYPT = make_country("Egypt", "EG", "Africa", "Northern Africa", ["Africa"], 102334403, [27.0, 30.0])
CANADA = make_country(
    "Canada", "CA", "Americas", "North America", ["North America"], 38005238, [60.0, -95.0]
)

# Not playable: too few people, and no coordinates
VATICAN = make_country(
    "Vatican City", "VA", "Europe", "Southern Europe", ["Europe"], 451, [41.9, 12.45]
)
NOWHERE = make_country("Nowhere", "NW", "Europe", "Northern Europe", ["Europe"], 200000, [])

PLAYABLE = [FRANCE, GERMANY, SPAIN, FINLAND, BRAZIL, JAPAN, AUSTRALIA, EGYPT, CANADA]


@pytest.fixture
def countries():
    return [FRANCE, GERMANY, VATICAN, SPAIN, FINLAND, BRAZIL, NOWHERE, JAPAN, AUSTRALIA, EGYPT, CANADA]


@pytest.fixture
def pool(countries):
    return build_pool(countries)


@pytest.fixture
def today():
    return date(2024, 3, 7)
