import logging
import os

import httpx  # HTTP requests
from pydantic import ValidationError

from geodle.country import Country

logger = logging.getLogger(__name__)

COUNTRIES_API_URL = os.getenv("COUNTRIES_API_URL", "https://restcountries.com")
FIELDS = "name,cca2,region,subregion,population,latlng,area,capital,continents"


class CountriesAPI:
    def __init__(self, base_url=COUNTRIES_API_URL, transport: httpx.AsyncBaseTransport = None):
        self.base = base_url
        self.client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=10)

    # every country, in the order the API returns them
    async def all(self) -> list[Country] | None:
        try:
            r = await self.client.get("/v3.1/all", params={"fields": FIELDS})
        except httpx.HTTPError as e:
            logger.warning("Country data request failed: %s", e)
            return None

        if r.status_code != 200:
            logger.warning("Country data request returned %s", r.status_code)
            return None

        try:
            records = r.json()
        except ValueError:
            logger.warning("Country data response wasn't valid JSON")
            return None

        countries = []
        for record in records:
            try:
                countries.append(Country.from_restcountries(record))
            except (KeyError, TypeError, ValidationError):
                logger.debug("Skipping malformed country record %r", record)
        return countries

    async def close(self):
        await self.client.aclose()
