"""Distance lookup between two free-text locations.

The location matcher only depends on ``DistanceFn``: a callable that returns a
distance in km, or ``None`` when the distance is unknown. ``no_distance`` is
the default and always answers unknown, which routes scoring through fuzzy
text matching. ``GeocodingDistance`` resolves locations through a
Nominatim-compatible search API.
"""
from __future__ import annotations

import math
import threading
from typing import Callable, Optional

import requests

from jobmatch.config import get_env
from jobmatch.log import get_logger
from jobmatch.retry import retry, should_retry_http_status

log = get_logger(__name__)

DistanceFn = Callable[[str, str], Optional[float]]

DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "jobmatch/1.0"
EARTH_RADIUS_KM = 6371.0088


def no_distance(location_a: str, location_b: str) -> float | None:
    return None


def haversine_km(a: tuple[float, float], b: tuple[float, float]) -> float:
    """Great-circle distance between two (lat, lon) pairs in degrees."""
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)
    h = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def _giveup(exc: BaseException) -> bool:
    """Client errors (bad query, forbidden) will not improve on retry."""
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return not should_retry_http_status(exc.response.status_code)
    return False


class GeocodingDistance:
    """Distance collaborator backed by an HTTP geocoder.

    Coordinates are memoized per instance, including misses, so each
    distinct location string is looked up at most once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url or get_env("GEOCODER_URL", DEFAULT_GEOCODER_URL)
        self.user_agent = user_agent or get_env("GEOCODER_USER_AGENT", DEFAULT_USER_AGENT)
        self.timeout = timeout if timeout is not None else float(get_env("GEOCODER_TIMEOUT", "10"))
        self._cache: dict[str, tuple[float, float] | None] = {}
        self._lock = threading.Lock()

    def __call__(self, location_a: str, location_b: str) -> float | None:
        a = self.coordinates(location_a)
        b = self.coordinates(location_b)
        if a is None or b is None:
            return None
        return haversine_km(a, b)

    def coordinates(self, location: str) -> tuple[float, float] | None:
        key = (location or "").strip().lower()
        if not key:
            return None
        with self._lock:
            if key in self._cache:
                return self._cache[key]

        try:
            coords = self._lookup(key)
        except (requests.RequestException, OSError) as exc:
            # Not cached: a later call may find the service reachable again.
            log.warning("Geocoding %r failed: %s", location, exc)
            return None

        with self._lock:
            self._cache[key] = coords
        return coords

    @retry(
        max_attempts=3,
        base_delay=1.0,
        retryable=(requests.RequestException, OSError),
        giveup=_giveup,
    )
    def _fetch(self, query: str) -> list:
        r = requests.get(
            self.base_url,
            params={"q": query, "format": "json", "limit": 1},
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def _lookup(self, query: str) -> tuple[float, float] | None:
        data = self._fetch(query)
        if not data:
            log.debug("Geocoder has no result for %r", query)
            return None
        try:
            hit = data[0]
            return float(hit["lat"]), float(hit["lon"])
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            log.warning("Malformed geocoder payload for %r: %s", query, exc)
            return None
