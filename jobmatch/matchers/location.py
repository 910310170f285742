"""Geographic and remote-work compatibility."""
from __future__ import annotations

from jobmatch.geo import DistanceFn, no_distance
from jobmatch.log import get_logger
from jobmatch.models import Job, LocationMatch, RemotePreference, UserProfile, clamp_score
from jobmatch.similarity import similarity

log = get_logger(__name__)

REMOTE_MATCH_SCORE = 100
REMOTE_MISMATCH_SCORE = 20

# (max km, score), checked in order; anything farther scores DISTANCE_FLOOR.
DISTANCE_TIERS: list[tuple[float, int]] = [(10, 100), (25, 80), (50, 60), (100, 40)]
DISTANCE_FLOOR = 20


def distance_score(distance_km: float) -> int:
    for limit, score in DISTANCE_TIERS:
        if distance_km <= limit:
            return score
    return DISTANCE_FLOOR


def fuzzy_location_score(location_a: str, location_b: str) -> int:
    return clamp_score(similarity(location_a, location_b) * 100)


def _lookup_distance(distance_km: DistanceFn, user_location: str, job_location: str) -> float | None:
    try:
        return distance_km(user_location, job_location)
    except Exception as exc:
        log.warning("Distance lookup %r → %r failed: %s", user_location, job_location, exc)
        return None


def match_location(
    profile: UserProfile, job: Job, distance_km: DistanceFn | None = None
) -> LocationMatch:
    preference = RemotePreference(profile.preferences.remote_preference)
    remote_compatible = bool(job.is_remote or job.is_hybrid)
    user_location = profile.location or ""
    distance: float | None = None

    if remote_compatible and preference is not RemotePreference.ONSITE:
        score = REMOTE_MATCH_SCORE
    elif preference is RemotePreference.REMOTE and not remote_compatible:
        score = REMOTE_MISMATCH_SCORE
    else:
        distance = _lookup_distance(distance_km or no_distance, user_location, job.location)
        if distance is None:
            score = fuzzy_location_score(user_location, job.location)
        else:
            score = distance_score(distance)

    log.debug(
        "Location for %s: pref=%s remote_ok=%s distance=%s → %d",
        job.id, preference.value, remote_compatible, distance, score,
    )
    return LocationMatch(
        score=score,
        remote_compatible=remote_compatible,
        user_preference=preference,
        job_location=job.location,
        distance=distance,
    )
