"""Combine component matches into an explainable, ranked JobMatch."""
from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from jobmatch.config import DEFAULT_CONFIG, EngineConfig, Weights
from jobmatch.geo import DistanceFn
from jobmatch.log import get_logger
from jobmatch.matchers import (
    match_experience,
    match_location,
    match_preferences,
    match_salary,
    match_skills,
)
from jobmatch.models import (
    Confidence,
    Job,
    JobMatch,
    MatchComponents,
    UserProfile,
    clamp_score,
)
from jobmatch.reasoning import generate_reasoning, generate_tags

log = get_logger(__name__)

HIGH_SKILLS, HIGH_EXPERIENCE = 80, 70
MEDIUM_SKILLS, MEDIUM_EXPERIENCE = 60, 50
COMPLETE_PROFILE_SKILLS = 3
COMPLETE_PROFILE_EXPERIENCE = 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def match_components(
    profile: UserProfile,
    job: Job,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
    distance_km: DistanceFn | None = None,
    now: datetime,
) -> MatchComponents:
    return MatchComponents(
        skills=match_skills(profile.skills, job, config),
        experience=match_experience(profile.experience, job, now, config),
        location=match_location(profile, job, distance_km),
        salary=match_salary(profile.salary_expectation, job.salary_range),
        preferences=match_preferences(profile.preferences, job),
    )


def overall_score(components: MatchComponents, weights: Weights = DEFAULT_CONFIG.weights) -> int:
    scores = components.scores()
    w = weights.as_dict()
    return clamp_score(math.fsum(scores[name] * w[name] for name in w))


def determine_confidence(components: MatchComponents, profile: UserProfile) -> Confidence:
    skills = components.skills.score
    experience = components.experience.score
    complete_profile = (
        len(profile.skills) >= COMPLETE_PROFILE_SKILLS
        and len(profile.experience) >= COMPLETE_PROFILE_EXPERIENCE
    )
    if skills >= HIGH_SKILLS and experience >= HIGH_EXPERIENCE and complete_profile:
        return Confidence.HIGH
    if skills >= MEDIUM_SKILLS and experience >= MEDIUM_EXPERIENCE:
        return Confidence.MEDIUM
    return Confidence.LOW


def score_job(
    profile: UserProfile,
    job: Job,
    *,
    config: EngineConfig | None = None,
    distance_km: DistanceFn | None = None,
    now: datetime | None = None,
) -> JobMatch:
    """Score one (profile, job) pair.

    ``now`` drives ongoing-experience spans and the "Recently Posted" tag;
    pass it explicitly for reproducible results.
    """
    config = config or DEFAULT_CONFIG
    now = now or _utcnow()

    components = match_components(profile, job, config=config, distance_km=distance_km, now=now)
    match = JobMatch(
        job=job,
        overall_score=overall_score(components, config.weights),
        confidence=determine_confidence(components, profile),
        components=components,
        reasoning=generate_reasoning(components),
        recommendation_tags=generate_tags(components, job, now, config.recent_days),
    )
    log.debug(
        "Scored %s for profile %s: %d (%s) %s",
        job.id, profile.id, match.overall_score, match.confidence.value, components.scores(),
    )
    return match


def score_jobs(
    profile: UserProfile,
    jobs: list[Job],
    *,
    config: EngineConfig | None = None,
    distance_km: DistanceFn | None = None,
    now: datetime | None = None,
    max_workers: int | None = None,
) -> list[JobMatch]:
    """Score a batch of postings in parallel; results keep the input order."""
    if not jobs:
        return []
    now = now or _utcnow()

    def _score(job: Job) -> JobMatch:
        return score_job(profile, job, config=config, distance_km=distance_km, now=now)

    workers = max_workers or min(8, len(jobs))
    if workers <= 1:
        matches = [_score(job) for job in jobs]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            matches = list(pool.map(_score, jobs))

    log.info("Scored %d jobs for profile %s", len(matches), profile.id)
    return matches


class MatchEngine:
    """Context-free service wrapper: config, distance source and clock in one place.

    Holds no per-call state; every method delegates to the module functions.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        distance_km: DistanceFn | None = None,
        clock=_utcnow,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.distance_km = distance_km
        self.clock = clock

    def match(self, profile: UserProfile, job: Job) -> JobMatch:
        return score_job(
            profile, job, config=self.config, distance_km=self.distance_km, now=self.clock()
        )

    def match_all(self, profile: UserProfile, jobs: list[Job], max_workers: int | None = None) -> list[JobMatch]:
        return score_jobs(
            profile, jobs,
            config=self.config, distance_km=self.distance_km,
            now=self.clock(), max_workers=max_workers,
        )

    def feed(self, profile: UserProfile, jobs: list[Job], filters=None, min_score: int | None = None) -> list[JobMatch]:
        from jobmatch.feed import build_feed

        return build_feed(
            profile, jobs,
            filters=filters, min_score=min_score,
            config=self.config, distance_km=self.distance_km, now=self.clock(),
        )
