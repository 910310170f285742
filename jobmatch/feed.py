"""Feed assembly: pre-filter postings, score them, and rank with a tolerance tie-break."""
from __future__ import annotations

import functools
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from jobmatch.config import DEFAULT_CONFIG, EngineConfig
from jobmatch.geo import DistanceFn
from jobmatch.log import get_logger
from jobmatch.models import CompanySize, Job, JobMatch, JobType, UserProfile, as_utc, enum_value
from jobmatch.scorer import score_jobs

log = get_logger(__name__)

SCORE_TOLERANCE = 5


@dataclass(frozen=True)
class FeedFilters:
    search_query: str = ""
    location: str = ""
    remote_only: bool = False
    job_types: list[JobType] = field(default_factory=list)
    company_sizes: list[CompanySize] = field(default_factory=list)
    salary_min: float | None = None
    salary_max: float | None = None
    posted_within_days: int = 30


def compare_matches(a: JobMatch, b: JobMatch, tolerance: int = SCORE_TOLERANCE) -> int:
    """Negative when *a* ranks first.

    Scores further apart than *tolerance* order by score; closer scores count
    as a tie and the newer posting wins.
    """
    if abs(a.overall_score - b.overall_score) > tolerance:
        return b.overall_score - a.overall_score
    posted_a, posted_b = as_utc(a.job.posted_date), as_utc(b.job.posted_date)
    if posted_a == posted_b:
        return 0
    return -1 if posted_a > posted_b else 1


def rank_feed(matches: list[JobMatch], tolerance: int = SCORE_TOLERANCE) -> list[JobMatch]:
    # The tie window is per pair, so this cannot be a plain sort key.
    cmp = functools.partial(compare_matches, tolerance=tolerance)
    return sorted(matches, key=functools.cmp_to_key(cmp))


def filter_by_min_score(matches: list[JobMatch], min_score: int = DEFAULT_CONFIG.min_score) -> list[JobMatch]:
    return [m for m in matches if m.overall_score >= min_score]


def _matches_query(job: Job, query: str) -> bool:
    return (
        query in job.title.lower()
        or query in job.company.name.lower()
        or any(query in skill.lower() for skill in job.required_skills)
    )


def _matches_salary(job: Job, salary_min: float | None, salary_max: float | None) -> bool:
    if job.salary_range is None:
        return False
    if salary_min and job.salary_range.max < salary_min:
        return False
    if salary_max and job.salary_range.min > salary_max:
        return False
    return True


def filter_jobs(jobs: list[Job], filters: FeedFilters, now: datetime | None = None) -> list[Job]:
    """Apply the feed's search filters to raw postings before scoring."""
    now = as_utc(now or datetime.now(timezone.utc))
    query = filters.search_query.strip().lower()
    location = filters.location.strip().lower()
    job_types = {enum_value(t) for t in filters.job_types}
    sizes = {enum_value(s) for s in filters.company_sizes}
    cutoff = now - timedelta(days=filters.posted_within_days)

    kept: list[Job] = []
    for job in jobs:
        if query and not _matches_query(job, query):
            continue
        if location and not (
            location in job.location.lower() or (filters.remote_only and job.is_remote)
        ):
            continue
        if filters.remote_only and not (job.is_remote or job.is_hybrid):
            continue
        if job_types and enum_value(job.job_type) not in job_types:
            continue
        if sizes and enum_value(job.company.size) not in sizes:
            continue
        if (filters.salary_min or filters.salary_max) and not _matches_salary(
            job, filters.salary_min, filters.salary_max
        ):
            continue
        if as_utc(job.posted_date) < cutoff:
            continue
        kept.append(job)

    log.debug("Feed filters kept %d of %d jobs", len(kept), len(jobs))
    return kept


def build_feed(
    profile: UserProfile,
    jobs: list[Job],
    *,
    filters: FeedFilters | None = None,
    min_score: int | None = None,
    config: EngineConfig | None = None,
    distance_km: DistanceFn | None = None,
    now: datetime | None = None,
    max_workers: int | None = None,
) -> list[JobMatch]:
    """Filter → score → (optional) min-score cut → rank."""
    config = config or DEFAULT_CONFIG
    now = now or datetime.now(timezone.utc)

    candidates = filter_jobs(jobs, filters, now) if filters is not None else list(jobs)
    matches = score_jobs(
        profile, candidates,
        config=config, distance_km=distance_km, now=now, max_workers=max_workers,
    )
    if min_score is not None:
        matches = filter_by_min_score(matches, min_score)

    ranked = rank_feed(matches, config.feed_tolerance)
    log.info(
        "Feed for %s: %d postings → %d filtered → %d ranked",
        profile.id, len(jobs), len(candidates), len(ranked),
    )
    return ranked
