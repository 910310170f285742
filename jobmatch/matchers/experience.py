"""Years-of-experience fit against the role level, plus a relevance bonus."""
from __future__ import annotations

import math
from datetime import datetime

from jobmatch.config import DEFAULT_CONFIG, EngineConfig
from jobmatch.log import get_logger
from jobmatch.models import (
    ExperienceLevel,
    ExperienceMatch,
    Job,
    LevelMatch,
    WorkExperience,
    as_utc,
    clamp_score,
    enum_value,
)
from jobmatch.similarity import similarity

log = get_logger(__name__)

REQUIRED_YEARS_BY_LEVEL: dict[str, int] = {
    ExperienceLevel.ENTRY.value: 0,
    ExperienceLevel.MID.value: 3,
    ExperienceLevel.SENIOR.value: 6,
    ExperienceLevel.LEAD.value: 10,
    ExperienceLevel.EXECUTIVE.value: 15,
}
DEFAULT_REQUIRED_YEARS = 3

DAYS_PER_MONTH = 30.44
RATIO_CAP = 2.0
OVERQUALIFIED_FACTOR = 1.5
MAX_RELEVANCE_BONUS = 20.0


def required_years_for(level: str) -> int:
    return REQUIRED_YEARS_BY_LEVEL.get(enum_value(level), DEFAULT_REQUIRED_YEARS)


def total_years(experience: list[WorkExperience], now: datetime) -> float:
    """Sum of every entry's span in years, to one decimal.

    Entries are summed as given; concurrent roles are not merged.
    """
    now = as_utc(now)
    months = 0.0
    for entry in experience:
        end = as_utc(entry.end_date) if entry.end_date else now
        days = (end - as_utc(entry.start_date)).total_seconds() / 86400
        months += days / DAYS_PER_MONTH
    return math.floor(months / 12 * 10 + 0.5) / 10


def find_relevant_experience(
    experience: list[WorkExperience], job: Job, config: EngineConfig = DEFAULT_CONFIG
) -> list[WorkExperience]:
    relevant: list[WorkExperience] = []
    for entry in experience:
        title_match = similarity(entry.title, job.title) > config.title_similarity
        skills_match = any(
            similarity(skill, required) > config.skill_similarity
            for skill in entry.skills or []
            for required in job.required_skills
        )
        if title_match or skills_match:
            relevant.append(entry)
    return relevant


def match_experience(
    experience: list[WorkExperience],
    job: Job,
    now: datetime,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ExperienceMatch:
    user_years = total_years(experience, now)
    required = required_years_for(job.experience_level)
    relevant = find_relevant_experience(experience, job, config)

    if user_years >= required:
        # A zero-year requirement is already met at the cap, however little
        # experience the candidate has.
        ratio = min(user_years / required, RATIO_CAP) if required else RATIO_CAP
        score = min(100.0, 50 + (ratio - 1) * 50)
        overqualified = user_years > required * OVERQUALIFIED_FACTOR or required == 0
        level_match = LevelMatch.ABOVE if overqualified else LevelMatch.EXACT
    else:
        # Only reachable with a zero requirement when dates run backwards.
        score = (user_years / required) * 50 if required else 0.0
        level_match = LevelMatch.BELOW

    if relevant and user_years > 0:
        relevant_years = total_years(relevant, now)
        score += min((relevant_years / user_years) * MAX_RELEVANCE_BONUS, MAX_RELEVANCE_BONUS)

    result = clamp_score(min(100.0, score))
    log.debug(
        "Experience for %s: %.1f/%d years (%s), %d relevant → %d",
        job.id, user_years, required, level_match.value, len(relevant), result,
    )
    return ExperienceMatch(
        score=result,
        user_years=user_years,
        required_years=required,
        level_match=level_match,
        relevant_experience=relevant,
    )
