"""Required/preferred skill matching with level-aware penalties."""
from __future__ import annotations

from jobmatch.config import DEFAULT_CONFIG, EngineConfig
from jobmatch.log import get_logger
from jobmatch.models import (
    ExperienceLevel,
    Job,
    LevelMatch,
    MatchedSkill,
    SkillsMatch,
    UserSkill,
    clamp_score,
    enum_value,
)
from jobmatch.similarity import similarity

log = get_logger(__name__)

REQUIRED_LEVEL_BY_EXPERIENCE: dict[str, int] = {
    ExperienceLevel.ENTRY.value: 2,
    ExperienceLevel.MID.value: 3,
    ExperienceLevel.SENIOR.value: 4,
    ExperienceLevel.LEAD.value: 5,
    ExperienceLevel.EXECUTIVE.value: 5,
}
PREFERRED_SKILL_LEVEL = 3

PREFERRED_BONUS_PER_SKILL = 5
MAX_PREFERRED_BONUS = 20
PENALTY_PER_LEVEL = 5
MAX_LEVEL_PENALTY = 30


def infer_required_level(experience_level: str) -> int:
    return REQUIRED_LEVEL_BY_EXPERIENCE.get(enum_value(experience_level), PREFERRED_SKILL_LEVEL)


def classify_level(user_level: int, required_level: int) -> LevelMatch:
    if user_level == required_level:
        return LevelMatch.EXACT
    if user_level > required_level:
        return LevelMatch.ABOVE
    return LevelMatch.BELOW


def find_matching_skill(
    user_skills: list[UserSkill], skill_name: str, threshold: float = 0.7
) -> UserSkill | None:
    """Exact case-insensitive name first, then the first fuzzy match above *threshold*."""
    wanted = skill_name.lower()
    for skill in user_skills:
        if skill.name.lower() == wanted:
            return skill
    for skill in user_skills:
        if similarity(skill.name, skill_name) > threshold:
            return skill
    return None


def level_penalty(matched: list[MatchedSkill]) -> int:
    penalty = sum(
        (m.required_level - m.user_level) * PENALTY_PER_LEVEL
        for m in matched
        if m.match is LevelMatch.BELOW
    )
    return min(penalty, MAX_LEVEL_PENALTY)


def match_skills(
    user_skills: list[UserSkill], job: Job, config: EngineConfig = DEFAULT_CONFIG
) -> SkillsMatch:
    required = list(job.required_skills)
    preferred = list(job.preferred_skills or [])
    required_level = infer_required_level(job.experience_level)

    matched: list[MatchedSkill] = []
    missing: list[str] = []

    for name in required:
        user_skill = find_matching_skill(user_skills, name, config.skill_similarity)
        if user_skill is None:
            missing.append(name)
            continue
        matched.append(
            MatchedSkill(
                skill=name,
                user_level=user_skill.level,
                required_level=required_level,
                match=classify_level(user_skill.level, required_level),
            )
        )

    # Preferred skills only ever add; a miss here is not a gap.
    for name in preferred:
        if any(m.skill == name for m in matched):
            continue
        user_skill = find_matching_skill(user_skills, name, config.skill_similarity)
        if user_skill is None:
            continue
        matched.append(
            MatchedSkill(
                skill=name,
                user_level=user_skill.level,
                required_level=PREFERRED_SKILL_LEVEL,
                match=classify_level(user_skill.level, PREFERRED_SKILL_LEVEL),
            )
        )

    required_hits = [m for m in matched if m.skill in required]
    preferred_hits = [m for m in matched if m.skill in preferred]

    base = (len(required_hits) / len(required)) * 100 if required else 0.0
    bonus = min(len(preferred_hits) * PREFERRED_BONUS_PER_SKILL, MAX_PREFERRED_BONUS)
    penalty = level_penalty(matched)
    score = clamp_score(base + bonus - penalty)

    log.debug(
        "Skills for %s: %d/%d required, %d preferred, penalty=%d → %d",
        job.id, len(required_hits), len(required), len(preferred_hits), penalty, score,
    )
    return SkillsMatch(
        score=score,
        matched_skills=matched,
        missing_skills=missing,
        total_required=len(required),
        total_matched=len(required_hits),
        skills_gap=list(missing),
    )