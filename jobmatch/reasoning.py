"""Human-readable reasoning and recommendation tags for a scored match."""
from __future__ import annotations

from datetime import datetime, timedelta

from jobmatch.models import Job, LevelMatch, MatchComponents, SalaryAlignment, as_utc

STRONG_SKILLS = 80
GOOD_SKILLS = 60
LOCATION_HIGHLIGHT = 90

PERFECT_SKILLS_TAG = 90
STRONG_SKILLS_TAG = 70

_EXPERIENCE_SENTENCES: dict[LevelMatch, str] = {
    LevelMatch.EXACT: "Perfect experience level fit",
    LevelMatch.ABOVE: "Overqualified - could be a leadership opportunity",
    LevelMatch.BELOW: "Growth opportunity to advance your career",
}

_SALARY_SENTENCES: dict[SalaryAlignment, str] = {
    SalaryAlignment.ABOVE: "Salary exceeds your expectations",
    SalaryAlignment.WITHIN: "Salary aligns with your expectations",
}


def generate_reasoning(components: MatchComponents) -> str:
    """Fixed-order sentences: skills, experience, then location and salary when notable."""
    skills = components.skills
    reasons: list[str] = []

    if skills.score >= STRONG_SKILLS:
        reasons.append(
            f"Strong skills match ({skills.total_matched}/{skills.total_required} required skills)"
        )
    elif skills.score >= GOOD_SKILLS:
        reasons.append("Good skills match with room to grow")
    else:
        reasons.append("Skills gap exists - great learning opportunity")

    reasons.append(_EXPERIENCE_SENTENCES[LevelMatch(components.experience.level_match)])

    if components.location.score >= LOCATION_HIGHLIGHT:
        if components.location.remote_compatible:
            reasons.append("Remote-friendly position")
        else:
            reasons.append("Great location match")

    salary_sentence = _SALARY_SENTENCES.get(SalaryAlignment(components.salary.alignment))
    if salary_sentence:
        reasons.append(salary_sentence)

    return ". ".join(reasons) + "."


def generate_tags(
    components: MatchComponents, job: Job, now: datetime, recent_days: int = 7
) -> list[str]:
    tags: list[str] = []

    if components.skills.score >= PERFECT_SKILLS_TAG:
        tags.append("Perfect Skills Match")
    elif components.skills.score >= STRONG_SKILLS_TAG:
        tags.append("Strong Skills Match")

    level = LevelMatch(components.experience.level_match)
    if level is LevelMatch.ABOVE:
        tags.append("Senior Opportunity")
    elif level is LevelMatch.BELOW:
        tags.append("Growth Opportunity")

    if components.location.remote_compatible:
        tags.append("Remote Friendly")
    if SalaryAlignment(components.salary.alignment) is SalaryAlignment.ABOVE:
        tags.append("High Compensation")

    if as_utc(job.posted_date) > as_utc(now) - timedelta(days=recent_days):
        tags.append("Recently Posted")

    return tags
