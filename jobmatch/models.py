"""Data models for profiles, postings and explainable match results."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class SkillCategory(str, Enum):
    TECHNICAL = "technical"
    SOFT = "soft"
    INDUSTRY = "industry"
    LANGUAGE = "language"


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    FREELANCE = "freelance"


class CompanySize(str, Enum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"


class RemotePreference(str, Enum):
    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"
    FLEXIBLE = "flexible"


class SalaryPeriod(str, Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class LevelMatch(str, Enum):
    EXACT = "exact"
    ABOVE = "above"
    BELOW = "below"


class SalaryAlignment(str, Enum):
    ABOVE = "above"
    WITHIN = "within"
    BELOW = "below"
    UNKNOWN = "unknown"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# --- Inputs -----------------------------------------------------------------


@dataclass(frozen=True)
class UserSkill:
    name: str
    level: int  # 1 = beginner, 5 = expert
    category: SkillCategory = SkillCategory.TECHNICAL
    endorsements: int | None = None
    years_experience: float | None = None


@dataclass(frozen=True)
class WorkExperience:
    title: str
    company: str
    start_date: datetime
    end_date: datetime | None = None
    id: str = ""
    location: str | None = None
    is_current: bool = False
    description: str | None = None
    skills: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Education:
    school: str
    id: str = ""
    degree: str | None = None
    field_of_study: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    gpa: float | None = None


@dataclass(frozen=True)
class SalaryRange:
    min: float
    max: float
    currency: str = "USD"
    period: SalaryPeriod = SalaryPeriod.YEARLY


@dataclass(frozen=True)
class JobPreferences:
    job_types: list[JobType] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    remote_preference: RemotePreference = RemotePreference.FLEXIBLE
    salary_range: SalaryRange | None = None
    industries: list[str] = field(default_factory=list)
    company_sizes: list[CompanySize] = field(default_factory=list)


@dataclass(frozen=True)
class Company:
    name: str
    size: CompanySize
    industry: str
    location: str = ""
    id: str = ""
    description: str | None = None


@dataclass(frozen=True)
class Job:
    id: str
    title: str
    company: Company
    location: str
    job_type: JobType
    experience_level: ExperienceLevel
    required_skills: list[str]
    posted_date: datetime
    is_remote: bool = False
    is_hybrid: bool = False
    preferred_skills: list[str] = field(default_factory=list)
    salary_range: SalaryRange | None = None
    description: str = ""
    requirements: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    application_deadline: datetime | None = None
    application_url: str = ""


@dataclass(frozen=True)
class UserProfile:
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    headline: str | None = None
    location: str | None = None
    skills: list[UserSkill] = field(default_factory=list)
    experience: list[WorkExperience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    preferences: JobPreferences = field(default_factory=JobPreferences)
    salary_expectation: SalaryRange | None = None


# --- Match components --------------------------------------------------------


@dataclass(frozen=True)
class MatchedSkill:
    skill: str
    user_level: int
    required_level: int
    match: LevelMatch


@dataclass(frozen=True)
class SkillsMatch:
    score: int
    matched_skills: list[MatchedSkill]
    missing_skills: list[str]
    total_required: int
    total_matched: int
    skills_gap: list[str]


@dataclass(frozen=True)
class ExperienceMatch:
    score: int
    user_years: float
    required_years: int
    level_match: LevelMatch
    relevant_experience: list[WorkExperience]


@dataclass(frozen=True)
class LocationMatch:
    score: int
    remote_compatible: bool
    user_preference: RemotePreference
    job_location: str
    distance: float | None = None


@dataclass(frozen=True)
class SalaryMatch:
    score: int
    alignment: SalaryAlignment
    user_range: SalaryRange | None = None
    job_range: SalaryRange | None = None


@dataclass(frozen=True)
class PreferencesMatch:
    score: int
    job_type: bool
    industry: bool
    company_size: bool
    remote_preference: bool


@dataclass(frozen=True)
class MatchComponents:
    skills: SkillsMatch
    experience: ExperienceMatch
    location: LocationMatch
    salary: SalaryMatch
    preferences: PreferencesMatch

    def scores(self) -> dict[str, int]:
        return {
            "skills": self.skills.score,
            "experience": self.experience.score,
            "location": self.location.score,
            "salary": self.salary.score,
            "preferences": self.preferences.score,
        }


@dataclass(frozen=True)
class JobMatch:
    job: Job
    overall_score: int
    confidence: Confidence
    components: MatchComponents
    reasoning: str
    recommendation_tags: list[str]

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view (enums as values, datetimes as ISO strings)."""
        return _plain(asdict(self))


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# --- Helpers -----------------------------------------------------------------


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round and clamp a raw score into the integer range [0, 100]."""
    if math.isnan(value):
        return 0
    return max(0, min(100, round_half_up(value)))


def enum_value(value: Any) -> Any:
    """Plain value of an enum member; other values pass through."""
    return value.value if isinstance(value, Enum) else value


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
