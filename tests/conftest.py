"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest

from jobmatch.models import (
    Company,
    CompanySize,
    ExperienceLevel,
    Job,
    JobPreferences,
    JobType,
    RemotePreference,
    UserProfile,
    UserSkill,
    WorkExperience,
)

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def build_job(**overrides) -> Job:
    data = {
        "id": "job-1",
        "title": "Software Engineer",
        "company": Company(
            name="Acme Corp",
            size=CompanySize.MEDIUM,
            industry="Technology",
            location="San Francisco, CA",
        ),
        "location": "San Francisco, CA",
        "job_type": JobType.FULL_TIME,
        "experience_level": ExperienceLevel.MID,
        "required_skills": ["React", "Node.js", "AWS"],
        "posted_date": NOW - timedelta(days=2),
    }
    data.update(overrides)
    return Job(**data)


def build_profile(**overrides) -> UserProfile:
    data = {
        "id": "user-1",
        "first_name": "Sam",
        "last_name": "Rivera",
        "email": "sam@example.com",
        "location": "San Francisco, CA",
        "skills": [
            UserSkill(name="React", level=4),
            UserSkill(name="Node.js", level=3),
            UserSkill(name="AWS", level=3),
        ],
        "experience": [
            WorkExperience(
                title="Software Engineer",
                company="Initech",
                start_date=datetime(2020, 1, 15, 12, 0, tzinfo=timezone.utc),
                is_current=True,
            )
        ],
        "preferences": JobPreferences(
            job_types=[JobType.FULL_TIME],
            remote_preference=RemotePreference.FLEXIBLE,
            industries=["Technology"],
            company_sizes=[CompanySize.MEDIUM],
        ),
    }
    data.update(overrides)
    return UserProfile(**data)


@pytest.fixture
def now() -> datetime:
    """Fixed clock for deterministic experience spans and recency tags."""
    return NOW


@pytest.fixture
def make_job():
    """Factory for job postings; keyword overrides replace the defaults."""
    return build_job


@pytest.fixture
def make_profile():
    """Factory for candidate profiles; keyword overrides replace the defaults."""
    return build_profile


@pytest.fixture
def years_ago():
    """Start date *n* years (of 365.25 days) before the fixed clock."""
    def _years_ago(years: float) -> datetime:
        return NOW - timedelta(days=round(years * 365.25))
    return _years_ago
