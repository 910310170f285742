"""Discrete preference alignment: job type, industry, company size, remote mode."""
from __future__ import annotations

from jobmatch.models import Job, JobPreferences, PreferencesMatch, RemotePreference, enum_value

POINTS_PER_CHECK = 25


def remote_preference_satisfied(preference: str, job: Job) -> bool:
    pref = enum_value(preference)
    if pref == RemotePreference.REMOTE.value:
        return job.is_remote
    if pref == RemotePreference.HYBRID.value:
        return job.is_hybrid or job.is_remote
    if pref == RemotePreference.ONSITE.value:
        return not job.is_remote
    return True


def match_preferences(preferences: JobPreferences, job: Job) -> PreferencesMatch:
    job_type = enum_value(job.job_type) in {enum_value(t) for t in preferences.job_types}
    industry = job.company.industry in preferences.industries
    company_size = enum_value(job.company.size) in {enum_value(s) for s in preferences.company_sizes}
    remote = remote_preference_satisfied(preferences.remote_preference, job)

    checks = (job_type, industry, company_size, remote)
    return PreferencesMatch(
        score=POINTS_PER_CHECK * sum(checks),
        job_type=job_type,
        industry=industry,
        company_size=company_size,
        remote_preference=remote,
    )
