"""
Tests for score aggregation, confidence and the engine entry points.
"""

import math
from dataclasses import replace
from datetime import timedelta

import pytest

from jobmatch.config import DEFAULT_CONFIG, EngineConfig, Weights
from jobmatch.models import (
    Confidence,
    ExperienceLevel,
    JobPreferences,
    RemotePreference,
    SalaryPeriod,
    SalaryRange,
    UserSkill,
)
from jobmatch.scorer import MatchEngine, determine_confidence, overall_score, score_job, score_jobs


def _with_scores(components, **scores):
    """Copy of *components* with the named component scores replaced."""
    return replace(components, **{
        name: replace(getattr(components, name), score=value) for name, value in scores.items()
    })


class TestWeights:

    def test_default_weights_sum_to_one(self):
        assert math.fsum(DEFAULT_CONFIG.weights.as_dict().values()) == 1.0

    def test_default_weight_values(self):
        assert DEFAULT_CONFIG.weights.as_dict() == {
            "skills": 0.40, "experience": 0.25, "location": 0.15, "salary": 0.10, "preferences": 0.10,
        }


class TestOverallScore:

    def test_weighted_sum(self, make_job, make_profile, now):
        components = score_job(make_profile(), make_job(is_remote=True), now=now).components
        components = _with_scores(components, skills=100, experience=87, location=100, salary=50, preferences=100)
        assert overall_score(components) == 92

    def test_substitute_weights(self, make_job, make_profile, now):
        components = score_job(make_profile(), make_job(), now=now).components
        components = _with_scores(components, skills=33, experience=90, location=90, salary=90, preferences=90)
        skills_only = Weights(skills=1.0, experience=0.0, location=0.0, salary=0.0, preferences=0.0)
        assert overall_score(components, skills_only) == 33

    def test_half_rounds_up(self, make_job, make_profile, now):
        components = score_job(make_profile(), make_job(), now=now).components
        # 0.4 * 0 + 0.25 * 2 + 0 ... = 0.5
        components = _with_scores(components, skills=0, experience=2, location=0, salary=0, preferences=0)
        assert overall_score(components) == 1


class TestConfidence:
    """High is checked before medium; low is the fallback."""

    @pytest.fixture
    def components(self, make_job, make_profile, now):
        return score_job(make_profile(), make_job(), now=now).components

    def test_high(self, components, make_profile):
        assert determine_confidence(_with_scores(components, skills=80, experience=70), make_profile()) is Confidence.HIGH

    def test_high_needs_complete_profile(self, components, make_profile):
        thin = make_profile(skills=[UserSkill(name="React", level=4)])
        assert determine_confidence(_with_scores(components, skills=95, experience=95), thin) is Confidence.MEDIUM

    def test_high_needs_experience_entry(self, components, make_profile):
        no_history = make_profile(experience=[])
        assert determine_confidence(_with_scores(components, skills=95, experience=95), no_history) is Confidence.MEDIUM

    def test_medium(self, components, make_profile):
        assert determine_confidence(_with_scores(components, skills=60, experience=50), make_profile()) is Confidence.MEDIUM

    def test_low(self, components, make_profile):
        assert determine_confidence(_with_scores(components, skills=59, experience=100), make_profile()) is Confidence.LOW
        assert determine_confidence(_with_scores(components, skills=100, experience=49), make_profile()) is Confidence.LOW


class TestScoreJob:
    """End-to-end scoring of a single pair."""

    def test_full_match(self, make_job, make_profile, now):
        match = score_job(make_profile(), make_job(is_remote=True), now=now)

        assert match.components.scores() == {
            "skills": 100, "experience": 87, "location": 100, "salary": 50, "preferences": 100,
        }
        assert match.overall_score == 92
        assert match.confidence is Confidence.HIGH
        assert match.reasoning == (
            "Strong skills match (3/3 required skills). Perfect experience level fit. "
            "Remote-friendly position."
        )
        assert match.recommendation_tags == ["Perfect Skills Match", "Remote Friendly", "Recently Posted"]

    def test_idempotent(self, make_job, make_profile, now):
        profile, job = make_profile(), make_job()
        first = score_job(profile, job, now=now)
        second = score_job(profile, job, now=now)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_scores_bounded_across_variants(self, make_job, make_profile, now, years_ago):
        jobs = [
            make_job(),
            make_job(required_skills=[]),
            make_job(experience_level=ExperienceLevel.EXECUTIVE, location=""),
            make_job(is_remote=True, salary_range=SalaryRange(min=1, max=2, period=SalaryPeriod.HOURLY)),
            make_job(required_skills=[f"Skill{i}" for i in range(12)], experience_level=ExperienceLevel.LEAD),
        ]
        profiles = [
            make_profile(),
            make_profile(skills=[], experience=[], location=None),
            make_profile(
                skills=[UserSkill(name="Skill1", level=1)],
                preferences=JobPreferences(remote_preference=RemotePreference.REMOTE),
                salary_expectation=SalaryRange(min=500_000, max=900_000),
            ),
        ]
        for profile in profiles:
            for job in jobs:
                match = score_job(profile, job, now=now)
                for value in list(match.components.scores().values()) + [match.overall_score]:
                    assert isinstance(value, int)
                    assert 0 <= value <= 100

    def test_custom_config(self, make_job, make_profile, now):
        strict = replace(DEFAULT_CONFIG, recent_days=1)
        match = score_job(make_profile(), make_job(), config=strict, now=now)
        assert "Recently Posted" not in match.recommendation_tags

    def test_to_dict_is_plain(self, make_job, make_profile, now):
        data = score_job(make_profile(), make_job(), now=now).to_dict()
        assert data["confidence"] in {"high", "medium", "low"}
        assert data["components"]["experience"]["level_match"] == "exact"
        assert data["job"]["posted_date"] == (now - timedelta(days=2)).isoformat()


class TestBatchScoring:

    def test_order_preserved(self, make_job, make_profile, now):
        jobs = [make_job(id=f"job-{i}") for i in range(10)]
        matches = score_jobs(make_profile(), jobs, now=now, max_workers=4)
        assert [m.job.id for m in matches] == [j.id for j in jobs]

    def test_matches_single_scoring(self, make_job, make_profile, now):
        jobs = [make_job(id="a"), make_job(id="b", is_remote=True)]
        profile = make_profile()
        assert score_jobs(profile, jobs, now=now) == [score_job(profile, j, now=now) for j in jobs]

    def test_empty_batch(self, make_profile):
        assert score_jobs(make_profile(), []) == []


class TestMatchEngine:

    def test_uses_injected_clock_and_distance(self, make_job, make_profile, now):
        onsite = make_profile(
            location="Oakland, CA",
            preferences=JobPreferences(remote_preference=RemotePreference.ONSITE),
        )
        engine = MatchEngine(distance_km=lambda a, b: 12.0, clock=lambda: now)
        match = engine.match(onsite, make_job())
        assert match.components.location.score == 80
        assert match == score_job(onsite, make_job(), distance_km=lambda a, b: 12.0, now=now)

    def test_match_all_and_feed(self, make_job, make_profile, now):
        engine = MatchEngine(config=EngineConfig(), clock=lambda: now)
        jobs = [make_job(id="low", required_skills=["Cobol"]), make_job(id="high")]
        assert len(engine.match_all(make_profile(), jobs)) == 2
        assert [m.job.id for m in engine.feed(make_profile(), jobs)] == ["high", "low"]
