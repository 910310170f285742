"""
jobmatch - explainable candidate-to-job matching.

Scores a candidate profile against a job posting on five components
(skills, experience, location, salary, preferences), combines them into a
0-100 overall score with a confidence label, explains the result in plain
sentences and tags, and ranks batches of matches into a feed.
"""

from jobmatch.config import DEFAULT_CONFIG, ConfigError, EngineConfig, Weights, load_engine_config
from jobmatch.feed import FeedFilters, build_feed, filter_by_min_score, filter_jobs, rank_feed
from jobmatch.geo import DistanceFn, GeocodingDistance, no_distance
from jobmatch.scorer import MatchEngine, determine_confidence, overall_score, score_job, score_jobs
from jobmatch.similarity import similarity

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_CONFIG", "ConfigError", "EngineConfig", "Weights", "load_engine_config",
    "FeedFilters", "build_feed", "filter_by_min_score", "filter_jobs", "rank_feed",
    "DistanceFn", "GeocodingDistance", "no_distance",
    "MatchEngine", "determine_confidence", "overall_score", "score_job", "score_jobs",
    "similarity",
]
