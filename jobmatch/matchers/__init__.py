from .experience import match_experience
from .location import match_location
from .preferences import match_preferences
from .salary import match_salary
from .skills import match_skills

__all__ = [
    "match_skills", "match_experience", "match_location",
    "match_salary", "match_preferences",
]
