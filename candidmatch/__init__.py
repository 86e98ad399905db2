"""Match scoring between job seekers and hiring authorities."""

__version__ = "0.1.0"

from .schema import Company, HiringAuthority, JobSeeker
from .skill_graph import DEFAULT_SKILL_GRAPH, SkillGraph
from .scoring import FactorScore, MatchResult, connection_strength, score_match
from .batch import StoredMatch, score_all_matches

__all__ = [
    "Company",
    "HiringAuthority",
    "JobSeeker",
    "SkillGraph",
    "DEFAULT_SKILL_GRAPH",
    "FactorScore",
    "MatchResult",
    "StoredMatch",
    "connection_strength",
    "score_match",
    "score_all_matches",
]
