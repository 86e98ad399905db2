"""
Application configuration.

Settings come from environment variables (optionally seeded from a .env
file by ``env.load_env``). Invalid values raise ValueError.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .batch import MIN_MATCH_SCORE, RECOMMENDED_SCORE
from .skill_graph import DEFAULT_SKILL_GRAPH, SkillGraph

DEFAULT_DB_PATH = Path("data/matches.db")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Container for application configuration."""

    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    min_score: int = MIN_MATCH_SCORE
    recommended_score: int = RECOMMENDED_SCORE
    workers: int = 1
    skill_graph_path: Optional[Path] = None
    db_path: Path = DEFAULT_DB_PATH

    def skill_graph(self) -> SkillGraph:
        """Default graph, extended with the configured JSON file if any."""
        if self.skill_graph_path is None:
            return DEFAULT_SKILL_GRAPH
        extra = SkillGraph.from_json(self.skill_graph_path)
        return DEFAULT_SKILL_GRAPH.extended(extra.as_dict())


def _int_setting(env: Mapping[str, str], name: str, default: int, low: int, high: Optional[int] = None) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < low or (high is not None and value > high):
        bound = f"between {low} and {high}" if high is not None else f">= {low}"
        raise ValueError(f"{name} must be {bound}, got {value}")
    return value


def _path_setting(env: Mapping[str, str], name: str) -> Optional[Path]:
    raw = env.get(name)
    return Path(raw) if raw and raw.strip() else None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env: Mapping to read from (default: os.environ)

    Returns:
        Settings dataclass populated with configuration values.
    """
    if env is None:
        env = os.environ

    log_level = env.get("CANDIDMATCH_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if log_level not in LOG_LEVELS:
        raise ValueError(f"CANDIDMATCH_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

    min_score = _int_setting(env, "CANDIDMATCH_MIN_SCORE", MIN_MATCH_SCORE, 0, 100)
    recommended_score = _int_setting(env, "CANDIDMATCH_RECOMMENDED_SCORE", RECOMMENDED_SCORE, 0, 100)
    if recommended_score < min_score:
        raise ValueError("CANDIDMATCH_RECOMMENDED_SCORE must be >= CANDIDMATCH_MIN_SCORE")

    return Settings(
        log_level=log_level,
        log_dir=_path_setting(env, "CANDIDMATCH_LOG_DIR"),
        min_score=min_score,
        recommended_score=recommended_score,
        workers=_int_setting(env, "CANDIDMATCH_WORKERS", 1, 1),
        skill_graph_path=_path_setting(env, "CANDIDMATCH_SKILL_GRAPH"),
        db_path=_path_setting(env, "CANDIDMATCH_DB") or DEFAULT_DB_PATH,
    )
