"""
Skill relationship graph.

A static, hand-curated lookup of skill -> related skills used to detect
non-exact but meaningful overlaps between what a job seeker has and what a
hiring authority is looking for. Graphs are immutable; extending one returns
a new graph.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping

from .normalize import normalize_skill

DEFAULT_SKILL_RELATIONSHIPS: Dict[str, tuple] = {
    "react": ("frontend", "javascript", "jsx", "ui", "webdevelopment"),
    "vue": ("frontend", "javascript", "ui", "webdevelopment"),
    "angular": ("frontend", "typescript", "ui", "webdevelopment"),
    "typescript": ("javascript", "frontend", "nodejs", "webdevelopment"),
    "javascript": ("frontend", "nodejs", "webdevelopment", "typescript"),
    "nodejs": ("javascript", "backend", "fullstack", "api", "typescript"),
    "fullstack": ("frontend", "backend", "webdevelopment"),
    "python": ("backend", "datascience", "machinelearning", "scripting", "api"),
    "django": ("python", "backend", "webdevelopment"),
    "machinelearning": ("ai", "datascience", "tensorflow", "pytorch", "python"),
    "tensorflow": ("machinelearning", "ai", "deeplearning"),
    "pytorch": ("machinelearning", "ai", "deeplearning"),
    "datascience": ("analytics", "statistics", "machinelearning"),
    "analytics": ("datascience", "sql", "statistics"),
    "aws": ("cloud", "cloudplatforms", "devops", "infrastructure"),
    "gcp": ("cloud", "cloudplatforms", "devops"),
    "azure": ("cloud", "cloudplatforms", "devops"),
    "kubernetes": ("docker", "devops", "containers", "cloud"),
    "docker": ("containers", "devops", "kubernetes"),
    "terraform": ("infrastructure", "devops", "aws", "cloud"),
    "blockchain": ("solidity", "web3", "crypto", "fintech"),
    "solidity": ("blockchain", "ethereum", "web3"),
    "figma": ("design", "uxui", "ui", "prototyping"),
    "userresearch": ("uxui", "design", "productmanagement"),
    "uxui": ("design", "ui", "userresearch", "figma"),
    "productmanagement": ("agile", "strategy", "roadmapping", "projectmanagement"),
    "projectmanagement": ("agile", "operations", "productmanagement"),
    "agile": ("scrum", "projectmanagement", "productmanagement"),
    "leadership": ("management", "teamleadership", "mentoring", "strategy"),
    "operations": ("sixsigma", "manufacturing", "projectmanagement"),
    "sixsigma": ("operations", "manufacturing", "qualityassurance"),
    "cpp": ("c", "embeddedsystems", "systems"),
    "c": ("cpp", "embeddedsystems", "embedded"),
    "embedded": ("embeddedsystems", "c", "robotics", "hardware"),
    "robotics": ("embedded", "embeddedsystems", "hardware", "automation"),
}


class SkillGraph:
    """Read-only mapping of normalized skill -> frozenset of related skills."""

    def __init__(self, relationships: Mapping[str, Iterable[str]]):
        table: Dict[str, set] = {}
        for skill, related in relationships.items():
            key = normalize_skill(skill)
            if not key:
                continue
            bucket = table.setdefault(key, set())
            for other in related or ():
                norm = normalize_skill(other)
                if norm and norm != key:
                    bucket.add(norm)
        self._relations: Mapping[str, FrozenSet[str]] = MappingProxyType(
            {k: frozenset(v) for k, v in table.items()}
        )

    @classmethod
    def from_mapping(cls, relationships: Mapping[str, Iterable[str]]) -> "SkillGraph":
        return cls(relationships)

    @classmethod
    def from_json(cls, path: Path) -> "SkillGraph":
        """
        Load a graph from a JSON object of ``{"skill": ["related", ...]}``.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a JSON object of lists
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Skill graph file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in skill graph file: {path}") from exc
        if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
            raise ValueError(f"Skill graph must map skill names to lists: {path}")
        return cls(data)

    def extended(self, relationships: Mapping[str, Iterable[str]]) -> "SkillGraph":
        """Return a new graph with extra relations merged in."""
        merged: Dict[str, set] = {k: set(v) for k, v in self._relations.items()}
        for skill, related in relationships.items():
            merged.setdefault(normalize_skill(skill), set()).update(related or ())
        return SkillGraph(merged)

    def relations_of(self, skill: str) -> FrozenSet[str]:
        return self._relations.get(normalize_skill(skill), frozenset())

    def is_related(self, a: str, b: str) -> bool:
        """True if either skill lists the other as related. Identical skills are not related."""
        a, b = normalize_skill(a), normalize_skill(b)
        if not a or not b or a == b:
            return False
        return b in self._relations.get(a, ()) or a in self._relations.get(b, ())

    def as_dict(self) -> Dict[str, list]:
        return {k: sorted(v) for k, v in self._relations.items()}

    def __contains__(self, skill: str) -> bool:
        return normalize_skill(skill) in self._relations

    def __len__(self) -> int:
        return len(self._relations)


DEFAULT_SKILL_GRAPH = SkillGraph(DEFAULT_SKILL_RELATIONSHIPS)
