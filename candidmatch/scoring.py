"""
Match scoring between a job seeker and a hiring authority.

Responsibilities:
- Score four independent factors (hierarchy fit, skill alignment,
  experience fit, decision power), each 0-100 with reasons.
- Combine them into one weighted score with an explanation.

Non-Responsibilities:
- No storage access.
- No pair enumeration or threshold decisions.
- No logging.

Invariant:
Given identical inputs (and the same skill graph), this module must always
return the same score and explanation.
"""

import math
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .normalize import normalize_skills
from .schema import Company, HiringAuthority, JobSeeker
from .skill_graph import DEFAULT_SKILL_GRAPH, SkillGraph

STARTUP_MAX_EMPLOYEES = 100
MIDSIZE_MAX_EMPLOYEES = 1000

EXACT_SKILL_WEIGHT = 15
SEMANTIC_SKILL_WEIGHT = 8

# Percent weights: hierarchy, skills, experience, decision power.
FACTOR_WEIGHTS = (30, 40, 20, 10)
MAX_REASONS = 4

EXPERIENCE_RANGE = re.compile(r"(\d+)-(\d+)")

HIRING_POWER_SCORES = {
    "Ultimate": (100, "Ultimate hiring authority - can make immediate decisions"),
    "High": (85, "High hiring authority - minimal approval needed"),
    "Medium": (70, "Medium hiring authority - may need additional approvals"),
}
DEFAULT_HIRING_POWER = (50, "Limited hiring authority")
DECISION_MAKER_BONUS = 10

STRENGTH_THRESHOLDS = ((85, "Strong"), (70, "Medium"), (55, "Weak"))
WEAKEST_STRENGTH = "Poor"


@dataclass(frozen=True)
class FactorScore:
    name: str
    score: float
    reasons: Tuple[str, ...]
    hierarchy_match: Optional[str] = None


@dataclass(frozen=True)
class MatchResult:
    score: int
    match_reasons: Tuple[str, ...]
    hierarchy_match: str
    connection_strength: str
    factors: Tuple[FactorScore, ...] = ()

    def factor(self, name: str) -> Optional[FactorScore]:
        for f in self.factors:
            if f.name == name:
                return f
        return None

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "matchReasons": list(self.match_reasons),
            "hierarchyMatch": self.hierarchy_match,
            "connectionStrength": self.connection_strength,
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_hierarchy(company: Company, authority: HiringAuthority) -> FactorScore:
    """Fit of the authority's tier to the size of the company it hires for."""
    size = company.employee_count
    level = authority.level

    if size < STARTUP_MAX_EMPLOYEES:
        if level == "C-Suite":
            row = (95, "Perfect startup match - direct access to decision maker",
                   "Perfect - C-Suite authority for startup environment")
        else:
            row = (60, "Startup prefers C-Suite hiring decisions",
                   "Suboptimal - Startup should route to C-Suite")
    elif size <= MIDSIZE_MAX_EMPLOYEES:
        if level in ("Executive", "Director"):
            row = (90, "Ideal mid-size company authority level",
                   "Perfect - Executive/Director level for mid-size company")
        elif level == "C-Suite":
            row = (75, "C-Suite accessible but may delegate to directors",
                   "Good - C-Suite may delegate to department heads")
        else:
            row = (65, "Manager level appropriate for specific roles",
                   "Acceptable - Manager level for specialized positions")
    else:
        if level in ("Director", "Manager"):
            row = (85, "Appropriate enterprise hierarchy level",
                   "Perfect - Director/Manager level for enterprise")
        elif level == "Executive":
            row = (70, "Executive level may be too high for initial contact",
                   "Good - Executive may route to appropriate director")
        else:
            row = (50, "C-Suite rarely involved in individual hiring",
                   "Poor - C-Suite too high for enterprise individual hiring")

    score, reason, descriptor = row
    return FactorScore("hierarchy", score, (reason,), hierarchy_match=descriptor)


def score_skills(
    job_seeker: JobSeeker,
    authority: HiringAuthority,
    graph: SkillGraph = DEFAULT_SKILL_GRAPH,
) -> FactorScore:
    """
    Skill alignment with exact and related-skill matches.

    Each wanted skill is matched at most once: an exact match is preferred,
    otherwise the first related job seeker skill is taken.
    """
    seeker_skills = normalize_skills(job_seeker.skills)
    wanted = normalize_skills(authority.skills_looking_for)

    exact: List[str] = []
    semantic: List[str] = []
    accumulated = 0.0

    for target in wanted:
        if not target.normalized:
            continue
        hit = next((s for s in seeker_skills if s.normalized == target.normalized), None)
        if hit is not None:
            exact.append(hit.original)
            accumulated += job_seeker.level_for(hit.original) * EXACT_SKILL_WEIGHT
            continue
        hit = next(
            (s for s in seeker_skills if graph.is_related(s.normalized, target.normalized)),
            None,
        )
        if hit is not None:
            semantic.append(hit.original)
            accumulated += job_seeker.level_for(hit.original) * SEMANTIC_SKILL_WEIGHT

    total = len(exact) + len(semantic)
    score = accumulated
    # An empty wanted list leaves the accumulator unscaled.
    if wanted:
        score = min(accumulated / max(total, 1), 100) * total / len(wanted)

    reasons: List[str] = []
    if exact:
        reasons.append(f"{len(exact)}/{len(wanted)} required skills match")
    if semantic:
        reasons.append(f"{len(semantic)} related skills ({', '.join(semantic)})")
    if total >= 3:
        reasons.append("Strong technical skill alignment")
    elif total == 0:
        reasons.append("Limited skill overlap - may need training")

    return FactorScore("skills", score, tuple(reasons))


def parse_experience_range(text: str) -> Optional[Tuple[int, int]]:
    if not isinstance(text, str):
        return None
    m = EXPERIENCE_RANGE.search(text)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def score_experience(job_seeker: JobSeeker, authority: HiringAuthority) -> FactorScore:
    bounds = parse_experience_range(authority.preferred_experience)
    if bounds is None:
        return FactorScore("experience", 50, ("Experience requirements unclear",))

    low, high = bounds
    years = job_seeker.experience

    if low <= years <= high:
        return FactorScore(
            "experience", 90, (f"Experience ({years} years) perfectly matches requirements",)
        )
    if years < low:
        gap = low - years
        return FactorScore(
            "experience",
            max(40, 90 - gap * 15),
            (f"{gap} years below preferred minimum experience",),
        )
    excess = years - high
    return FactorScore(
        "experience",
        max(60, 90 - excess * 10),
        (f"{excess} years above preferred maximum - may be overqualified",),
    )


def score_decision_power(authority: HiringAuthority) -> FactorScore:
    score, reason = HIRING_POWER_SCORES.get(authority.hiring_power, DEFAULT_HIRING_POWER)
    reasons = [reason]
    if authority.decision_maker:
        score = min(100, score + DECISION_MAKER_BONUS)
        reasons.append("Direct decision maker")
    return FactorScore("decision_power", score, tuple(reasons))


def connection_strength(score: float) -> str:
    for threshold, label in STRENGTH_THRESHOLDS:
        if score >= threshold:
            return label
    return WEAKEST_STRENGTH


def score_match(
    job_seeker: JobSeeker,
    authority: HiringAuthority,
    company: Company,
    graph: SkillGraph = DEFAULT_SKILL_GRAPH,
) -> MatchResult:
    """
    Weighted compatibility of a job seeker with a hiring authority.

    Args:
        job_seeker: Candidate record
        authority: Hiring authority record
        company: Company the authority hires for
        graph: Skill relationship graph used for related-skill matches

    Returns:
        MatchResult with the rounded score, up to four reasons (hierarchy,
        skills, experience, decision power order), the hierarchy descriptor
        and the connection strength.
    """
    factors = (
        score_hierarchy(company, authority),
        score_skills(job_seeker, authority, graph),
        score_experience(job_seeker, authority),
        score_decision_power(authority),
    )

    weighted = sum(f.score * w for f, w in zip(factors, FACTOR_WEIGHTS)) / 100
    score = min(100, max(0, round_half_up(weighted)))

    reasons: List[str] = []
    for f in factors:
        reasons.extend(f.reasons)

    return MatchResult(
        score=score,
        match_reasons=tuple(reasons[:MAX_REASONS]),
        hierarchy_match=factors[0].hierarchy_match or "",
        connection_strength=connection_strength(score),
        factors=factors,
    )
