"""
Batch match generation.

Scores every (job seeker x hiring authority) pair whose company can be
resolved, keeps the pairs at or above the minimum score, and returns them
ranked by score.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from .logger import get_logger
from .schema import Company, HiringAuthority, JobSeeker
from .scoring import MatchResult, score_match
from .skill_graph import DEFAULT_SKILL_GRAPH, SkillGraph

MIN_MATCH_SCORE = 50
RECOMMENDED_SCORE = 80

STATUS_RECOMMENDED = "recommended"
STATUS_POTENTIAL = "potential"


@dataclass(frozen=True)
class StoredMatch:
    """A kept match plus the batch metadata stored alongside it."""

    key: str
    job_seeker_id: str
    hiring_authority_id: str
    company_id: str
    result: MatchResult
    status: str
    created_at: str

    @property
    def score(self) -> int:
        return self.result.score

    def to_dict(self) -> dict:
        return {
            "_key": self.key,
            "jobSeekerId": self.job_seeker_id,
            "hiringAuthorityId": self.hiring_authority_id,
            "companyId": self.company_id,
            **self.result.to_dict(),
            "status": self.status,
            "createdAt": self.created_at,
        }


def match_status(score: int, recommended_score: int = RECOMMENDED_SCORE) -> str:
    return STATUS_RECOMMENDED if score >= recommended_score else STATUS_POTENTIAL


def index_companies(companies: Sequence[Company]) -> Dict[str, Company]:
    """Map ``companies/<key>`` references to companies; the first company with a key wins."""
    index: Dict[str, Company] = {}
    for company in companies:
        index.setdefault(company.ref, company)
    return index


def score_all_matches(
    job_seekers: Sequence[JobSeeker],
    hiring_authorities: Sequence[HiringAuthority],
    companies: Sequence[Company],
    *,
    graph: SkillGraph = DEFAULT_SKILL_GRAPH,
    min_score: int = MIN_MATCH_SCORE,
    recommended_score: int = RECOMMENDED_SCORE,
    workers: int = 1,
    created_at: Optional[datetime] = None,
) -> List[StoredMatch]:
    """
    Generate ranked matches for every job seeker against every authority.

    Authorities whose company cannot be resolved are skipped. Ties on score
    keep enumeration order (job seeker order, then authority order).

    Args:
        job_seekers: Job seeker records
        hiring_authorities: Hiring authority records
        companies: Company records, resolved via ``authority.company_id``
        graph: Skill relationship graph passed through to scoring
        min_score: Pairs scoring below this are dropped
        recommended_score: Pairs at or above this get status ``recommended``
        workers: Thread count for scoring; 1 scores sequentially
        created_at: Timestamp stamped on every match (default: now, UTC)

    Returns:
        List of StoredMatch sorted by score descending
    """
    logger = get_logger()
    logger.record_batch()
    stamp = (created_at or datetime.now(timezone.utc)).isoformat()
    company_index = index_companies(companies)

    resolved: List[Tuple[HiringAuthority, Company]] = []
    for authority in hiring_authorities:
        company = company_index.get(authority.company_id)
        if company is None:
            logger.record_unresolved_authority()
            logger.debug(
                "Skipping authority with unresolved company",
                authority=authority.key,
                company_id=authority.company_id,
            )
            continue
        resolved.append((authority, company))

    pairs = [(seeker, authority, company) for seeker in job_seekers for authority, company in resolved]

    def _score(pair):
        seeker, authority, company = pair
        return score_match(seeker, authority, company, graph)

    if workers > 1 and len(pairs) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_score, pairs))
    else:
        results = [_score(p) for p in pairs]

    matches: List[StoredMatch] = []
    for (seeker, authority, company), result in zip(pairs, results):
        if result.score < min_score:
            logger.record_pair(kept=False)
            continue
        status = match_status(result.score, recommended_score)
        logger.record_pair(kept=True, status=status, strength=result.connection_strength)
        matches.append(
            StoredMatch(
                key=f"match_{seeker.key}_{authority.key}",
                job_seeker_id=f"jobSeekers/{seeker.key}",
                hiring_authority_id=f"hiringAuthorities/{authority.key}",
                company_id=company.ref,
                result=result,
                status=status,
                created_at=stamp,
            )
        )

    matches.sort(key=lambda m: m.score, reverse=True)

    logger.info(
        "Match generation complete",
        job_seekers=len(job_seekers),
        authorities=len(hiring_authorities),
        pairs=len(pairs),
        kept=len(matches),
    )
    return matches
