"""
Match table and connection management.

Uses SQLite with SQLAlchemy to keep the most recent batch of generated
matches. Entity records are not stored here.
"""

from pathlib import Path
from typing import List, Optional, Sequence

from sqlalchemy import JSON, Column, Integer, String, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .batch import StoredMatch

Base = declarative_base()


class Match(Base):
    """Stored match row."""

    __tablename__ = "matches"

    key = Column(String, primary_key=True)  # match_<seeker>_<authority>
    job_seeker_id = Column(String, nullable=False)
    hiring_authority_id = Column(String, nullable=False)
    company_id = Column(String, nullable=False)
    score = Column(Integer, nullable=False, index=True)
    match_reasons = Column(JSON, nullable=False, default=list)
    hierarchy_match = Column(String, nullable=False)
    connection_strength = Column(String, nullable=False)  # Strong, Medium, Weak, Poor
    status = Column(String, nullable=False)  # recommended, potential
    created_at = Column(String, nullable=False)  # ISO 8601 with UTC offset

    @classmethod
    def from_stored(cls, match: StoredMatch) -> "Match":
        return cls(
            key=match.key,
            job_seeker_id=match.job_seeker_id,
            hiring_authority_id=match.hiring_authority_id,
            company_id=match.company_id,
            score=match.score,
            match_reasons=list(match.result.match_reasons),
            hierarchy_match=match.result.hierarchy_match,
            connection_strength=match.result.connection_strength,
            status=match.status,
            created_at=match.created_at,
        )

    def to_dict(self) -> dict:
        return {
            "_key": self.key,
            "jobSeekerId": self.job_seeker_id,
            "hiringAuthorityId": self.hiring_authority_id,
            "companyId": self.company_id,
            "score": self.score,
            "matchReasons": list(self.match_reasons or []),
            "hierarchyMatch": self.hierarchy_match,
            "connectionStrength": self.connection_strength,
            "status": self.status,
            "createdAt": self.created_at,
        }


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def replace_matches(db_path: Path, matches: Sequence[StoredMatch]) -> int:
    """
    Clear stored matches and save a new batch in one transaction.

    Returns:
        Number of matches written
    """
    init_database(db_path)
    session = get_session(db_path)
    try:
        session.query(Match).delete()
        session.add_all(Match.from_stored(m) for m in matches)
        session.commit()
        return len(matches)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def load_matches(db_path: Path, limit: Optional[int] = None) -> List[Match]:
    """Stored matches, highest score first."""
    if not db_path.exists():
        return []
    session = get_session(db_path)
    try:
        query = session.query(Match).order_by(Match.score.desc(), Match.key)
        if limit is not None:
            query = query.limit(limit)
        return query.all()
    finally:
        session.close()
