import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from .batch import StoredMatch
from .schema import Company, HiringAuthority, JobSeeker


class DatasetError(ValueError):
    """Raised when a dataset file cannot be read as companies/authorities/seekers."""
    pass


@dataclass(frozen=True)
class Dataset:
    companies: Tuple[Company, ...]
    hiring_authorities: Tuple[HiringAuthority, ...]
    job_seekers: Tuple[JobSeeker, ...]

    def job_seeker(self, key: str) -> Optional[JobSeeker]:
        return next((s for s in self.job_seekers if s.key == key), None)

    def authority(self, key: str) -> Optional[HiringAuthority]:
        return next((a for a in self.hiring_authorities if a.key == key), None)

    def company_for(self, authority: HiringAuthority) -> Optional[Company]:
        return next((c for c in self.companies if c.ref == authority.company_id), None)


def read_dataset_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DatasetError(f"Invalid JSON in dataset file {path}: {e}") from e
    if not isinstance(data, dict):
        raise DatasetError(f"Dataset must be a JSON object: {path}")
    return data


def _records(data: Dict[str, Any], section: str) -> list:
    records = data.get(section, [])
    if not isinstance(records, list):
        raise DatasetError(f"Section '{section}' must be a list")
    return [r for r in records if isinstance(r, dict)]


def parse_dataset(data: Dict[str, Any]) -> Dataset:
    return Dataset(
        companies=tuple(Company.from_dict(r) for r in _records(data, "companies")),
        hiring_authorities=tuple(
            HiringAuthority.from_dict(r) for r in _records(data, "hiringAuthorities")
        ),
        job_seekers=tuple(JobSeeker.from_dict(r) for r in _records(data, "jobSeekers")),
    )


def load_dataset(path: Path) -> Dataset:
    return parse_dataset(read_dataset_file(path))


def save_matches_json(path: Path, matches: Sequence[StoredMatch]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump({"matches": [m.to_dict() for m in matches]}, f, indent=2, ensure_ascii=False)
