"""
Typed entity records and record validation.

Records are built from the camelCase documents the graph store keeps
(``skillLevels``, ``skillsLookingFor``, ``companyId`` ...). Construction never
raises: missing or malformed fields fall back to documented defaults.
Validation is separate and returns a list of problems for reporting.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .normalize import normalize_level, normalize_skill

DEFAULT_SKILL_LEVEL = 5
MIN_SKILL_LEVEL = 1
MAX_SKILL_LEVEL = 10

AUTHORITY_LEVELS = ("C-Suite", "Executive", "Director", "Manager")


def _as_int(v: Any, default: int = 0) -> int:
    if isinstance(v, bool):
        return default
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v)
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return default
    return default


def _as_str(v: Any) -> str:
    return v if isinstance(v, str) else ""


def _as_str_tuple(v: Any) -> Tuple[str, ...]:
    if not isinstance(v, (list, tuple)):
        return ()
    return tuple(s for s in v if isinstance(s, str))


def _key_of(data: Dict[str, Any]) -> str:
    return _as_str(data.get("_key")) or _as_str(data.get("key"))


@dataclass(frozen=True)
class JobSeeker:
    key: str = ""
    skills: Tuple[str, ...] = ()
    skill_levels: Mapping[str, int] = field(default_factory=dict)
    experience: int = 0

    def level_for(self, skill: str) -> int:
        """Proficiency for a skill name; normalized-name lookup, then the default of 5."""
        if skill in self.skill_levels:
            return self.skill_levels[skill]
        norm = normalize_skill(skill)
        for name, level in self.skill_levels.items():
            if normalize_skill(name) == norm:
                return level
        return DEFAULT_SKILL_LEVEL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobSeeker":
        raw_levels = data.get("skillLevels") or {}
        levels: Dict[str, int] = {}
        if isinstance(raw_levels, dict):
            for name, level in raw_levels.items():
                if isinstance(level, bool) or not isinstance(level, (int, float)):
                    continue
                levels[str(name)] = min(MAX_SKILL_LEVEL, max(MIN_SKILL_LEVEL, int(level)))
        return cls(
            key=_key_of(data),
            skills=_as_str_tuple(data.get("skills")),
            skill_levels=MappingProxyType(levels),
            experience=max(0, _as_int(data.get("experience"))),
        )


@dataclass(frozen=True)
class HiringAuthority:
    key: str = ""
    level: str = ""
    skills_looking_for: Tuple[str, ...] = ()
    preferred_experience: str = ""
    hiring_power: str = ""
    decision_maker: bool = False
    company_id: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HiringAuthority":
        return cls(
            key=_key_of(data),
            level=normalize_level(_as_str(data.get("level"))),
            skills_looking_for=_as_str_tuple(data.get("skillsLookingFor")),
            preferred_experience=_as_str(data.get("preferredExperience")),
            hiring_power=_as_str(data.get("hiringPower")).strip(),
            decision_maker=data.get("decisionMaker") is True,
            company_id=_as_str(data.get("companyId")),
        )


@dataclass(frozen=True)
class Company:
    key: str = ""
    employee_count: int = 0
    name: Optional[str] = None

    @property
    def ref(self) -> str:
        return f"companies/{self.key}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Company":
        return cls(
            key=_key_of(data),
            employee_count=max(0, _as_int(data.get("employeeCount"))),
            name=data.get("name") if isinstance(data.get("name"), str) else None,
        )


def _check_key(data: Dict[str, Any], errors: List[str]) -> None:
    if not _key_of(data).strip():
        errors.append("Missing required field: _key")


def validate_job_seeker(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []
    _check_key(data, errors)

    skills = data.get("skills")
    if skills is not None and not (
        isinstance(skills, list) and all(isinstance(s, str) for s in skills)
    ):
        errors.append("Field 'skills' must be a list of strings")

    levels = data.get("skillLevels")
    if levels is not None:
        if not isinstance(levels, dict):
            errors.append("Field 'skillLevels' must be an object")
        else:
            for name, level in levels.items():
                if isinstance(level, bool) or not isinstance(level, int):
                    errors.append(f"Skill level for '{name}' must be an integer")
                elif not MIN_SKILL_LEVEL <= level <= MAX_SKILL_LEVEL:
                    errors.append(
                        f"Skill level for '{name}' must be between {MIN_SKILL_LEVEL} and {MAX_SKILL_LEVEL}"
                    )

    exp = data.get("experience")
    if exp is None:
        errors.append("Missing required field: experience")
    elif isinstance(exp, bool) or not isinstance(exp, int) or exp < 0:
        errors.append("Field 'experience' must be a non-negative integer")

    return errors


def validate_authority(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    _check_key(data, errors)

    level = data.get("level")
    if normalize_level(_as_str(level)) not in AUTHORITY_LEVELS:
        errors.append(f"Field 'level' must be one of {', '.join(AUTHORITY_LEVELS)}")

    skills = data.get("skillsLookingFor")
    if skills is not None and not (
        isinstance(skills, list) and all(isinstance(s, str) for s in skills)
    ):
        errors.append("Field 'skillsLookingFor' must be a list of strings")

    if not _as_str(data.get("companyId")).startswith("companies/"):
        errors.append("Field 'companyId' must reference a company (companies/<key>)")

    if "decisionMaker" in data and not isinstance(data["decisionMaker"], bool):
        errors.append("Field 'decisionMaker' must be a boolean if provided")

    return errors


def validate_company(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    _check_key(data, errors)
    count = data.get("employeeCount")
    if count is None:
        errors.append("Missing required field: employeeCount")
    elif isinstance(count, bool) or not isinstance(count, int) or count < 0:
        errors.append("Field 'employeeCount' must be a non-negative integer")
    return errors


def validate_dataset(data: Dict[str, Any]) -> List[str]:
    """Validate every record in a dataset; messages are prefixed with the record location."""
    errors: List[str] = []
    sections = (
        ("companies", validate_company),
        ("hiringAuthorities", validate_authority),
        ("jobSeekers", validate_job_seeker),
    )
    company_refs = set()
    for section, validator in sections:
        records = data.get(section)
        if records is None:
            errors.append(f"Missing required section: {section}")
            continue
        if not isinstance(records, list):
            errors.append(f"Section '{section}' must be a list")
            continue
        seen_keys = set()
        for i, record in enumerate(records):
            if not isinstance(record, dict):
                errors.append(f"{section}[{i}]: record must be an object")
                continue
            label = _key_of(record) or str(i)
            errors.extend(f"{section}[{label}]: {e}" for e in validator(record))
            if _key_of(record):
                if _key_of(record) in seen_keys:
                    errors.append(f"{section}[{label}]: duplicate _key")
                seen_keys.add(_key_of(record))
            if section == "companies" and _key_of(record):
                company_refs.add(f"companies/{_key_of(record)}")
            if section == "hiringAuthorities":
                ref = _as_str(record.get("companyId"))
                if ref.startswith("companies/") and ref not in company_refs:
                    errors.append(f"{section}[{label}]: unknown company {ref}")
    return errors
