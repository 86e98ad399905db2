"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path
from typing import Dict, Any

import pytest

from candidmatch.logger import reset_logger
from candidmatch.schema import Company, HiringAuthority, JobSeeker

SAMPLE_DATASET = Path(__file__).parent.parent / "data" / "sample_dataset.json"


@pytest.fixture(autouse=True)
def fresh_logger(monkeypatch):
    """Give every test its own console-only logger."""
    monkeypatch.delenv("CANDIDMATCH_LOG_DIR", raising=False)
    monkeypatch.delenv("CANDIDMATCH_LOG_LEVEL", raising=False)
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def react_seeker() -> JobSeeker:
    """Job seeker with React and Node.js, five years of experience."""
    return JobSeeker(
        key="js_react",
        skills=("React", "Node.js"),
        skill_levels={"React": 9, "Node.js": 7},
        experience=5,
    )


@pytest.fixture
def executive_authority() -> HiringAuthority:
    """Executive looking for React and Leadership at a mid-size company."""
    return HiringAuthority(
        key="vp_eng",
        level="Executive",
        skills_looking_for=("React", "Leadership"),
        preferred_experience="3-8 years",
        hiring_power="High",
        decision_maker=True,
        company_id="companies/midsize",
    )


@pytest.fixture
def midsize_company() -> Company:
    return Company(key="midsize", employee_count=500)


@pytest.fixture
def sample_dataset_path() -> Path:
    return SAMPLE_DATASET


@pytest.fixture
def sample_dataset_dict() -> Dict[str, Any]:
    return json.loads(SAMPLE_DATASET.read_text(encoding="utf-8"))


@pytest.fixture
def small_dataset() -> Dict[str, Any]:
    """Two companies, three authorities (one orphaned), two job seekers."""
    return {
        "companies": [
            {"_key": "tiny", "employeeCount": 20},
            {"_key": "big", "employeeCount": 5000},
        ],
        "hiringAuthorities": [
            {
                "_key": "founder",
                "level": "C-Suite",
                "companyId": "companies/tiny",
                "hiringPower": "Ultimate",
                "decisionMaker": True,
                "skillsLookingFor": ["Python", "AWS"],
                "preferredExperience": "2-6 years",
            },
            {
                "_key": "eng_manager",
                "level": "Manager",
                "companyId": "companies/big",
                "hiringPower": "Medium",
                "decisionMaker": False,
                "skillsLookingFor": ["Python", "Docker", "Kubernetes"],
                "preferredExperience": "3-10 years",
            },
            {
                "_key": "orphan",
                "level": "Director",
                "companyId": "companies/missing",
                "hiringPower": "High",
                "decisionMaker": True,
                "skillsLookingFor": ["Python"],
                "preferredExperience": "1-5 years",
            },
        ],
        "jobSeekers": [
            {
                "_key": "dev",
                "experience": 4,
                "skills": ["Python", "AWS", "Docker"],
                "skillLevels": {"Python": 8, "AWS": 7, "Docker": 6},
            },
            {
                "_key": "designer",
                "experience": 1,
                "skills": ["Figma"],
                "skillLevels": {"Figma": 9},
            },
        ],
    }


@pytest.fixture
def small_dataset_path(tmp_path, small_dataset) -> Path:
    path = tmp_path / "dataset.json"
    path.write_text(json.dumps(small_dataset))
    return path
