"""
Tests for entity records and validation.
"""

from candidmatch.schema import (
    Company,
    HiringAuthority,
    JobSeeker,
    validate_authority,
    validate_company,
    validate_dataset,
    validate_job_seeker,
)


class TestJobSeekerRecord:
    """Test defensive construction of job seekers."""

    def test_from_dict(self):
        seeker = JobSeeker.from_dict({
            "_key": "js_1",
            "skills": ["React", "Node.js"],
            "skillLevels": {"React": 9},
            "experience": 5,
        })
        assert seeker.key == "js_1"
        assert seeker.skills == ("React", "Node.js")
        assert seeker.experience == 5
        assert seeker.level_for("React") == 9

    def test_missing_fields_default(self):
        seeker = JobSeeker.from_dict({})
        assert seeker.key == ""
        assert seeker.skills == ()
        assert seeker.experience == 0
        assert seeker.level_for("Python") == 5

    def test_level_lookup_by_normalized_name(self):
        seeker = JobSeeker.from_dict({"skills": ["Node.js"], "skillLevels": {"nodejs": 8}})
        assert seeker.level_for("Node.js") == 8

    def test_levels_clamped_and_bad_values_dropped(self):
        seeker = JobSeeker.from_dict({
            "skillLevels": {"a": 25, "b": -3, "c": "high", "d": True},
        })
        assert seeker.level_for("a") == 10
        assert seeker.level_for("b") == 1
        assert seeker.level_for("c") == 5
        assert seeker.level_for("d") == 5

    def test_bad_experience_defaults(self):
        assert JobSeeker.from_dict({"experience": "7"}).experience == 7
        assert JobSeeker.from_dict({"experience": "lots"}).experience == 0
        assert JobSeeker.from_dict({"experience": -2}).experience == 0

    def test_non_string_skills_dropped(self):
        seeker = JobSeeker.from_dict({"skills": ["React", None, 3, "Go"]})
        assert seeker.skills == ("React", "Go")


class TestAuthorityRecord:
    """Test defensive construction of hiring authorities."""

    def test_from_dict(self):
        authority = HiringAuthority.from_dict({
            "_key": "cto",
            "level": "c-suite",
            "companyId": "companies/acme",
            "hiringPower": "Ultimate",
            "decisionMaker": True,
            "skillsLookingFor": ["React"],
            "preferredExperience": "4-10 years",
        })
        assert authority.level == "C-Suite"
        assert authority.company_id == "companies/acme"
        assert authority.decision_maker is True
        assert authority.skills_looking_for == ("React",)

    def test_truthy_decision_maker_is_not_true(self):
        authority = HiringAuthority.from_dict({"decisionMaker": "yes"})
        assert authority.decision_maker is False

    def test_missing_fields_default(self):
        authority = HiringAuthority.from_dict({})
        assert authority.preferred_experience == ""
        assert authority.hiring_power == ""
        assert authority.skills_looking_for == ()


class TestCompanyRecord:
    def test_ref(self):
        company = Company.from_dict({"_key": "acme", "employeeCount": 250, "name": "Acme"})
        assert company.ref == "companies/acme"
        assert company.employee_count == 250
        assert company.name == "Acme"

    def test_missing_count_defaults_to_zero(self):
        assert Company.from_dict({"_key": "x"}).employee_count == 0


class TestValidation:
    """Test record validation messages."""

    def test_valid_job_seeker(self):
        errors = validate_job_seeker({
            "_key": "js", "skills": ["React"], "skillLevels": {"React": 7}, "experience": 3,
        })
        assert errors == []

    def test_job_seeker_problems(self):
        errors = validate_job_seeker({"skills": "React", "skillLevels": {"React": 12}})
        assert any("_key" in e for e in errors)
        assert any("skills" in e for e in errors)
        assert any("between 1 and 10" in e for e in errors)
        assert any("experience" in e for e in errors)

    def test_authority_problems(self):
        errors = validate_authority({
            "_key": "a", "level": "Intern", "companyId": "acme", "decisionMaker": "yes",
        })
        assert any("level" in e for e in errors)
        assert any("companyId" in e for e in errors)
        assert any("decisionMaker" in e for e in errors)

    def test_valid_authority(self):
        errors = validate_authority({
            "_key": "a", "level": "Director", "companyId": "companies/acme",
            "skillsLookingFor": ["Python"], "decisionMaker": False,
        })
        assert errors == []

    def test_company_problems(self):
        assert validate_company({"_key": "c", "employeeCount": 10}) == []
        assert any("employeeCount" in e for e in validate_company({"_key": "c"}))
        assert any("employeeCount" in e for e in validate_company({"_key": "c", "employeeCount": -1}))

    def test_sample_dataset_is_valid(self, sample_dataset_dict):
        assert validate_dataset(sample_dataset_dict) == []

    def test_dataset_unknown_company(self, small_dataset):
        errors = validate_dataset(small_dataset)
        assert errors == ["hiringAuthorities[orphan]: unknown company companies/missing"]

    def test_dataset_duplicate_keys(self, small_dataset):
        small_dataset["jobSeekers"].append(dict(small_dataset["jobSeekers"][0]))
        errors = validate_dataset(small_dataset)
        assert "jobSeekers[dev]: duplicate _key" in errors

    def test_dataset_keyless_records_reported(self):
        errors = validate_dataset({
            "companies": [],
            "hiringAuthorities": [],
            "jobSeekers": [{"skills": [], "experience": 1}, {"skills": [], "experience": 2}],
        })
        assert any(e.startswith("jobSeekers[0]:") and "_key" in e for e in errors)
        assert any(e.startswith("jobSeekers[1]:") and "_key" in e for e in errors)

    def test_dataset_missing_sections(self):
        errors = validate_dataset({"companies": []})
        assert "Missing required section: hiringAuthorities" in errors
        assert "Missing required section: jobSeekers" in errors

    def test_dataset_bad_records(self):
        errors = validate_dataset({
            "companies": "nope",
            "hiringAuthorities": [],
            "jobSeekers": ["not a record"],
        })
        assert "Section 'companies' must be a list" in errors
        assert "jobSeekers[0]: record must be an object" in errors
