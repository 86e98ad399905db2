"""
Tests for batch match generation.
"""

from datetime import datetime, timezone

from candidmatch.batch import (
    STATUS_POTENTIAL,
    STATUS_RECOMMENDED,
    index_companies,
    match_status,
    score_all_matches,
)
from candidmatch.logger import get_logger
from candidmatch.schema import Company, HiringAuthority, JobSeeker
from candidmatch.storage import load_dataset, parse_dataset

FIXED_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _generate(dataset, **kwargs):
    kwargs.setdefault("created_at", FIXED_TIME)
    return score_all_matches(
        dataset.job_seekers, dataset.hiring_authorities, dataset.companies, **kwargs
    )


class TestScoreAllMatches:
    """Test pair enumeration, filtering and ranking."""

    def test_small_dataset(self, small_dataset):
        matches = _generate(parse_dataset(small_dataset))

        assert [m.key for m in matches] == [
            "match_dev_founder",
            "match_dev_eng_manager",
            "match_designer_founder",
        ]
        assert [m.score for m in matches] == [97, 85, 54]
        assert [m.status for m in matches] == [
            STATUS_RECOMMENDED, STATUS_RECOMMENDED, STATUS_POTENTIAL,
        ]

    def test_stored_match_shape(self, small_dataset):
        top = _generate(parse_dataset(small_dataset))[0]
        data = top.to_dict()

        assert data["_key"] == "match_dev_founder"
        assert data["jobSeekerId"] == "jobSeekers/dev"
        assert data["hiringAuthorityId"] == "hiringAuthorities/founder"
        assert data["companyId"] == "companies/tiny"
        assert data["connectionStrength"] == "Strong"
        assert data["status"] == "recommended"
        assert data["createdAt"] == "2024-05-01T12:00:00+00:00"
        assert len(data["matchReasons"]) <= 4

    def test_threshold_filter(self, sample_dataset_path):
        matches = _generate(load_dataset(sample_dataset_path))
        assert matches
        assert all(m.score >= 50 for m in matches)

    def test_sorted_descending(self, sample_dataset_path):
        scores = [m.score for m in _generate(load_dataset(sample_dataset_path))]
        assert scores == sorted(scores, reverse=True)

    def test_known_sample_pair(self, sample_dataset_path):
        matches = _generate(load_dataset(sample_dataset_path))
        by_key = {m.key: m for m in matches}
        devops = by_key["match_js_david_park_vp_eng_cloudtech"]
        assert devops.score == 87
        assert devops.status == STATUS_RECOMMENDED
        assert devops.result.connection_strength == "Strong"

    def test_unresolved_company_skipped(self, small_dataset):
        matches = _generate(parse_dataset(small_dataset), min_score=0)

        assert all("orphan" not in m.key for m in matches)
        # 2 job seekers x 2 resolvable authorities
        assert len(matches) == 4
        assert get_logger().metrics["authorities_unresolved"] == 1

    def test_metrics(self, small_dataset):
        _generate(parse_dataset(small_dataset))
        metrics = get_logger().get_metrics()
        assert metrics["pairs_evaluated"] == 4
        assert metrics["pairs_kept"] == 3
        assert metrics["pairs_below_threshold"] == 1
        assert metrics["status_counts"] == {"recommended": 2, "potential": 1}
        assert metrics["keep_rate"] == 0.75

    def test_custom_thresholds(self, small_dataset):
        matches = _generate(parse_dataset(small_dataset), min_score=90, recommended_score=99)
        assert [m.key for m in matches] == ["match_dev_founder"]
        assert matches[0].status == STATUS_POTENTIAL

    def test_ties_keep_enumeration_order(self):
        company = Company(key="acme", employee_count=300)
        authority = HiringAuthority(
            key="dir", level="Director", company_id="companies/acme",
            skills_looking_for=("Python",), preferred_experience="1-5", hiring_power="High",
        )
        seekers = [JobSeeker(key=k, skills=("Python",), experience=3) for k in ("b", "a", "c")]
        matches = score_all_matches(seekers, [authority], [company], created_at=FIXED_TIME)
        assert [m.job_seeker_id for m in matches] == ["jobSeekers/b", "jobSeekers/a", "jobSeekers/c"]

    def test_parallel_matches_sequential(self, sample_dataset_path):
        dataset = load_dataset(sample_dataset_path)
        sequential = [m.to_dict() for m in _generate(dataset)]
        parallel = [m.to_dict() for m in _generate(dataset, workers=4)]
        assert parallel == sequential

    def test_empty_inputs(self):
        assert score_all_matches([], [], []) == []
        assert score_all_matches([JobSeeker(key="x")], [], [Company(key="c")]) == []

    def test_single_timestamp_per_batch(self, sample_dataset_path):
        dataset = load_dataset(sample_dataset_path)
        matches = score_all_matches(
            dataset.job_seekers, dataset.hiring_authorities, dataset.companies
        )
        assert len({m.created_at for m in matches}) == 1


class TestHelpers:
    def test_match_status(self):
        assert match_status(80) == STATUS_RECOMMENDED
        assert match_status(79) == STATUS_POTENTIAL
        assert match_status(70, recommended_score=70) == STATUS_RECOMMENDED

    def test_first_company_wins(self):
        first = Company(key="acme", employee_count=10)
        second = Company(key="acme", employee_count=5000)
        index = index_companies([first, second])
        assert index["companies/acme"] is first
