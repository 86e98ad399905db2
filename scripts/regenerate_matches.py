#!/usr/bin/env python3
"""
Regenerate stored matches from a dataset JSON.

Clears the match table, scores every job seeker against every hiring
authority, saves the kept matches and prints the best ones.

Usage:
    python scripts/regenerate_matches.py --dataset data/sample_dataset.json --db data/matches.db
"""

import argparse
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from candidmatch.batch import score_all_matches
from candidmatch.config import Settings, load_settings
from candidmatch.database import replace_matches
from candidmatch.env import load_env
from candidmatch.storage import DatasetError, load_dataset


def regenerate(
    dataset_path: Path,
    db_path: Path,
    dry_run: bool = False,
    workers: int = 1,
    settings: Settings = None,
):
    """
    Regenerate matches for a dataset.

    Args:
        dataset_path: Path to dataset JSON file
        db_path: Path to SQLite match store
        dry_run: If True, don't write to database
        workers: Scoring threads
        settings: Skill graph and thresholds (default: read from environment)
    """
    settings = settings or load_settings()
    graph = settings.skill_graph()

    print(f"Loading dataset from {dataset_path}...")
    dataset = load_dataset(dataset_path)
    print(
        f"Found {len(dataset.job_seekers)} job seekers, "
        f"{len(dataset.hiring_authorities)} authorities, "
        f"{len(dataset.companies)} companies"
    )

    matches = score_all_matches(
        dataset.job_seekers,
        dataset.hiring_authorities,
        dataset.companies,
        graph=graph,
        min_score=settings.min_score,
        recommended_score=settings.recommended_score,
        workers=workers,
    )
    print(f"Generated {len(matches)} matches")

    if dry_run:
        print("\n[DRY RUN] Would save the following matches:")
        for i, match in enumerate(matches[:5], 1):
            print(f"  {i}. {match.key}: {match.score}")
        if len(matches) > 5:
            print(f"  ... and {len(matches) - 5} more")
        return matches

    try:
        written = replace_matches(db_path, matches)
    except Exception as e:
        print(f"Failed to save matches: {e}")
        return None
    print(f"Saved {written} matches to {db_path}")

    print("\nTop 5 matches:")
    for i, match in enumerate(matches[:5], 1):
        print(f"{i}. Score: {match.score}% - {', '.join(match.result.match_reasons)}")

    print(f"\nTotal matches: {len(matches)}")
    print(f"High-quality matches (80%+): {sum(1 for m in matches if m.score >= 80)}")
    print(f"Excellent matches (90%+): {sum(1 for m in matches if m.score >= 90)}")
    return matches


def main():
    parser = argparse.ArgumentParser(description="Regenerate matches from a dataset JSON")
    parser.add_argument("--dataset", type=Path, default=Path("data/sample_dataset.json"),
                       help="Path to dataset JSON file")
    parser.add_argument("--db", type=Path, default=Path("data/matches.db"),
                       help="Path to SQLite match store")
    parser.add_argument("--workers", type=int, default=1,
                       help="Scoring threads")
    parser.add_argument("--dry-run", action="store_true",
                       help="Show what would be saved without writing")

    args = parser.parse_args()
    load_env()

    if not args.dataset.exists():
        print(f"Dataset file not found: {args.dataset}")
        sys.exit(1)

    try:
        result = regenerate(args.dataset, args.db, dry_run=args.dry_run, workers=args.workers)
    except DatasetError as e:
        print(f"Invalid dataset: {e}")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        print(f"Invalid configuration: {e}")
        sys.exit(1)
    if result is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
