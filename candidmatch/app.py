import argparse
from pathlib import Path
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from . import __version__
from .env import load_env
from .config import Settings, load_settings
from .logger import get_logger
from .batch import StoredMatch, score_all_matches
from .scoring import score_match
from .schema import validate_dataset
from .storage import DatasetError, load_dataset, read_dataset_file, save_matches_json
from .database import load_matches, replace_matches


def _settings() -> Settings:
    try:
        return load_settings()
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")


def _load(path: str):
    try:
        return load_dataset(Path(path))
    except (FileNotFoundError, DatasetError) as e:
        raise SystemExit(str(e))


def _graph(settings: Settings):
    try:
        return settings.skill_graph()
    except (FileNotFoundError, ValueError) as e:
        raise SystemExit(str(e))


def _generate(args: argparse.Namespace, settings: Settings):
    dataset = _load(args.dataset)
    graph = _graph(settings)
    min_score = args.min_score if getattr(args, "min_score", None) is not None else settings.min_score
    return score_all_matches(
        dataset.job_seekers,
        dataset.hiring_authorities,
        dataset.companies,
        graph=graph,
        min_score=min_score,
        recommended_score=settings.recommended_score,
        workers=getattr(args, "workers", None) or settings.workers,
    )


def _duplicate_key(matches: Sequence[StoredMatch]) -> Optional[str]:
    seen = set()
    for match in matches:
        if match.key in seen:
            return match.key
        seen.add(match.key)
    return None


def _print_match(rank: int, match: StoredMatch) -> None:
    print(f"{rank}. [{match.score}] {match.job_seeker_id} -> {match.hiring_authority_id} "
          f"({match.result.connection_strength}, {match.status})")
    for reason in match.result.match_reasons:
        print(f"     - {reason}")


def cmd_score(args: argparse.Namespace) -> None:
    settings = _settings()
    dataset = _load(args.dataset)
    seeker = dataset.job_seeker(args.seeker)
    if seeker is None:
        raise SystemExit(f"Job seeker not found: {args.seeker}")
    authority = dataset.authority(args.authority)
    if authority is None:
        raise SystemExit(f"Hiring authority not found: {args.authority}")
    company = dataset.company_for(authority)
    if company is None:
        raise SystemExit(f"Company not found for authority: {authority.company_id}")

    result = score_match(seeker, authority, company, _graph(settings))
    print(f"Score: {result.score}")
    print(f"Connection: {result.connection_strength}")
    print(f"Hierarchy: {result.hierarchy_match}")
    print("Factors:")
    for factor in result.factors:
        print(f"  {factor.name}: {factor.score:.1f}")
    print("Reasons:")
    for reason in result.match_reasons:
        print(f" - {reason}")


def cmd_match(args: argparse.Namespace) -> None:
    settings = _settings()
    matches = _generate(args, settings)
    if not matches:
        print("No matches above threshold.")
        return
    shown = matches[: args.top] if args.top else matches
    print(f"Found {len(matches)} matches:\n")
    for rank, match in enumerate(shown, 1):
        _print_match(rank, match)
    if args.output:
        save_matches_json(Path(args.output), matches)
        print(f"\nSaved {len(matches)} matches to {args.output}")


def cmd_regenerate(args: argparse.Namespace) -> None:
    settings = _settings()
    logger = get_logger(level=settings.log_level)
    db_path = Path(args.db) if args.db else settings.db_path

    matches = _generate(args, settings)
    try:
        written = replace_matches(db_path, matches)
    except IntegrityError:
        raise SystemExit(
            f"Duplicate match key {_duplicate_key(matches)!r}; "
            "job seeker and hiring authority _key values must be unique"
        )
    logger.info("Matches saved", db=str(db_path), count=written)

    print("Top 5 matches:")
    for rank, match in enumerate(matches[:5], 1):
        print(f"{rank}. Score: {match.score}% - {', '.join(match.result.match_reasons)}")
    print(f"\nTotal matches: {len(matches)}")
    print(f"High-quality matches (80%+): {sum(1 for m in matches if m.score >= 80)}")
    print(f"Excellent matches (90%+): {sum(1 for m in matches if m.score >= 90)}")
    logger.log_metrics_summary()


def cmd_validate(args: argparse.Namespace) -> None:
    try:
        data = read_dataset_file(Path(args.dataset))
    except (FileNotFoundError, DatasetError) as e:
        raise SystemExit(str(e))
    errors = validate_dataset(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_list(args: argparse.Namespace) -> None:
    settings = _settings()
    db_path = Path(args.db) if args.db else settings.db_path
    if not db_path.exists():
        print(f"Match store not found: {db_path}")
        return
    rows = load_matches(db_path, limit=args.limit)
    if not rows:
        print("No matches in store.")
        return
    print(f"Found {len(rows)} matches in {db_path}:\n")
    for row in rows:
        print(f"ID: {row.key}")
        print(f"  Score: {row.score} ({row.connection_strength}, {row.status})")
        print(f"  Job seeker: {row.job_seeker_id}")
        print(f"  Authority: {row.hiring_authority_id}")
        print(f"  Hierarchy: {row.hierarchy_match}")
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="candidmatch", description="Score job seekers against hiring authorities")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    sc = subparsers.add_parser("score", help="Score one job seeker against one hiring authority")
    sc.add_argument("--dataset", required=True, help="Path to dataset JSON")
    sc.add_argument("--seeker", required=True, help="Job seeker _key")
    sc.add_argument("--authority", required=True, help="Hiring authority _key")
    sc.set_defaults(func=cmd_score)

    mt = subparsers.add_parser("match", help="Rank all job seeker / authority pairs")
    mt.add_argument("--dataset", required=True, help="Path to dataset JSON")
    mt.add_argument("--top", type=int, help="Only print the top N matches")
    mt.add_argument("--min-score", type=int, help="Minimum score to keep (default: CANDIDMATCH_MIN_SCORE or 50)")
    mt.add_argument("--workers", type=int, help="Scoring threads (default: CANDIDMATCH_WORKERS or 1)")
    mt.add_argument("--output", help="Write all matches to this JSON file")
    mt.set_defaults(func=cmd_match)

    rg = subparsers.add_parser("regenerate", help="Clear stored matches and regenerate them from a dataset")
    rg.add_argument("--dataset", required=True, help="Path to dataset JSON")
    rg.add_argument("--db", help="SQLite match store (default: CANDIDMATCH_DB or data/matches.db)")
    rg.add_argument("--workers", type=int, help="Scoring threads")
    rg.set_defaults(func=cmd_regenerate)

    val = subparsers.add_parser("validate", help="Validate a dataset JSON")
    val.add_argument("--dataset", required=True, help="Path to dataset JSON")
    val.set_defaults(func=cmd_validate)

    lst = subparsers.add_parser("list", help="List stored matches")
    lst.add_argument("--db", help="SQLite match store (default: CANDIDMATCH_DB or data/matches.db)")
    lst.add_argument("--limit", type=int, help="Show at most N matches")
    lst.set_defaults(func=cmd_list)
    return parser


def main(argv: Sequence[str] = None):
    # Load .env if present (CANDIDMATCH_* settings)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
