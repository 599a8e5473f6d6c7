import argparse
from pathlib import Path
from typing import Any, Dict, List

from . import __version__
from .env import load_env
from .insights import (
    best_match,
    count_strong_matches,
    filter_learning_resources,
    learning_gaps,
    score_band,
    search_jobs,
)
from .jooble import CATEGORY_KEYWORDS, DEFAULT_KEYWORDS, fetch_category_jobs, fetch_jobs
from .logger import get_logger
from .matcher import match_skills
from .ranker import RankedJob, rank_jobs
from .retry import RetryError
from .schema import InvalidArgument, validate_jobs
from .storage import load_jobs, load_resources, load_skills, save_json

logger = get_logger()


def _split_labels(value: str) -> List[str]:
    return [s.strip() for s in value.split(",") if s.strip()] if value else []


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def _rank_or_exit(jobs: List[Any], skills: List[Any]) -> List[RankedJob]:
    try:
        ranked = rank_jobs(jobs, skills)
    except InvalidArgument as e:
        raise SystemExit(f"Invalid input: {e}")
    logger.record_ranking(len(ranked))
    return ranked


def _load_or_exit(loader, path_arg: str):
    try:
        return loader(Path(path_arg))
    except ValueError as e:
        raise SystemExit(str(e))


def _print_ranked(ranked: List[RankedJob]) -> None:
    for i, r in enumerate(ranked, 1):
        job = r.to_dict()
        title = job.get("title") or "Untitled Position"
        company = job.get("company") or "Unknown Company"
        print(f"{i:>3}. [{r.score:>3}%] {score_band(r.score):<7} {title} @ {company}")
        if r.matched:
            print(f"       matched: {', '.join(r.matched)}")
        if r.missing:
            print(f"       missing: {', '.join(r.missing)}")


def cmd_match(args: argparse.Namespace) -> None:
    candidate = _split_labels(args.candidate)
    required = _split_labels(args.required)
    try:
        result = match_skills(candidate, required)
    except InvalidArgument as e:
        raise SystemExit(f"Invalid input: {e}")
    logger.record_matches()
    print(f"Score: {result.score}% ({score_band(result.score)})")
    print(f"Matched ({len(result.matched)}): {', '.join(result.matched) or '-'}")
    print(f"Missing ({len(result.missing)}): {', '.join(result.missing) or '-'}")


def cmd_rank(args: argparse.Namespace) -> None:
    jobs = _load_or_exit(load_jobs, args.jobs)
    skills = _load_or_exit(load_skills, args.skills)
    ranked = _rank_or_exit(jobs, skills)
    if args.query:
        ranked = search_jobs(ranked, args.query)
    if args.top is not None:
        ranked = ranked[:args.top]

    if args.output:
        save_json(Path(args.output), [r.to_dict() for r in ranked])
        print(f"Wrote {len(ranked)} ranked jobs to {args.output}")
        return

    if not ranked:
        print("No jobs to rank.")
        return
    print(f"Ranked {len(ranked)} jobs against {len(skills)} skills "
          f"({count_strong_matches(ranked)} strong matches):\n")
    _print_ranked(ranked)


def cmd_gaps(args: argparse.Namespace) -> None:
    jobs = _load_or_exit(load_jobs, args.jobs)
    skills = _load_or_exit(load_skills, args.skills)
    ranked = _rank_or_exit(jobs, skills)

    top = best_match(ranked)
    if top is None:
        print("No jobs to analyze.")
        return
    title = top.to_dict().get("title") or "Untitled Position"
    print(f"Best match: {title} ({top.score}%)")
    print(f"  Matched skills ({len(top.matched)}): {', '.join(top.matched) or 'No skills matched yet'}")
    print(f"  Skills to develop ({len(top.missing)}): {', '.join(top.missing) or 'You have all required skills!'}")

    gaps = learning_gaps(ranked, limit=args.limit)
    print(f"\nSkills to develop across all jobs: {', '.join(gaps) or '-'}")

    if args.resources and gaps:
        resources = _load_or_exit(load_resources, args.resources)
        picked = filter_learning_resources(resources, gaps)
        print("\nLearning resources:")
        if not picked:
            print("  none found")
        for res in picked:
            name = res.get("title") or res.get("skill_name")
            provider = res.get("provider") or "unknown provider"
            print(f"  - {name} ({provider} • {res.get('skill_name')})")


def cmd_validate(args: argparse.Namespace) -> None:
    jobs = _load_or_exit(load_jobs, args.jobs)
    report = validate_jobs(jobs)
    if report:
        print("Invalid:")
        for index, errors in report.items():
            for e in errors:
                print(f" - jobs[{index}]: {e}")
        raise SystemExit(2)
    print(f"Valid ({len(jobs)} jobs)")


def cmd_fetch(args: argparse.Namespace) -> None:
    try:
        if args.category:
            result = fetch_category_jobs(args.category, location=args.location, page=args.page, api_key=args.api_key)
        else:
            result = fetch_jobs(args.keywords or DEFAULT_KEYWORDS, location=args.location, page=args.page, api_key=args.api_key)
    except (ValueError, RetryError) as e:
        raise SystemExit(str(e))

    jobs: List[Dict[str, Any]] = result["jobs"]
    print(f"Fetched {len(jobs)} of {result['total_count']} jobs.")

    if args.skills:
        skills = _load_or_exit(load_skills, args.skills)
        ranked = _rank_or_exit(jobs, skills)
        out: List[Dict[str, Any]] = [r.to_dict() for r in ranked]
    else:
        ranked = []
        out = jobs

    if args.output:
        save_json(Path(args.output), out)
        print(f"Wrote {len(out)} jobs to {args.output}")
    elif ranked:
        _print_ranked(ranked)
    else:
        for job in jobs:
            print(f" - {job['title']} @ {job['company']} ({job['location']})")
    logger.log_metrics_summary()


def main(argv=None):
    # Load .env if present (JOOBLE_API_KEY, SKILLMATCH_LOG_LEVEL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="skillmatch", description="Match resume skills to job requirements")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    mat = subparsers.add_parser("match", help="Score one candidate skill list against one job's required skills")
    mat.add_argument("--candidate", required=True, help="Comma-separated candidate skills. Example: \"Python,SQL,React\"")
    mat.add_argument("--required", required=True, help="Comma-separated required skills")
    mat.set_defaults(func=cmd_match)

    rnk = subparsers.add_parser("rank", help="Rank jobs from a JSON file by compatibility score")
    rnk.add_argument("--jobs", required=True, help="JSON file: list of jobs or {\"jobs\": [...]}")
    rnk.add_argument("--skills", required=True, help="JSON file: list of skills or {\"skills\": [...]}")
    rnk.add_argument("--query", help="Only keep jobs whose title, company or skills contain this text")
    rnk.add_argument("--top", type=_non_negative_int, help="Only keep the N best matches")
    rnk.add_argument("--output", help="Write ranked jobs as JSON instead of printing")
    rnk.set_defaults(func=cmd_rank)

    gps = subparsers.add_parser("gaps", help="Show skill gaps for the best match and across all jobs")
    gps.add_argument("--jobs", required=True, help="JSON file of jobs")
    gps.add_argument("--skills", required=True, help="JSON file of candidate skills")
    gps.add_argument("--resources", help="JSON file of learning resources with skill_name fields")
    gps.add_argument("--limit", type=_non_negative_int, default=5, help="Number of gap skills to list (default 5)")
    gps.set_defaults(func=cmd_gaps)

    val = subparsers.add_parser("validate", help="Validate job records in a JSON file")
    val.add_argument("--jobs", required=True, help="JSON file of jobs")
    val.set_defaults(func=cmd_validate)

    fch = subparsers.add_parser("fetch", help="Fetch jobs from Jooble and optionally rank them")
    src = fch.add_mutually_exclusive_group()
    src.add_argument("--category", choices=sorted(CATEGORY_KEYWORDS), help="Job category to search")
    src.add_argument("--keywords", help=f"Search keywords (default: \"{DEFAULT_KEYWORDS}\")")
    fch.add_argument("--location", default="", help="Location filter")
    fch.add_argument("--page", type=int, default=1, help="Result page (default 1)")
    fch.add_argument("--api-key", help="Jooble API key (or set JOOBLE_API_KEY)")
    fch.add_argument("--skills", help="JSON file of candidate skills to rank against")
    fch.add_argument("--output", help="Write jobs as JSON instead of printing")
    fch.set_defaults(func=cmd_fetch)

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
