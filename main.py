#!/usr/bin/env python3
"""
Idea Priority - inspect and tune a creator's idea ranking.

Command-line entry point over the priority service:
  - Rank a creator's approved or completed ideas
  - Show the priority breakdown of a single idea
  - Read or change a creator's priority weight

Usage:
    python main.py rank --creator 7                  # Approved ideas, best first
    python main.py rank --creator 7 --status completed --limit 5
    python main.py idea --creator 7 --idea 42        # One idea's breakdown
    python main.py weight get --creator 7
    python main.py weight set --creator 7 --value 60 # Clamped to [30, 70]

Data comes from Airtable when AIRTABLE_API_KEY is set, otherwise from an
empty in-memory store.
"""

import argparse
import json
import sys

from idea_priority.config import (
    MIN_PRIORITY_WEIGHT,
    MAX_PRIORITY_WEIGHT,
    configure_logging,
    print_config_summary,
    validate_config,
)
from idea_priority.models.idea import IdeaStatus, RANKABLE_STATUSES
from idea_priority.models.priority import PriorityScore, RankedIdea
from idea_priority.ranking import PriorityService
from idea_priority.storage import create_repositories


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="idea-priority",
        description="Rank a creator's ideas by votes and opportunity.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s rank --creator 7                 Rank approved ideas
  %(prog)s rank -c 7 -s completed --json    Completed ideas as JSON
  %(prog)s idea -c 7 --idea 42              Breakdown for idea 42
  %(prog)s weight set -c 7 --value 65       Favor votes a bit more
        """,
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    subparsers = parser.add_subparsers(dest="command")

    # rank
    rank = subparsers.add_parser("rank", help="Rank a creator's ideas")
    rank.add_argument("--creator", "-c", type=int, required=True, metavar="ID")
    rank.add_argument(
        "--status", "-s",
        choices=list(RANKABLE_STATUSES),
        default=IdeaStatus.APPROVED,
        help="Which ideas to rank (default: approved)",
    )
    rank.add_argument(
        "--limit", "-l",
        type=int,
        default=None,
        metavar="N",
        help="Show only the top N ideas",
    )
    rank.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    # idea
    idea = subparsers.add_parser("idea", help="Show one idea's priority breakdown")
    idea.add_argument("--creator", "-c", type=int, required=True, metavar="ID")
    idea.add_argument("--idea", "-i", type=int, required=True, metavar="ID")
    idea.add_argument("--json", action="store_true", help="Print JSON instead of text")

    # weight
    weight = subparsers.add_parser("weight", help="Read or change a creator's priority weight")
    weight.add_argument("action", choices=["get", "set"])
    weight.add_argument("--creator", "-c", type=int, required=True, metavar="ID")
    weight.add_argument(
        "--value",
        type=int,
        default=None,
        metavar="N",
        help=f"New weight (clamped to {MIN_PRIORITY_WEIGHT}-{MAX_PRIORITY_WEIGHT})",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Idea Priority Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def build_service() -> PriorityService:
    """Create a PriorityService over the configured repositories."""
    ideas, weights, signals = create_repositories()
    return PriorityService(ideas, weights, signals)


def format_priority(priority: PriorityScore) -> str:
    """One-line summary of a priority breakdown."""
    if priority.has_external_signal:
        opportunity = f"{priority.effective_opportunity_score}"
        if priority.is_stale:
            opportunity += f" (stale, was {priority.opportunity_score})"
    else:
        opportunity = "n/a"
    return f"priority {priority.priority_score:3d} | votes {priority.vote_score:3d} | opportunity {opportunity}"


def print_ranking(results: list[RankedIdea], as_json: bool = False) -> None:
    """Print a ranked idea list."""
    if as_json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        print("No ideas to rank.")
        return

    for position, ranked in enumerate(results, start=1):
        print(f"{position:3d}. {ranked.idea}")
        print(f"      {format_priority(ranked.priority)}")


def run_command(service: PriorityService, args: argparse.Namespace) -> int:
    """Dispatch a parsed sub-command. Returns the exit code."""
    if args.command == "rank":
        results = service.get_ranked_ideas(args.creator, args.status)
        if args.limit is not None:
            results = results[:args.limit]
        print_ranking(results, args.json)
        return 0

    if args.command == "idea":
        priority = service.get_priority_for_idea(args.idea, args.creator)
        if priority is None:
            print(f"Idea {args.idea} not found for creator {args.creator}")
            return 1
        if args.json:
            print(json.dumps(priority.to_dict(), indent=2))
        else:
            print(f"Idea #{priority.idea_id}: {format_priority(priority)}")
        return 0

    if args.command == "weight":
        if args.action == "set":
            if args.value is None:
                print("weight set requires --value")
                return 1
            service.set_priority_weight(args.creator, args.value)
        print(f"Priority weight for creator {args.creator}: {service.get_priority_weight(args.creator)}")
        return 0

    return 1


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.show_config:
        show_config()
        return 0

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    try:
        return run_command(build_service(), args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"\n❌ Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
