"""Command line entry point for the reading core."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import ReaderConfig, get_config
from .models.content import ContentItem, load_catalog
from .models.persona import PERSONA_DESCRIPTIONS, PersonaAnswers
from .observability import logger
from .personalization import PersonaRanker, classify, recommend
from .progress import ProgressTracker, ProgressWriter, format_last_read, recent_history
from .storage import PersonaRepository, UserSession, create_store


def _load_json(path: str):
    with open(Path(path), "r") as f:
        return json.load(f)


def _load_answers(path: Optional[str], config: ReaderConfig) -> Optional[PersonaAnswers]:
    """Answers from a file, else the persona saved by onboarding."""
    if path:
        return PersonaAnswers.from_dict(_load_json(path))
    saved = PersonaRepository(create_store(config)).load()
    return saved[0] if saved else None


def cmd_classify(args, config: ReaderConfig) -> int:
    answers = _load_answers(args.answers, config)
    if answers is None:
        print("No persona answers found. Pass --answers or complete onboarding first.")
        return 1

    label = classify(answers)
    print(label.value)
    print(PERSONA_DESCRIPTIONS[label])
    return 0


def cmd_rank(args, config: ReaderConfig) -> int:
    catalog = load_catalog(_load_json(args.catalog))
    answers = _load_answers(args.answers, config)
    limit = args.limit or config.recommendation_limit

    if answers is None:
        logger.info("No persona available, falling back to top rated")
        for item in recommend(catalog, None, limit):
            print(f"{item.id:<12} {item.rating:>4.1f}  {item.title}")
        return 0

    ranker = PersonaRanker()
    for ranked in ranker.rank(catalog, answers)[:limit]:
        line = f"{ranked.item.id:<12} {ranked.score:>3}  {ranked.item.title}"
        if args.explain:
            line += f"  [{ranker.explain_ranking(ranked)}]"
        print(line)
    return 0


def cmd_history(args, config: ReaderConfig) -> int:
    catalog = load_catalog(_load_json(args.catalog))
    session = UserSession(create_store(config))

    if session.current_user is None:
        print("No user signed in.")
        return 1

    views = recent_history(session.current_user, catalog)
    if not views:
        print("No reading history yet")
        return 0

    for view in views:
        print(
            f"{view.item.title:<30} {view.progress:>3}% complete  "
            f"{format_last_read(view.entry.timestamp)}"
        )
    return 0


async def _record(item: ContentItem, position, session: UserSession, config: ReaderConfig) -> int:
    writer = ProgressWriter(session, debounce_seconds=config.debounce_seconds)
    with ProgressTracker(item, writer, strict=config.strict_positions) as tracker:
        state = tracker.jump_to(position)
    print(f"{item.title}: unit {state.position + 1} of {item.total_units} ({state.percentage}%)")
    return 0


def cmd_progress(args, config: ReaderConfig) -> int:
    catalog = {item.id: item for item in load_catalog(_load_json(args.catalog))}
    item = catalog.get(args.item)
    if item is None:
        print(f"Unknown item: {args.item}")
        return 1

    session = UserSession(create_store(config))
    if session.current_user is None:
        print("No user signed in; progress not recorded.")
        return 1

    if item.is_paged:
        position = args.page
    else:
        position = (args.chapter, args.paragraph)
    return asyncio.run(_record(item, position, session, config))


def cli():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Persona ranking, classification and reading progress"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify_parser = subparsers.add_parser("classify", help="Show the persona for a set of answers")
    classify_parser.add_argument("--answers", type=str, help="JSON file with persona answers")

    rank_parser = subparsers.add_parser("rank", help="Rank a catalog for a persona")
    rank_parser.add_argument("--catalog", type=str, required=True, help="JSON file with catalog items")
    rank_parser.add_argument("--answers", type=str, help="JSON file with persona answers")
    rank_parser.add_argument("--limit", type=int, default=0, help="Number of items to show")
    rank_parser.add_argument("--explain", action="store_true", help="Show score breakdown")

    history_parser = subparsers.add_parser("history", help="Show the signed-in user's reading history")
    history_parser.add_argument("--catalog", type=str, required=True, help="JSON file with catalog items")

    progress_parser = subparsers.add_parser("progress", help="Record a reading position")
    progress_parser.add_argument("--catalog", type=str, required=True, help="JSON file with catalog items")
    progress_parser.add_argument("--item", type=str, required=True, help="Content item ID")
    progress_parser.add_argument("--page", type=int, default=0, help="Page index (paged items)")
    progress_parser.add_argument("--chapter", type=int, default=0, help="Chapter index (chaptered items)")
    progress_parser.add_argument("--paragraph", type=int, default=0, help="Paragraph index (chaptered items)")

    args = parser.parse_args()
    config = get_config()

    if args.debug:
        logging.getLogger("story_reader").setLevel(logging.DEBUG)
    else:
        logging.getLogger("story_reader").setLevel(config.log_level.upper())

    commands = {
        "classify": cmd_classify,
        "rank": cmd_rank,
        "history": cmd_history,
        "progress": cmd_progress,
    }
    sys.exit(commands[args.command](args, config))


if __name__ == "__main__":
    cli()
