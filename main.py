#!/usr/bin/env python3
"""Procedural Story Generator.

Assembles a short story from a genre template, a three-character cast,
a handful of locations, three scripted beats and a sample dialogue tree.

Usage:
    python main.py                      # Generate one story with built-in data
    python main.py --seed 42            # Reproducible run
    python main.py --json               # Print the result as JSON
    python main.py --provider ollama --narrative
"""

import argparse
import dataclasses
import logging
import sys
import time

from story_generator.memory.builtin_data import get_builtin_pools
from story_generator.services import ServiceContainer, format_story
from story_generator.settings import LOG_LEVELS, TEXT_PROVIDERS, Settings
from story_generator.utils.exceptions import StoryGeneratorError
from story_generator.utils.logging_config import set_log_level, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(description="Procedural Story Generator")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible story",
    )
    parser.add_argument(
        "--max-locations",
        type=int,
        default=None,
        metavar="N",
        help="Maximum locations drawn from the pool (default: from settings)",
    )
    parser.add_argument(
        "--no-templates",
        action="store_true",
        help="Ignore built-in templates and use the default cyberpunk template",
    )
    parser.add_argument(
        "--provider",
        choices=list(TEXT_PROVIDERS),
        default=None,
        help="Text provider for optional content (default: from settings)",
    )
    parser.add_argument(
        "--narrative",
        action="store_true",
        help="Ask the text provider for a narrative summary",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default="default",
        help=(
            "Log file path (default: logs/story_generator.log in the current directory, "
            "use 'none' to disable)"
        ),
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the story as JSON instead of text",
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of settings with command line overrides applied.

    Raises:
        ValueError: If an override is out of range.
    """
    overrides: dict[str, object] = {}
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.max_locations is not None:
        overrides["max_locations"] = args.max_locations
    if args.provider is not None:
        overrides["text_provider"] = args.provider
    if args.narrative:
        overrides["use_provider_narrative"] = True
    if not overrides:
        return settings
    updated = dataclasses.replace(settings, **overrides)
    updated.validate()
    return updated


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)

    log_file = None if args.log_file.lower() == "none" else args.log_file
    setup_logging(level=args.log_level, log_file=log_file)

    try:
        settings = Settings.load()
        # If no explicit --log-level on the command line, respect the persisted setting
        argv_list = sys.argv[1:] if argv is None else argv
        if not any(arg.startswith("--log-level") for arg in argv_list):
            set_log_level(settings.log_level)
        settings = apply_overrides(settings, args)
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    t0 = time.perf_counter()
    try:
        pools = get_builtin_pools(include_templates=not args.no_templates)
        services = ServiceContainer(settings, pools=pools)
        result = services.generator.generate_story()
    except StoryGeneratorError as e:
        logger.error("Story generation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.info("Story generated in %.2fs", time.perf_counter() - t0)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print(format_story(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
