# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides the command-line interface to run an analysis.
#   This is how users interact with the system.
#
# COMMANDS:
# ---------
# 1. Analyze an input bundle:
#    aden analyze bundle.json
#    aden analyze bundle.json --profile retail --output result.json
#    aden analyze bundle.json --thresholds.high-frequency 25
#
# 2. List migration profiles:
#    aden profiles
#
# 3. Show threshold options:
#    aden thresholds
#
# 4. Write a sample aden-config.json:
#    aden init-config . --profile financial
#
# EXIT CODES:
# -----------
#   0  success
#   1  unreadable or malformed input bundle
#   2  configuration error (e.g. unknown profile)
#
# IMPLEMENTATION:
# ---------------
# - "--thresholds.<key> <value>" pairs are pulled out of argv before
#   argparse sees them, since the key set is open-ended
# - Instantiates ThresholdResolver, BundleStore and PatternAnalyzer
#
# ==============================================

import argparse
import json
import logging
import os
import sys
from typing import List, Optional, TextIO

from .analysis import AnalysisResult
from .config import get_config
from .errors import ConfigurationError, InputBundleError
from .pattern_analyzer import PatternAnalyzer
from .persistence import BundleStore
from .thresholds import (
    ThresholdResolver,
    generate_config_file,
    profile_help,
    split_threshold_args,
    suggest_profiles,
    threshold_help,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aden",
        description="Find denormalization candidates for a relational-to-NoSQL migration.",
        epilog="Threshold overrides: --thresholds.<key> <value> (see 'aden thresholds').",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze an input bundle")
    analyze.add_argument("input", help="Path to the JSON input bundle")
    analyze.add_argument("--profile", help="Migration profile (see 'aden profiles')")
    analyze.add_argument(
        "--config", action="append", default=[], metavar="PATH",
        help="Extra threshold config file; may be repeated",
    )
    analyze.add_argument("--project-dir", help="Directory holding aden-config.json")
    analyze.add_argument("--output", "-o", help="Write JSON result here instead of stdout")

    subparsers.add_parser("profiles", help="List migration profiles")
    subparsers.add_parser("thresholds", help="Show threshold configuration options")

    init = subparsers.add_parser("init-config", help="Write a sample aden-config.json")
    init.add_argument("directory", help="Directory to write into")
    init.add_argument("--profile", help="Seed values from this profile")

    return parser


def print_summary(result: AnalysisResult, out: TextIO) -> None:
    print(f"✓ {result.thresholds.configuration_summary()}", file=out)
    print(
        f"✓ Analyzed {len(result.usage_profiles)} entities, "
        f"{len(result.query_patterns)} query patterns",
        file=out,
    )
    print(
        f"✓ Found {len(result.candidates)} candidates "
        f"({len(result.recommended_candidates)} at or above minimum score "
        f"{result.thresholds.minimum_migration_score})",
        file=out,
    )
    for candidate in result.candidates:
        related = ", ".join(candidate.related_entities) or "-"
        print(
            f"  {candidate.primary_entity:<24} {candidate.score:>4}  "
            f"{candidate.complexity.name:<6}  {candidate.recommended_target.display_name:<18}  "
            f"[{related}]",
            file=out,
        )
        print(f"    {candidate.score_interpretation}", file=out)
    for warning in result.warnings:
        print(f"⚠ {warning}", file=out)


def run_analyze(args: argparse.Namespace, overrides: dict) -> int:
    config = get_config()
    profile = args.profile or config.profile
    config_paths = config.config_paths(args.project_dir) + list(args.config)

    resolver = ThresholdResolver()
    try:
        thresholds = resolver.resolve(profile, config_paths, os.environ, overrides)
    except ConfigurationError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2

    try:
        inputs = BundleStore().load_inputs(args.input)
    except InputBundleError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    result = PatternAnalyzer(thresholds).analyze_inputs(inputs)
    result.warnings[:0] = resolver.warnings

    if args.output:
        BundleStore().save_result(result, args.output)
        print_summary(result, sys.stdout)
        print(f"✓ Results written to {args.output}")
    else:
        print_summary(result, sys.stderr)
        json.dump(result.to_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")

    if not result.candidates:
        max_frequency = max((p.frequency for p in result.query_patterns), default=0)
        print(
            suggest_profiles(len(result.usage_profiles), len(result.query_patterns), max_frequency),
            file=sys.stderr,
        )
    return 0


def run_init_config(args: argparse.Namespace) -> int:
    try:
        path = generate_config_file(args.directory, args.profile)
    except ConfigurationError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2
    print(f"✓ Generated configuration file: {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    overrides, remaining = split_threshold_args(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(remaining)

    logging.basicConfig(
        level=getattr(logging, get_config().log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "analyze":
        return run_analyze(args, overrides)
    if args.command == "profiles":
        print(profile_help(), end="")
        return 0
    if args.command == "thresholds":
        print(threshold_help(), end="")
        return 0
    return run_init_config(args)


if __name__ == "__main__":
    sys.exit(main())
