"""periodization-engine: detect training phases and score a training block.

Usage:
    periodization-engine analyze input.json                # full analysis
    periodization-engine detect input.json --min-phase-weeks 3
    periodization-engine analyze input.json --prs prs.json --target-model block

The input file is a JSON object holding either ``weeklyMetrics`` or
``dailyTSS`` (plus optional ``activities``), and optionally
``personalRecords`` and a ``config`` object of detection/scoring options.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from periodization_engine.aggregation.weekly import aggregate_weekly_metrics
from periodization_engine.cli import config as env
from periodization_engine.engine import PeriodizationEngine
from periodization_engine.exceptions import (
    ConfigurationError,
    InvalidInputError,
    PeriodizationError,
)
from periodization_engine.models.config import DetectionConfig, ScoringConfig
from periodization_engine.models.enums import MIN_ANALYSIS_WEEKS
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.serialization.parsing import (
    activities_from_json,
    daily_tss_from_json,
    personal_records_from_json,
    weekly_metrics_from_json,
)
from periodization_engine.serialization.report import to_json_dict

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def _load_json(path: Path) -> Any:
    try:
        with open(path) as f:
            return json.load(f)
    except OSError as exc:
        raise InvalidInputError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"{path} is not valid JSON: {exc}") from exc


def _env_int(name: str, raw: str) -> int | None:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _load_weeks(document: Mapping[str, Any]) -> tuple[WeeklyMetric, ...]:
    if "weeklyMetrics" in document:
        return weekly_metrics_from_json(document["weeklyMetrics"])
    if "dailyTSS" in document:
        daily = daily_tss_from_json(document["dailyTSS"])
        activities = activities_from_json(document.get("activities", []))
        return aggregate_weekly_metrics(daily, activities)
    raise InvalidInputError("Input must contain 'weeklyMetrics' or 'dailyTSS'")


def build_engine(args: argparse.Namespace, options: Mapping[str, Any]) -> PeriodizationEngine:
    """Engine configured from the input's options, the environment and flags (in rising priority)."""
    detection_options = dict(options)
    env_min_phase = _env_int("PERIODIZATION_MIN_PHASE_WEEKS", env.MIN_PHASE_WEEKS)
    if env_min_phase is not None:
        detection_options["minPhaseWeeks"] = env_min_phase
    if args.min_phase_weeks is not None:
        detection_options["minPhaseWeeks"] = args.min_phase_weeks

    target = args.target_model or env.TARGET_MODEL or options.get("targetModel")
    scoring = ScoringConfig.from_mapping({"targetModel": target})

    min_weeks = args.min_analysis_weeks
    if min_weeks is None:
        min_weeks = _env_int("PERIODIZATION_MIN_ANALYSIS_WEEKS", env.MIN_ANALYSIS_WEEKS)
    return PeriodizationEngine(
        detection_config=DetectionConfig.from_mapping(detection_options),
        scoring_config=scoring,
        min_analysis_weeks=min_weeks if min_weeks is not None else MIN_ANALYSIS_WEEKS,
    )


def run(args: argparse.Namespace) -> Any:
    """Execute a parsed command and return its JSON-ready result."""
    document = _load_json(args.input)
    if not isinstance(document, Mapping):
        raise InvalidInputError("Input must be a JSON object")

    weeks = _load_weeks(document)
    records = personal_records_from_json(document.get("personalRecords", []))
    if args.prs is not None:
        records += personal_records_from_json(_load_json(args.prs))
    logger.info("Loaded %d weeks and %d personal records", len(weeks), len(records))

    options = document.get("config", {})
    if not isinstance(options, Mapping):
        raise InvalidInputError("'config' must be a JSON object")
    engine = build_engine(args, options)
    if args.command == "detect":
        return to_json_dict({"phases": engine.detect_phases(weeks, records)})
    return to_json_dict(engine.analyze(weeks, records))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="periodization-engine",
        description="Detect training phases and score periodization effectiveness",
    )
    parser.add_argument(
        "--log-level",
        default=env.LOG_LEVEL,
        help="Logging level (default: $PERIODIZATION_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("analyze", "Full analysis: phases, effectiveness, warnings and summary"),
        ("detect", "Detect training phases only"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", type=Path, help="Input JSON file")
        sub.add_argument("--prs", type=Path, help="JSON file with a list of personal records")
        sub.add_argument("--target-model", help="linear, undulating, block or polarized")
        sub.add_argument("--min-phase-weeks", type=int, help="Shortest phase in weeks")
        sub.add_argument(
            "--min-analysis-weeks", type=int, help="Weeks required for a full analysis"
        )
        sub.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
        sub.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        result = run(args)
    except PeriodizationError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return EXIT_ERROR

    text = json.dumps(result, indent=args.indent)
    if args.output is not None:
        args.output.write_text(text + "\n")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(text + "\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
