"""
CLI entry point for the gcodeview-preview command.

Evaluates a GCODE file and prints move statistics, the final modal state
and any advisories.
"""

import argparse
import logging
import sys
from pathlib import Path

from gcodeview.config import LOG_LEVEL_DEFAULT, RAPID_FEED_DEFAULT, TRACE
from gcodeview.gcode import EvaluationResult, GcodeInterpreter, summarize_moves
from gcodeview.gcode.utils import format_gcode_number

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate a GCODE program and print toolpath statistics")
    parser.add_argument("file", help="GCODE program file")
    parser.add_argument("--recent", type=int, default=5, help="Number of most recent moves to list")
    parser.add_argument(
        "--rapid-feed",
        type=float,
        default=RAPID_FEED_DEFAULT,
        help="Rapid (G0) feed in program units per minute",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only report errors")
    parser.add_argument("--log-level", choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set specific log level")
    return parser


def resolve_log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        if args.log_level == "TRACE":
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.ERROR
    return getattr(logging, LOG_LEVEL_DEFAULT, logging.WARNING)


def format_report(result: EvaluationResult, recent: int = 5) -> str:
    """Render an evaluation result as plain text"""
    summary = summarize_moves(result.moves, recent=recent)
    status = result.state.get_status()
    lines = [
        f"Moves: {summary.count}",
        f"Path points: {len(result.path)}",
        f"Total distance: {format_gcode_number(summary.total_distance_mm)} mm",
        f"Total time: {format_gcode_number(summary.total_time_sec)} s",
        "By kind: " + ", ".join(
            f"{kind.value}={count}" for kind, count in summary.counts_by_kind.items()
        ),
        f"Units: {status['units']}  Mode: {status['positioning_mode']}  Plane: {status['plane']}",
        f"Feed: {format_gcode_number(status['feed_rate'])} mm/min  "
        f"Rapid: {format_gcode_number(status['rapid_feed'])} mm/min",
    ]
    if summary.recent:
        lines.append("Recent moves:")
        for move in summary.recent:
            lines.append(
                f"  line {move.line_number}: {move.kind.value} "
                f"{format_gcode_number(move.distance_mm)} mm "
                f"{format_gcode_number(move.time_sec)} s "
                f"@ {format_gcode_number(move.feed_mm_per_min)} mm/min"
            )
    if result.advisories:
        lines.append("Advisories:")
        lines.extend(f"  {advisory}" for advisory in result.advisories)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the preview command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=resolve_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        program = Path(args.file).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.error(f"Failed to read {args.file}: {e}")
        return 1

    result = GcodeInterpreter(rapid_feed=args.rapid_feed).evaluate(program)
    print(format_report(result, recent=args.recent))
    return 0


def main_entry():
    """Entry point for the gcodeview-preview command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
