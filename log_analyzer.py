import argparse
import json
import logging
from datetime import date
from pathlib import Path

from analysis_core import (
    AnalysisPeriod,
    accumulate,
    average_accesses_per_month,
    busiest_day,
    busiest_hour,
    busiest_month,
    busiest_two_hour,
    format_hourly_counts,
    latest_period,
    merge_stats,
    new_stats,
    quietest_day,
    quietest_hour,
    quietest_month,
    quietest_two_hour,
    summarize_stats,
    total_accesses,
    total_accesses_per_month,
)
from generate_logs import LogfileCreator
from log_reader import LogfileReader

logger = logging.getLogger(__name__)


def analyze_file(path, print_data: bool = False):
    reader = LogfileReader(path)
    if print_data:
        reader.print_data()
    stats = new_stats()
    while reader.has_next():
        accumulate(stats, reader.next())
    return stats


def resolve_period(stats, year=None, month=None) -> AnalysisPeriod:
    """Fill in whatever the caller left open from the data, then from today."""
    fallback = latest_period(stats)
    if fallback is None:
        today = date.today()
        fallback = AnalysisPeriod(today.year, today.month)
    return AnalysisPeriod(
        year if year is not None else fallback.year,
        month if month is not None else fallback.month,
    )


def format_report(stats, period: AnalysisPeriod) -> str:
    busiest = busiest_day(stats, period)
    lines = [
        format_hourly_counts(stats),
        f"The total accesses is: {total_accesses(stats)}",
        f"The busiest hour is: {busiest_hour(stats)}",
        f"The quietest hour is: {quietest_hour(stats)}",
        f"The busiest two-hour period starts at: {busiest_two_hour(stats)}",
        f"The quietest two-hour period starts at: {quietest_two_hour(stats)}",
        f"The busiest day is: {busiest if busiest else 'none'}",
        f"The quietest day is: {quietest_day(stats, period)}",
        "Total accesses per month: ",
    ]
    for month, count in enumerate(total_accesses_per_month(stats, period.year), start=1):
        lines.append(f"Month {month}: {count}")
    lines.extend([
        f"The busiest month is: {busiest_month(stats, period.year)}",
        f"The quietest month is: {quietest_month(stats, period.year)}",
        f"Average accesses per month: {average_accesses_per_month(stats, period.year)}",
    ])
    return "\n".join(lines)


def build_plot(stats, output_path: Path):
    import matplotlib.pyplot as plt

    hours = list(range(len(stats["hours"])))

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.bar(hours, stats["hours"], color="#4f81bd")
    ax.set_title("Accesses per hour of day")
    ax.set_xlabel("Hour")
    ax.set_ylabel("Accesses")
    ax.set_xticks(hours)

    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Hourly access analysis of weblog files")
    parser.add_argument("--logs", nargs="+", default=["weblog.txt"], help="Paths to weblog files.")
    parser.add_argument("--generate", type=int, help="Write this many random entries to the log file first.")
    parser.add_argument("--year", type=int, help="Year for day and month figures (default: latest entry).")
    parser.add_argument("--month", type=int, help="Month for day figures (default: latest entry).")
    parser.add_argument("--seed", type=int, help="RNG seed used with --generate.")
    parser.add_argument("--output", help="Optional path to write the JSON summary.")
    parser.add_argument("--plot", help="Optional path to write an hourly histogram plot (PNG).")
    parser.add_argument("--print-data", action="store_true", help="Echo the raw log lines before the report.")
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr.")
    return parser.parse_args(argv)


def validate_args(args):
    if args.month is not None and not 1 <= args.month <= 12:
        raise SystemExit(f"--month must be between 1 and 12 (got {args.month})")
    if args.generate is not None:
        if args.generate < 0:
            raise SystemExit(f"--generate must be >= 0 (got {args.generate})")
        if len(args.logs) != 1:
            raise SystemExit("--generate needs exactly one --logs path")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
    validate_args(args)

    if args.generate is not None:
        year = args.year if args.year is not None else date.today().year
        creator = LogfileCreator(year, seed=args.seed)
        if not creator.create_file(args.logs[0], args.generate):
            raise SystemExit(f"Could not write {args.logs[0]}")

    merged_stats = new_stats()
    for log in args.logs:
        try:
            stats = analyze_file(log, print_data=args.print_data)
        except FileNotFoundError:
            raise SystemExit(f"Log file not found: {log}")
        except (OSError, UnicodeDecodeError) as exc:
            raise SystemExit(f"Could not read {log}: {exc}")
        merge_stats(merged_stats, stats)

    period = resolve_period(merged_stats, args.year, args.month)
    logger.info("Analysing %d accesses for %04d-%02d", total_accesses(merged_stats), period.year, period.month)

    print(format_report(merged_stats, period))

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as handle:
            json.dump(summarize_stats(merged_stats, period), handle, indent=2)
        logger.info("JSON summary: %s", output_path)

    if args.plot:
        build_plot(merged_stats, Path(args.plot))
        logger.info("Plot: %s", args.plot)


if __name__ == "__main__":
    main()
