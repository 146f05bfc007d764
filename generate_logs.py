import argparse
import calendar
import logging
import random
from datetime import date
from pathlib import Path
from typing import List

from analysis_core import LogEntry

logger = logging.getLogger(__name__)

# Synthetic traffic profile for a small site
# - office-hours peak 9-17
# - busier at the start and end of the year, quiet over the summer

DEFAULT_PROFILE = {
    "peak_hours": list(range(9, 18)),
    "month_weights": [
        (1, 0.10),
        (2, 0.09),
        (3, 0.09),
        (4, 0.08),
        (5, 0.08),
        (6, 0.06),
        (7, 0.05),
        (8, 0.05),
        (9, 0.09),
        (10, 0.10),
        (11, 0.10),
        (12, 0.11),
    ],
}


def weighted_choice(options, rng=random):
    r = rng.random()
    cumulative = 0.0
    for value, weight in options:
        cumulative += weight
        if r <= cumulative:
            return value
    return options[-1][0]


def pick_hour(peak_hours, rng=random):
    """70% chance to pick a peak hour, 30% any hour."""
    if rng.random() < 0.70 and peak_hours:
        return rng.choice(peak_hours)
    return rng.randint(0, 23)


class LogfileCreator:
    """Create files of random weblog entries for one year."""

    def __init__(self, year: int, seed=None, profile=None):
        self.year = year
        self.profile = profile or DEFAULT_PROFILE
        self.rng = random.Random(seed)

    def create_entry(self) -> LogEntry:
        month = weighted_choice(self.profile["month_weights"], self.rng)
        day = self.rng.randint(1, calendar.monthrange(self.year, month)[1])
        hour = pick_hour(self.profile.get("peak_hours", []), self.rng)
        minute = self.rng.randint(0, 59)
        return LogEntry(self.year, month, day, hour, minute)

    def create_entries(self, num_entries: int) -> List[LogEntry]:
        entries = [self.create_entry() for _ in range(num_entries)]
        entries.sort(key=lambda e: (e.year, e.month, e.day, e.hour, e.minute))
        return entries

    def create_file(self, filename, num_entries: int) -> bool:
        """Write ``num_entries`` sorted entries to ``filename``.

        Returns False if the file could not be written.
        """
        path = Path(filename)
        try:
            with open(path, "w", encoding="utf-8") as handle:
                for entry in self.create_entries(num_entries):
                    handle.write(f"{entry}\n")
        except OSError as exc:
            logger.error("Unable to write %s: %s", path, exc)
            return False
        logger.info("Wrote %d entries to %s", num_entries, path)
        return True


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a synthetic weblog file.")
    parser.add_argument("--entries", type=int, default=255, help="Number of log entries to write.")
    parser.add_argument("--output", default="weblog.txt", help="Path of the generated log file.")
    parser.add_argument("--year", type=int, help="Year the entries fall in (default: current year).")
    parser.add_argument("--seed", type=int, help="RNG seed for reproducibility.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    if args.entries < 0:
        raise SystemExit(f"--entries must be >= 0 (got {args.entries})")

    year = args.year
    if year is None:
        year = date.today().year

    creator = LogfileCreator(year, seed=args.seed)
    if not creator.create_file(args.output, args.entries):
        raise SystemExit(f"Could not write {args.output}")

    print(f"Generated {args.entries} entries in {Path(args.output).resolve()}")


if __name__ == "__main__":
    main()
