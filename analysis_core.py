import calendar
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, List, Optional

HOURS_PER_DAY = 24
MONTHS_PER_YEAR = 12

LOG_PATTERN = re.compile(
    r"^(?P<year>\d{4})\s+(?P<month>\d{1,2})\s+(?P<day>\d{1,2})\s+(?P<hour>\d{1,2})\s+(?P<minute>\d{1,2})(?:\s|$)",
)


@dataclass(frozen=True)
class LogEntry:
    """Timestamp of one access record."""

    year: int
    month: int
    day: int
    hour: int
    minute: int

    def __str__(self) -> str:
        return f"{self.year:04d} {self.month:02d} {self.day:02d} {self.hour:02d} {self.minute:02d}"


@dataclass(frozen=True)
class AnalysisPeriod:
    """The year and month that day-level queries look at."""

    year: int
    month: int

    @property
    def days(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]


def parse_log_line(line: str) -> Optional[LogEntry]:
    match = LOG_PATTERN.match(line.strip())
    if not match:
        return None

    fields = {name: int(value) for name, value in match.groupdict().items()}
    try:
        datetime(fields["year"], fields["month"], fields["day"], fields["hour"], fields["minute"])
    except ValueError:
        return None

    return LogEntry(**fields)


def new_stats() -> Dict[str, Any]:
    return {
        "total": 0,
        "hours": [0] * HOURS_PER_DAY,
        "days": Counter(),
    }


def accumulate(stats: Dict[str, Any], entry: LogEntry) -> None:
    stats["hours"][entry.hour] += 1
    stats["days"][(entry.year, entry.month, entry.day)] += 1
    stats["total"] += 1


def merge_stats(target: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    target["total"] += incoming["total"]
    for hour, count in enumerate(incoming["hours"]):
        target["hours"][hour] += count
    target["days"].update(incoming["days"])
    return target


def total_accesses(stats: Dict[str, Any]) -> int:
    return stats["total"]


def busiest_hour(stats: Dict[str, Any]) -> int:
    """Hour with the most accesses; the lowest hour wins a tie."""
    hours = stats["hours"]
    busiest = 0
    for hour in range(1, len(hours)):
        if hours[hour] > hours[busiest]:
            busiest = hour
    return busiest


def quietest_hour(stats: Dict[str, Any]) -> int:
    """Hour with the fewest accesses; the lowest hour wins a tie."""
    hours = stats["hours"]
    quietest = 0
    for hour in range(1, len(hours)):
        if hours[hour] < hours[quietest]:
            quietest = hour
    return quietest


def busiest_two_hour(stats: Dict[str, Any]) -> int:
    """First hour of the adjacent pair of hours with the most accesses.

    Windows do not wrap around midnight, so the result is in 0..22.
    """
    hours = stats["hours"]
    first_hour = 0
    max_accesses = hours[0] + hours[1]
    for hour in range(1, len(hours) - 1):
        window = hours[hour] + hours[hour + 1]
        if window > max_accesses:
            max_accesses = window
            first_hour = hour
    return first_hour


def quietest_two_hour(stats: Dict[str, Any]) -> int:
    """First hour of the adjacent pair of hours with the fewest accesses."""
    hours = stats["hours"]
    first_hour = 0
    min_accesses = hours[0] + hours[1]
    for hour in range(1, len(hours) - 1):
        window = hours[hour] + hours[hour + 1]
        if window < min_accesses:
            min_accesses = window
            first_hour = hour
    return first_hour


def day_counts(stats: Dict[str, Any], period: AnalysisPeriod) -> List[int]:
    days = stats["days"]
    return [days[(period.year, period.month, day)] for day in range(1, period.days + 1)]


def busiest_day(stats: Dict[str, Any], period: AnalysisPeriod) -> Optional[LogEntry]:
    """Busiest day of ``period``, or None if nothing was accessed in it."""
    busiest = None
    max_accesses = 0
    for day, accesses in enumerate(day_counts(stats, period), start=1):
        if accesses > max_accesses:
            max_accesses = accesses
            busiest = LogEntry(period.year, period.month, day, 0, 0)
    return busiest


def quietest_day(stats: Dict[str, Any], period: AnalysisPeriod) -> LogEntry:
    counts = day_counts(stats, period)
    quietest = min(range(len(counts)), key=counts.__getitem__)
    return LogEntry(period.year, period.month, quietest + 1, 0, 0)


def total_accesses_per_month(stats: Dict[str, Any], year: int) -> List[int]:
    per_month = [0] * MONTHS_PER_YEAR
    for (entry_year, month, _day), count in stats["days"].items():
        if entry_year == year:
            per_month[month - 1] += count
    return per_month


def busiest_month(stats: Dict[str, Any], year: int) -> LogEntry:
    per_month = total_accesses_per_month(stats, year)
    month = max(range(MONTHS_PER_YEAR), key=per_month.__getitem__)
    return LogEntry(year, month + 1, 1, 0, 0)


def quietest_month(stats: Dict[str, Any], year: int) -> LogEntry:
    per_month = total_accesses_per_month(stats, year)
    month = min(range(MONTHS_PER_YEAR), key=per_month.__getitem__)
    return LogEntry(year, month + 1, 1, 0, 0)


def average_accesses_per_month(stats: Dict[str, Any], year: int) -> float:
    per_month = total_accesses_per_month(stats, year)
    return sum(per_month) / len(per_month)


def latest_period(stats: Dict[str, Any]) -> Optional[AnalysisPeriod]:
    """Month of the most recent access, if any were recorded."""
    if not stats["days"]:
        return None
    year, month, _day = max(stats["days"])
    return AnalysisPeriod(year, month)


def format_hourly_counts(stats: Dict[str, Any]) -> str:
    lines = ["Hr: Count"]
    lines.extend(f"{hour}: {count}" for hour, count in enumerate(stats["hours"]))
    return "\n".join(lines)


def summarize_stats(stats: Dict[str, Any], period: AnalysisPeriod) -> Dict[str, Any]:
    busiest = busiest_day(stats, period)
    return {
        "period": {"year": period.year, "month": period.month},
        "total_accesses": total_accesses(stats),
        "hour_histogram": list(stats["hours"]),
        "busiest_hour": busiest_hour(stats),
        "quietest_hour": quietest_hour(stats),
        "busiest_two_hour": busiest_two_hour(stats),
        "quietest_two_hour": quietest_two_hour(stats),
        "busiest_day": str(busiest) if busiest else None,
        "quietest_day": str(quietest_day(stats, period)),
        "day_histogram": day_counts(stats, period),
        "month_histogram": total_accesses_per_month(stats, period.year),
        "busiest_month": str(busiest_month(stats, period.year)),
        "quietest_month": str(quietest_month(stats, period.year)),
        "average_accesses_per_month": average_accesses_per_month(stats, period.year),
    }
