import logging
from pathlib import Path
from typing import List, Union

from analysis_core import LogEntry, parse_log_line

logger = logging.getLogger(__name__)


class LogfileReader:
    """Single-use, forward-only iterator over the entries of a weblog file.

    The whole file is read and parsed up front, so the file handle is
    closed before the first entry is handed out. Lines that do not parse
    are skipped and counted in ``skipped``.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.lines: List[str] = []
        self.entries: List[LogEntry] = []
        self.skipped = 0
        self._position = 0

        with open(self.path, "r", encoding="utf-8-sig") as handle:
            for line in handle:
                line = line.rstrip("\n")
                if not line.strip():
                    continue
                self.lines.append(line)
                entry = parse_log_line(line)
                if entry is None:
                    self.skipped += 1
                    continue
                self.entries.append(entry)

        if self.skipped:
            logger.warning("Skipped %d unparseable line(s) in %s", self.skipped, self.path)
        logger.info("Read %d entries from %s", len(self.entries), self.path)

    def has_next(self) -> bool:
        return self._position < len(self.entries)

    def next(self) -> LogEntry:
        if not self.has_next():
            raise StopIteration
        entry = self.entries[self._position]
        self._position += 1
        return entry

    def __iter__(self):
        return self

    def __next__(self) -> LogEntry:
        return self.next()

    def print_data(self) -> None:
        """Print the raw data lines, for debugging."""
        for line in self.lines:
            print(line)
