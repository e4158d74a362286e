"""
File ingest and emit for user database merging.

Reads the main file (header + records), merges every additional input file
in order, and writes the merged store back out sorted by key.

I/O errors are not caught here: a missing or unreadable input, or an
unwritable output, aborts the run. A failed write may leave a partially
written output file behind.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from loguru import logger

from userdb.config import settings
from userdb.header import Header, scan_main
from userdb.store import MergeOutcome, MergeStore, merge_line


@dataclass
class FileStats:
    """Line counts for one ingested file."""
    path: str
    lines: int = 0
    skipped: int = 0
    rejected: int = 0
    inserted: int = 0
    updated: int = 0
    kept: int = 0

    def count(self, outcome: MergeOutcome) -> None:
        """Tally the outcome of one line."""
        self.lines += 1
        if outcome is MergeOutcome.SKIPPED:
            self.skipped += 1
        elif outcome is MergeOutcome.REJECTED:
            self.rejected += 1
        elif outcome is MergeOutcome.INSERTED:
            self.inserted += 1
        elif outcome is MergeOutcome.UPDATED:
            self.updated += 1
        else:
            self.kept += 1


@dataclass
class MergeResult:
    """Result of a full merge run."""
    output: str
    files: list[FileStats] = field(default_factory=list)
    records_written: int = 0
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def duration_seconds(self) -> float | None:
        """Calculate duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    @property
    def lines_rejected(self) -> int:
        return sum(stats.rejected for stats in self.files)


def read_lines(path: Path, encoding: str | None = None) -> Iterator[str]:
    """
    Yield the lines of a text file without their terminators.

    A trailing "\\n" and then a trailing "\\r" are removed, so both LF and
    CRLF files are accepted. The file is closed when the generator is
    exhausted or discarded.
    """
    encoding = encoding or settings.merge.encoding

    with open(path, encoding=encoding, newline="\n") as f:
        for line in f:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line


def ingest_main(path: Path, store: MergeStore) -> tuple[Header, FileStats]:
    """
    Read the main file into the store.

    Args:
        path: Main file path
        store: Store to seed

    Returns:
        Tuple of (Header, FileStats)

    Raises:
        OSError: If the file cannot be opened or read
    """
    stats = FileStats(path=str(path))
    header = scan_main(read_lines(path), store, on_outcome=stats.count)

    logger.debug(
        f"Main file {path}: {stats.lines} lines, {stats.inserted} inserted, "
        f"{stats.rejected} rejected, tick={header.tick or '-'}"
    )
    return header, stats


def ingest_additional(header: Header, path: Path, store: MergeStore) -> FileStats:
    """
    Merge an additional input file into the store.

    Comment lines are skipped; they never change the header or tick tag.

    Raises:
        OSError: If the file cannot be opened or read
    """
    stats = FileStats(path=str(path))

    for line in read_lines(path):
        stats.count(merge_line(header, line, store))

    logger.debug(
        f"Input file {path}: {stats.lines} lines, {stats.inserted} inserted, "
        f"{stats.updated} updated, {stats.rejected} rejected"
    )
    return stats


def emit(header: Header, store: MergeStore, path: Path, encoding: str | None = None) -> int:
    """
    Write the header and all records, sorted by key, to ``path``.

    The file is created or truncated.

    Returns:
        Number of records written

    Raises:
        OSError: If the file cannot be created or written
    """
    encoding = encoding or settings.merge.encoding
    count = 0

    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(header.text)
        for record in store.records():
            f.write(record.to_line())
            count += 1

    return count


def merge_files(main: Path, inputs: list[Path], output: Path) -> MergeResult:
    """
    Run a complete merge: main file, each input in order, then emit.

    Args:
        main: Main file supplying the header
        inputs: Additional files, merged in the given order
        output: Destination file

    Returns:
        MergeResult with per-file statistics

    Raises:
        OSError: On any file I/O failure
    """
    result = MergeResult(output=str(output), started_at=datetime.now())
    store = MergeStore()

    header, main_stats = ingest_main(Path(main), store)
    result.files.append(main_stats)

    for path in inputs:
        result.files.append(ingest_additional(header, Path(path), store))

    result.records_written = emit(header, store, Path(output))
    result.completed_at = datetime.now()

    logger.info(
        f"Merged {len(result.files)} files into {result.records_written:,} records "
        f"({result.lines_rejected} invalid lines)"
    )
    return result
