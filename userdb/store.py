"""
Merge store: one record per key, highest confidence wins.
"""

from collections.abc import Iterator
from enum import Enum
from typing import TYPE_CHECKING

from userdb.record import Record, is_ignorable, parse_record

if TYPE_CHECKING:
    from userdb.header import Header


class MergeOutcome(str, Enum):
    """What merging a single line did to the store."""
    SKIPPED = "skipped"      # empty or comment line
    REJECTED = "rejected"    # malformed line
    INSERTED = "inserted"    # first record for its key
    UPDATED = "updated"      # higher confidence replaced stored confidence
    KEPT = "kept"            # stored record kept (equal or lower confidence)


class MergeStore:
    """
    Ordered mapping from record key to Record.

    Keys are unique. Iteration yields records in ascending key order.
    """

    def __init__(self):
        self._records: dict[str, Record] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: str) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[Record]:
        return self.records()

    def get(self, key: str) -> Record | None:
        return self._records.get(key)

    def keys(self) -> list[str]:
        """All keys in ascending order."""
        return sorted(self._records)

    def records(self) -> Iterator[Record]:
        """Yield records in ascending key order."""
        for key in self.keys():
            yield self._records[key]

    def upsert(self, record: Record, tick: str) -> MergeOutcome:
        """
        Merge a parsed record into the store.

        A new key is inserted with its tag replaced by ``tick``. For an
        existing key only the confidence fields are overwritten, and only
        when the new confidence is strictly greater; the stored data and
        tag fields always keep their first-insertion values.

        Args:
            record: Freshly parsed record
            tick: Current tick tag of the main file header

        Returns:
            INSERTED, UPDATED or KEPT
        """
        existing = self._records.get(record.key)

        if existing is None:
            record.tag_field = tick
            self._records[record.key] = record
            return MergeOutcome.INSERTED

        if record.confidence > existing.confidence:
            existing.confidence = record.confidence
            existing.confidence_field = record.confidence_field
            return MergeOutcome.UPDATED

        return MergeOutcome.KEPT


def merge_line(header: "Header", line: str, store: MergeStore) -> MergeOutcome:
    """
    Parse a line and merge it into the store.

    This is the single merge rule for the main file and every additional
    input file alike.
    """
    if is_ignorable(line):
        return MergeOutcome.SKIPPED

    record = parse_record(line)
    if record is None:
        return MergeOutcome.REJECTED

    return store.upsert(record, header.tick)
