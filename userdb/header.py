"""
Main file header extraction.

The main file is scanned once from top to bottom. Comment lines build the
header block; every other line is merged into the store straight away,
stamped with the tick tag known at that point. Data lines that appear
before the ``#@/tick`` line therefore get an empty tag.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from loguru import logger

from userdb.config import COMMENT_MARKER, TICK_MARKER
from userdb.record import split_whitespace
from userdb.store import MergeOutcome, MergeStore, merge_line


@dataclass
class Header:
    """File-level metadata taken from the main file."""
    text: str = ""      # comment lines, each terminated by "\n"
    tick: str = ""      # "t=<value>" from the tick line, or empty

    def add_line(self, line: str) -> None:
        """Append a comment line and pick up the tick tag if it has one."""
        self.text += line + "\n"

        if line.startswith(TICK_MARKER):
            parts = split_whitespace(line)
            if len(parts) > 1:
                self.tick = f"t={parts[1]}"
                logger.debug(f"Tick tag set to {self.tick}")


def scan_main(
    lines: Iterable[str],
    store: MergeStore,
    on_outcome: Callable[[MergeOutcome], None] | None = None,
) -> Header:
    """
    Build the header and merge data lines in a single forward pass.

    Args:
        lines: Main file lines without line terminators
        store: Store to merge data lines into
        on_outcome: Optional callback receiving the outcome of every line

    Returns:
        The completed Header
    """
    header = Header()

    for line in lines:
        if line.startswith(COMMENT_MARKER):
            header.add_line(line)
            outcome = MergeOutcome.SKIPPED
        else:
            outcome = merge_line(header, line, store)

        if on_outcome:
            on_outcome(outcome)

    return header
