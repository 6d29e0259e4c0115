"""Dialogue dataset loader.

A dataset is a headerless comma-separated file, one dialogue line per row:

    <entity id>,<mood>,<text>[,<views>]

There is no quoting, so text containing a comma cannot be represented. Rows
are kept verbatim in a row table so that saving can write back every cell,
including rows that were skipped while indexing.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from moodlines.core.errors import FileReadError, MalformedRowError
from moodlines.core.logging import logger
from .types import DialogueEntry, DialogueIndex, EntityMoodKey, Mood, Row

DELIMITER = ","
ID_COLUMN, MOOD_COLUMN, TEXT_COLUMN, VIEWS_COLUMN = 0, 1, 2, 3
MIN_WIDTH = 3
FULL_WIDTH = 4

@dataclass
class LoadedDataset:
    rows: List[Row] = field(default_factory=list)
    index: DialogueIndex = field(default_factory=dict)
    key_order: List[EntityMoodKey] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)

    def entry_count(self) -> int:
        return sum(len(bucket) for bucket in self.index.values())

LINE_BREAK = re.compile(r"\r\n|\r|\n")
INTEGER = re.compile(r"[+-]?[0-9]+")

def split_rows(text: str) -> List[Row]:
    # Only CR, LF and CRLF end a line; other separators belong to the text
    if not text:
        return []
    lines = LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return [line.split(DELIMITER) for line in lines]

def _parse_int(row_index: int, column: int, cell: str, *, minimum: int | None = None) -> int:
    digits = cell.strip()
    if not INTEGER.fullmatch(digits):
        raise MalformedRowError(row_index, column, cell)
    value = int(digits)
    if minimum is not None and value < minimum:
        raise MalformedRowError(row_index, column, cell, f"below {minimum}")
    return value

def parse_row(row_index: int, row: Row) -> DialogueEntry | None:
    """Turn one row into an entry, or None if the row carries no dialogue."""
    if row[ID_COLUMN] == "":
        return None
    if len(row) < MIN_WIDTH:
        logger.warn("DialogueRowTooShort", row=row_index, cells=len(row))
        return None
    entity_id = _parse_int(row_index, ID_COLUMN, row[ID_COLUMN])
    mood = Mood.from_label(row[MOOD_COLUMN])
    views = 0
    if len(row) >= FULL_WIDTH:
        views = _parse_int(row_index, VIEWS_COLUMN, row[VIEWS_COLUMN], minimum=0)
    key = EntityMoodKey(entity_id, mood)
    return DialogueEntry(key=key, text=row[TEXT_COLUMN], mood=mood, origin_row=row_index, views=views)

def parse_dataset(text: str, *, skip_malformed: bool = False) -> LoadedDataset:
    """Build the row table, the (entity, mood) index and first-seen key order.

    Malformed numeric cells abort the whole parse unless ``skip_malformed``
    is set, in which case the row is left out of the index but kept in the
    row table.
    """
    data = LoadedDataset(rows=split_rows(text))
    for i, row in enumerate(data.rows):
        try:
            entry = parse_row(i, row)
        except MalformedRowError as e:
            if not skip_malformed:
                raise
            logger.warn("DialogueRowSkipped", row=i, column=e.column, value=e.value)
            data.skipped.append(i)
            continue
        if entry is None:
            logger.debug("DialogueRowIgnored", row=i)
            data.skipped.append(i)
            continue
        bucket = data.index.get(entry.key)
        if bucket is None:
            bucket = data.index[entry.key] = []
            data.key_order.append(entry.key)
        bucket.append(entry)
    return data

def read_dataset_text(path: Path) -> str:
    try:
        # utf-8-sig drops a leading BOM that would otherwise stick to the first id
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("DatasetReadFailed", path=str(path), error=str(e))
        raise FileReadError(str(path), str(e)) from e

def load_dataset(path: Path, *, skip_malformed: bool = False) -> LoadedDataset:
    text = read_dataset_text(path)
    try:
        data = parse_dataset(text, skip_malformed=skip_malformed)
    except MalformedRowError as e:
        logger.error("DatasetParseFailed", path=str(path), row=e.row, column=e.column, value=e.value)
        raise
    logger.info("DatasetLoaded", path=str(path), rows=len(data.rows),
                keys=len(data.key_order), entries=data.entry_count())
    return data

# Simple CLI for debugging
if __name__ == "__main__":
    import sys
    if len(sys.argv) == 2:
        loaded = load_dataset(Path(sys.argv[1]))
        for k in loaded.key_order:
            print(k, [e.formatted() for e in loaded.index[k]])
    else:
        print("usage: python -m moodlines.dialogue.loader <dataset.csv>")
