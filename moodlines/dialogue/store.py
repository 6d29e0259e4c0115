from __future__ import annotations
from pathlib import Path
from random import Random
from typing import Callable, List, Optional, Tuple

from moodlines.core.errors import FileWriteError, KeyNotFoundError
from moodlines.core.logging import logger
from .loader import DELIMITER, FULL_WIDTH, VIEWS_COLUMN, LoadedDataset, load_dataset, parse_dataset
from .types import DialogueEntry, EntityMoodKey, Row

LINE_TERMINATOR = "\n"

IndexPicker = Callable[[int], int]

class DialogueStore:
    """
    Holds a loaded dataset, answers random draws per (entity, mood) and
    writes view counts back into the source file.

    Not thread-safe: a draw reads a bucket and bumps a counter, and save
    patches the shared row table. Callers on several threads must serialize
    both behind one lock.
    """
    def __init__(self, data: LoadedDataset, path: Optional[Path] = None,
                 next_index: Optional[IndexPicker] = None):
        self.data = data
        self.path = Path(path) if path is not None else None
        self.next_index: IndexPicker = next_index or Random().randrange

    @classmethod
    def from_text(cls, text: str, *, path: Optional[Path] = None,
                  next_index: Optional[IndexPicker] = None,
                  skip_malformed: bool = False) -> "DialogueStore":
        return cls(parse_dataset(text, skip_malformed=skip_malformed), path, next_index)

    @classmethod
    def open(cls, path: Path, *, next_index: Optional[IndexPicker] = None,
             skip_malformed: bool = False) -> "DialogueStore":
        return cls(load_dataset(path, skip_malformed=skip_malformed), path, next_index)

    @property
    def rows(self) -> List[Row]:
        return self.data.rows

    def bucket(self, key: EntityMoodKey) -> Tuple[DialogueEntry, ...]:
        try:
            return tuple(self.data.index[key])
        except KeyError:
            raise KeyNotFoundError(key) from None

    def get_dialogue(self, key: EntityMoodKey) -> str:
        """Pick a random line for ``key``, count the view and return "<views>. <text>"."""
        entries = self.data.index.get(key)
        if not entries:
            raise KeyNotFoundError(key)
        entry = entries[self.next_index(len(entries))]
        entry.views += 1
        logger.debug("DialogueDrawn", key=key, row=entry.origin_row, views=entry.views)
        return entry.formatted()

    # --- Persistence ---
    def apply_views(self) -> List[Row]:
        """Copy every entry's view count into column 3 of its origin row."""
        rows = self.data.rows
        seen: set[int] = set()
        for key in self.data.key_order:
            for entry in self.data.index[key]:
                i = entry.origin_row
                assert i not in seen, f"row {i} claimed by more than one entry"
                seen.add(i)
                row = rows[i]
                if len(row) < FULL_WIDTH:
                    row = row + [""] * (FULL_WIDTH - len(row))
                    rows[i] = row
                row[VIEWS_COLUMN] = str(entry.views)
        return rows

    def dump(self) -> str:
        rows = self.apply_views()
        return "".join(DELIMITER.join(row) + LINE_TERMINATOR for row in rows)

    def save(self, path: Optional[Path] = None) -> Path:
        """Overwrite the dataset file with the current rows and view counts.

        Safe to repeat; the in-memory state is untouched by a failed write,
        so a save can be retried.
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("DialogueStore has no file path to save to")
        text = self.dump()
        try:
            with target.open("w", encoding="utf-8", newline="") as fh:
                fh.write(text)
        except OSError as e:
            logger.error("DatasetSaveFailed", path=str(target), error=str(e))
            raise FileWriteError(str(target), str(e)) from e
        logger.info("DatasetSaved", path=str(target), rows=len(self.data.rows))
        return target
