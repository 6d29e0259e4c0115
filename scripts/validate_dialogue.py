"""Validation script for dialogue CSV datasets.

Checks performed:
- Every row parses with the runtime loader (integer ids and view counts).
- Rows with an id but fewer than three cells are reported.
- Rows wider than four cells are reported (extra cells survive a save but
  are never read).
- Mood labels other than Happy/Sad/Angry are reported (they load as Angry).
- Empty dialogue text and duplicate text within one (entity, mood) bucket.

A per-bucket summary table is printed afterwards.

Exit codes:
0 = success (no violations)
1 = violations found

Usage (from repo root):
  python -m scripts.validate_dialogue [path/to/dataset.csv]
"""
from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from moodlines.core.errors import FileReadError, MalformedRowError
from moodlines.core.paths import sample_dataset
from moodlines.dialogue.loader import (FULL_WIDTH, ID_COLUMN, MIN_WIDTH, MOOD_COLUMN,
                                       LoadedDataset, parse_row, read_dataset_text, split_rows)
from moodlines.dialogue.types import Mood

KNOWN_MOODS = {m.value for m in Mood}


def collect_violations(text: str) -> tuple[List[str], LoadedDataset]:
    violations: List[str] = []
    data = LoadedDataset(rows=split_rows(text))
    for i, row in enumerate(data.rows):
        if row[ID_COLUMN] == "":
            continue
        if len(row) < MIN_WIDTH:
            violations.append(f"Row {i} has an id but only {len(row)} cell(s)")
            continue
        if len(row) > FULL_WIDTH:
            violations.append(f"Row {i} has {len(row)} cells (text may contain a comma)")
        if row[MOOD_COLUMN] not in KNOWN_MOODS:
            violations.append(f"Row {i} mood {row[MOOD_COLUMN]!r} is unknown and loads as Angry")
        try:
            entry = parse_row(i, row)
        except MalformedRowError as e:
            violations.append(str(e))
            continue
        if not entry.text.strip():
            violations.append(f"Row {i} has empty dialogue text")
        if entry.key not in data.index:
            data.index[entry.key] = []
            data.key_order.append(entry.key)
        data.index[entry.key].append(entry)

    for key in data.key_order:
        counts = Counter(e.text for e in data.index[key])
        for dup, n in counts.items():
            if n > 1:
                violations.append(f"Bucket {key} repeats {dup!r} {n} times")
    return violations, data


def summary_table(data: LoadedDataset) -> Table:
    table = Table(title="Dialogue buckets")
    table.add_column("Entity", justify="right")
    table.add_column("Mood")
    table.add_column("Lines", justify="right")
    table.add_column("Views", justify="right")
    for key in data.key_order:
        bucket = data.index[key]
        table.add_row(str(key.entity_id), key.mood.value, str(len(bucket)),
                      str(sum(e.views for e in bucket)))
    return table


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = argparse.ArgumentParser(description="Validate a dialogue CSV dataset")
    parser.add_argument("path", nargs="?", type=Path, default=sample_dataset())
    args = parser.parse_args(argv)
    console = console or Console()

    try:
        text = read_dataset_text(args.path)
    except FileReadError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    violations, data = collect_violations(text)

    if violations:
        console.print("[bold red]Dialogue validation FAILED:[/bold red]\n")
        for v in violations:
            console.print(" -", v, markup=False)
    else:
        console.print("[bold green]Dialogue validation passed.[/bold green]")
    console.print(summary_table(data))
    console.print(f"Rows scanned: {len(data.rows)}")
    return 1 if violations else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
