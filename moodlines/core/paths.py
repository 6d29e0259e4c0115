"""
Centralized path helpers: bundled assets and per-user dataset location.
"""
from __future__ import annotations
import os
from pathlib import Path

# This file lives at moodlines/core/paths.py
ROOT = Path(__file__).resolve().parents[2]   # project root (one up from 'moodlines')
ASSETS = ROOT / "assets"
DIALOGUE_ASSETS = ASSETS / "dialogue"

DATA_DIR_NAME = ".moodlines"
DATASET_SUFFIX = ".csv"
DEFAULT_DATASET = "NPCDialogue"

def default_data_dir() -> Path:
    home = Path(os.path.expanduser("~"))
    path = home / DATA_DIR_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path

def dataset_path(name: str, data_dir: str | Path | None = None) -> Path:
    """Map a logical dataset name to its CSV file inside the data directory."""
    base = Path(data_dir) if data_dir else default_data_dir()
    filename = name if name.endswith(DATASET_SUFFIX) else name + DATASET_SUFFIX
    return base / filename

def sample_dataset(name: str = DEFAULT_DATASET) -> Path:
    return DIALOGUE_ASSETS / (name + DATASET_SUFFIX)
