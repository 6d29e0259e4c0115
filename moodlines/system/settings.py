from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List
from moodlines.core.logging import logger

SETTINGS_FILENAME = ".moodlines_settings.json"
LOG_LEVELS = {"DEBUG","INFO","WARN","ERROR"}

@dataclass
class SettingsData:
    log_level: str = "INFO"            # DEBUG / INFO / WARN / ERROR
    data_dir: str = ""                 # empty -> ~/.moodlines
    skip_malformed_rows: bool = False  # skip bad numeric rows instead of aborting the load
    debug: bool = False                # log every dialogue draw

    def normalize(self):
        if self.log_level not in LOG_LEVELS:
            self.log_level = "INFO"
        if not isinstance(self.data_dir, str):
            self.data_dir = ""
        self.skip_malformed_rows = bool(self.skip_malformed_rows)
        self.debug = bool(self.debug)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", path=str(self.path), error=str(e))

    def apply_log_level(self):
        logger.set_level("DEBUG" if self.data.debug else self.data.log_level)

    def update(self, **changes):
        """Apply field changes, normalize, persist and notify listeners."""
        for name, value in changes.items():
            if not hasattr(self.data, name):
                raise AttributeError(f"Unknown setting: {name}")
            setattr(self.data, name, value)
        self.data.normalize()
        self.apply_log_level()
        self.save()
        self._notify()

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)
