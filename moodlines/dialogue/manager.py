from __future__ import annotations
import shutil
from pathlib import Path
from typing import Optional, Union

from moodlines.core.errors import DialogueStateError
from moodlines.core.logging import logger
from moodlines.core.paths import DEFAULT_DATASET, dataset_path, sample_dataset
from moodlines.system.settings import Settings
from .store import DialogueStore, IndexPicker
from .types import EntityMoodKey, Mood

class DialogueManager:
    """
    Host-facing entry point: load a named dataset once, serve mood-aware
    draws during the session, persist view counts on shutdown.

    Lifecycle is unloaded -> loaded -> saved. Draws are only allowed while
    loaded; the first successful shutdown ends the session.
    """
    def __init__(self, settings: Settings, next_index: Optional[IndexPicker] = None):
        self.settings = settings
        self.next_index = next_index
        self.store: Optional[DialogueStore] = None
        self.saved = False
        settings.apply_log_level()

    @property
    def loaded(self) -> bool:
        return self.store is not None and not self.saved

    def resolve(self, dataset_name: str = DEFAULT_DATASET) -> Path:
        return dataset_path(dataset_name, self.settings.data.data_dir or None)

    def install_sample(self, dataset_name: str = DEFAULT_DATASET) -> Path:
        """Copy the bundled sample dataset into the data dir unless one exists."""
        target = self.resolve(dataset_name)
        if not target.exists():
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(sample_dataset(), target)
            logger.info("SampleDatasetInstalled", path=str(target))
        return target

    def initialize(self, dataset_name: str = DEFAULT_DATASET) -> None:
        if self.store is not None:
            raise DialogueStateError("Dialogue dataset already initialized")
        path = self.resolve(dataset_name)
        self.store = DialogueStore.open(
            path,
            next_index=self.next_index,
            skip_malformed=self.settings.data.skip_malformed_rows,
        )

    def get_dialogue(self, entity_id: int, mood: Union[Mood, str]) -> str:
        if self.store is None:
            raise DialogueStateError("Dialogue dataset not initialized")
        if self.saved:
            raise DialogueStateError("Dialogue session already shut down")
        if not isinstance(mood, Mood):
            mood = Mood.from_label(mood)
        return self.store.get_dialogue(EntityMoodKey(entity_id, mood))

    def shutdown(self) -> None:
        if self.store is None:
            raise DialogueStateError("Dialogue dataset not initialized")
        if self.saved:
            logger.debug("DialogueShutdownRepeated", path=str(self.store.path))
            return
        self.store.save()
        self.saved = True
