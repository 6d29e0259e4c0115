from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

Row = List[str]

class Mood(Enum):
    HAPPY = "Happy"
    SAD = "Sad"
    ANGRY = "Angry"

    @classmethod
    def from_label(cls, label: str) -> "Mood":
        """Happy and Sad match exactly; every other label falls back to Angry."""
        if label == cls.HAPPY.value:
            return cls.HAPPY
        if label == cls.SAD.value:
            return cls.SAD
        return cls.ANGRY

@dataclass(frozen=True)
class EntityMoodKey:
    entity_id: int
    mood: Mood

    def __str__(self) -> str:
        return f"{self.entity_id}/{self.mood.value}"

@dataclass
class DialogueEntry:
    key: EntityMoodKey
    text: str
    mood: Mood
    origin_row: int  # index into the row table, fixed at load
    views: int = 0

    def formatted(self) -> str:
        return f"{self.views}. {self.text}"

DialogueIndex = Dict[EntityMoodKey, List[DialogueEntry]]
