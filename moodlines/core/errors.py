"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class MoodlinesError(Exception):
    pass

class FileReadError(MoodlinesError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to read {path}: {detail}")
        self.path = path
        self.detail = detail

class FileWriteError(MoodlinesError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to write {path}: {detail}")
        self.path = path
        self.detail = detail

class KeyNotFoundError(MoodlinesError, KeyError):
    def __init__(self, key):
        super().__init__(f"No dialogue for {key}")
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]

class MalformedRowError(MoodlinesError, ValueError):
    def __init__(self, row: int, column: int, value: str, detail: str = "not an integer"):
        super().__init__(f"Row {row} column {column}: {value!r} is {detail}")
        self.row = row
        self.column = column
        self.value = value
        self.detail = detail

class DialogueStateError(MoodlinesError):
    pass
