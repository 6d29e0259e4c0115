import pytest

from moodlines.core.errors import DialogueStateError, FileReadError, KeyNotFoundError, MalformedRowError
from moodlines.dialogue.manager import DialogueManager
from moodlines.dialogue.types import Mood
from moodlines.system.settings import Settings, SettingsData


def make_manager(tmp_path, **overrides):
    data = SettingsData(data_dir=str(tmp_path), **overrides)
    settings = Settings(data, tmp_path / "settings.json")
    return DialogueManager(settings, next_index=lambda bound: 0)


def test_full_session(tmp_path):
    (tmp_path / "NPCDialogue.csv").write_text("1,Happy,Hello there\n2,Sad,Oh no,5\n")
    mgr = make_manager(tmp_path)
    mgr.initialize("NPCDialogue")
    assert mgr.loaded
    assert mgr.get_dialogue(2, Mood.SAD) == "6. Oh no"
    assert mgr.get_dialogue(1, "Happy") == "1. Hello there"
    mgr.shutdown()
    assert not mgr.loaded
    assert (tmp_path / "NPCDialogue.csv").read_text() == "1,Happy,Hello there,1\n2,Sad,Oh no,6\n"


def test_string_mood_uses_fallback(tmp_path):
    (tmp_path / "NPCDialogue.csv").write_text("3,Purple,Hmph\n")
    mgr = make_manager(tmp_path)
    mgr.initialize()
    assert mgr.get_dialogue(3, "Whatever") == "1. Hmph"
    with pytest.raises(KeyNotFoundError):
        mgr.get_dialogue(3, Mood.HAPPY)


def test_missing_dataset_fails_initialize(tmp_path):
    mgr = make_manager(tmp_path)
    with pytest.raises(FileReadError):
        mgr.initialize("absent")
    assert not mgr.loaded
    with pytest.raises(DialogueStateError):
        mgr.get_dialogue(1, Mood.HAPPY)


def test_lifecycle_guards(tmp_path):
    (tmp_path / "NPCDialogue.csv").write_text("1,Sad,meh\n")
    mgr = make_manager(tmp_path)
    with pytest.raises(DialogueStateError):
        mgr.shutdown()
    mgr.initialize()
    with pytest.raises(DialogueStateError):
        mgr.initialize()
    mgr.shutdown()
    with pytest.raises(DialogueStateError):
        mgr.get_dialogue(1, Mood.SAD)
    # repeated shutdown is a no-op
    (tmp_path / "NPCDialogue.csv").write_text("changed\n")
    mgr.shutdown()
    assert (tmp_path / "NPCDialogue.csv").read_text() == "changed\n"


def test_malformed_policy_from_settings(tmp_path):
    (tmp_path / "NPCDialogue.csv").write_text("x,Happy,bad\n1,Happy,good\n")
    strict = make_manager(tmp_path)
    with pytest.raises(MalformedRowError):
        strict.initialize()
    lenient = make_manager(tmp_path, skip_malformed_rows=True)
    lenient.initialize()
    assert lenient.get_dialogue(1, Mood.HAPPY) == "1. good"
    lenient.shutdown()
    assert (tmp_path / "NPCDialogue.csv").read_text() == "x,Happy,bad\n1,Happy,good,1\n"


def test_install_sample(tmp_path):
    mgr = make_manager(tmp_path)
    path = mgr.install_sample()
    assert path == tmp_path / "NPCDialogue.csv"
    assert path.exists()
    mgr.initialize()
    assert mgr.get_dialogue(2, Mood.HAPPY) == "4. Welcome to the shop!"
