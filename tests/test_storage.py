import json

import pygame
import pytest

import main
import storage


def test_missing_file_loads_none(tmp_path):
    assert storage.load_state(tmp_path / "save.json") is None
    assert storage.load_top_score(tmp_path / "save.json") == 0


def test_top_score_persists(tmp_path):
    path = tmp_path / "save.json"
    storage.save_top_score(17, path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"top_score": 17}
    assert storage.load_top_score(path) == 17


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(storage.StorageError):
        storage.load_state(path)


@pytest.mark.parametrize("content", ["[1, 2]", '{"top_score": -3}', '{"top_score": "many"}'])
def test_bad_contents_raise(tmp_path, content):
    path = tmp_path / "save.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(storage.StorageError):
        storage.load_top_score(path)


def test_host_falls_back_to_zero_on_bad_save(tmp_path, caplog):
    path = tmp_path / "save.json"
    path.write_text("{not json", encoding="utf-8")
    assert main.load_top_score(path) == 0
    assert "ignoring save file" in caplog.text


def test_parse_args_defaults():
    args = main.parse_args([])
    assert args.fps == 30
    assert args.save_path == storage.SAVE_PATH
    assert args.seed is None


def test_key_events_map_to_inputs():
    down = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
    up = pygame.event.Event(pygame.KEYUP, key=pygame.K_LEFT)
    enter = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN)
    other = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)
    assert main.input_for_event(down) == "thrust-on"
    assert main.input_for_event(up) == "rotate-left-off"
    assert main.input_for_event(enter) == "start"
    assert main.input_for_event(other) is None
