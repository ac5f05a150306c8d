import json

import pytest

from keyhint import settings as settings_module
from keyhint.commontypes import SettingsError
from keyhint.device.hwtypes import KeyState
from keyhint.device.keyboard_consts import KeyCode
from keyhint.editor.keybindings import ChooseModifier, KeyBinding
from keyhint.settings import Settings, load_settings, settings_sources


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv(settings_module.SETTINGS_ENV_VAR, raising=False)


def test_for_test_defaults():
    settings = Settings.for_test()
    assert settings.compose_key is KeyCode.KEY_RIGHTMETA
    assert settings.hint_trigger == [KeyBinding(key=KeyCode.KEY_H, states=KeyState.CTRL | KeyState.ALT)]
    assert settings.choose_modifier is ChooseModifier.ALT
    assert settings.page_size == 5
    assert settings.max_buffer == 20
    assert settings.keymaps[KeyCode.KEY_A] == ["a", "A"]
    assert settings.compose_sequences[("'", "e")] == "é"
    assert settings.dictionary_path is None


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    settings = Settings.for_test(page_size=7, choose_modifier="super", dictionary_path=str(tmp_path))
    settings.save(path)
    raw = json.loads(path.read_text())
    assert raw["hint_trigger"] == ["Control+Alt+H"]
    assert raw["compose_key"] == "KEY_RIGHTMETA"
    loaded = Settings.load(path)
    assert loaded.page_size == 7
    assert loaded.choose_modifier is ChooseModifier.SUPER
    assert loaded.dictionary_path == tmp_path
    assert loaded.compose_sequences[("a", "e")] == "æ"


def test_partial_file_gets_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"max_buffer": 8, "hint_trigger": ["Super+space"]}))
    loaded = Settings.load(path)
    assert loaded.max_buffer == 8
    assert loaded.hint_trigger == [KeyBinding(key=KeyCode.KEY_SPACE, states=KeyState.SUPER)]
    assert loaded.page_size == 5


def test_sources_are_ordered(tmp_path, monkeypatch):
    explicit = tmp_path / "explicit.json"
    explicit.write_text(json.dumps({"page_size": 1}))
    env_file = tmp_path / "env.json"
    env_file.write_text(json.dumps({"page_size": 2}))
    user_file = tmp_path / "xdg" / "keyhint" / "settings.json"
    user_file.parent.mkdir(parents=True)
    user_file.write_text(json.dumps({"page_size": 3}))
    monkeypatch.setenv(settings_module.SETTINGS_ENV_VAR, str(env_file))

    assert len(settings_sources(explicit)) == 4
    assert load_settings(explicit).page_size == 1
    assert load_settings(tmp_path / "missing.json").page_size == 2
    monkeypatch.delenv(settings_module.SETTINGS_ENV_VAR)
    assert load_settings().page_size == 3
    user_file.unlink()
    assert load_settings().page_size == 5


def test_broken_source_falls_through(tmp_path, caplog):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    bad_binding = tmp_path / "bad_binding.json"
    bad_binding.write_text(json.dumps({"hint_trigger": ["Hyper+H"]}))
    assert load_settings(broken).page_size == 5
    assert load_settings(bad_binding).hint_trigger == Settings.builtin().hint_trigger
    assert "Could not load settings" in caplog.text


@pytest.mark.parametrize("content", ('["not", "an", "object"]', '"x"', "null"))
def test_non_object_source_falls_through(tmp_path, caplog, content):
    not_an_object = tmp_path / "list.json"
    not_an_object.write_text(content)
    with pytest.raises(SettingsError):
        Settings.load(not_an_object)
    assert load_settings(not_an_object).page_size == 5
    assert "Expected a JSON object" in caplog.text
