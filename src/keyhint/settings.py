import collections.abc
import dataclasses
import json
import logging
import operator
import os
import pathlib
import typing

import cattrs
import cattrs.gen
import pygtrie

from .commontypes import KeyHintError, SettingsError
from .device.keyboard_consts import KeyCode
from .editor.keybindings import ChooseModifier, KeyBinding

logger = logging.getLogger(__name__)

COMPOSE_SEQUENCES = {
    "< <": "«",
    "> >": "»",
    "' '": "ʼ",
    ". .": "…",
    "- - -": "—",
    "- - .": "–",
    "! !": "¡",
    "? ?": "¿",
    "A E": "Æ",
    "a e": "æ",
    "O E": "Œ",
    "o e": "œ",
    "s s": "ß",
    "` A": "À",
    "' A": "Á",
    "^ A": "Â",
    '" A': "Ä",
    "` a": "à",
    "' a": "á",
    "^ a": "â",
    '" a': "ä",
    ", C": "Ç",
    ", c": "ç",
    "` E": "È",
    "' E": "É",
    "^ E": "Ê",
    "` e": "è",
    "' e": "é",
    "^ e": "ê",
    '" e': "ë",
    "' I": "Í",
    "' i": "í",
    "^ i": "î",
    '" i': "ï",
    "~ N": "Ñ",
    "~ n": "ñ",
    "' O": "Ó",
    "' o": "ó",
    "^ o": "ô",
    '" O': "Ö",
    '" o': "ö",
    "` U": "Ù",
    "' U": "Ú",
    "` u": "ù",
    "' u": "ú",
    "^ u": "û",
    '" U': "Ü",
    '" u': "ü",
    "' y": "ý",
    '" y': "ÿ",
}

KEYMAPS = {
    "KEY_GRAVE": ["`", "~"],
    "KEY_1": ["1", "!"],
    "KEY_2": ["2", "@"],
    "KEY_3": ["3", "#"],
    "KEY_4": ["4", "$"],
    "KEY_5": ["5", "%"],
    "KEY_6": ["6", "^"],
    "KEY_7": ["7", "&"],
    "KEY_8": ["8", "*"],
    "KEY_9": ["9", "("],
    "KEY_0": ["0", ")"],
    "KEY_MINUS": ["-", "_"],
    "KEY_EQUAL": ["=", "+"],
    "KEY_Q": ["q", "Q"],
    "KEY_W": ["w", "W"],
    "KEY_E": ["e", "E"],
    "KEY_R": ["r", "R"],
    "KEY_T": ["t", "T"],
    "KEY_Y": ["y", "Y"],
    "KEY_U": ["u", "U"],
    "KEY_I": ["i", "I"],
    "KEY_O": ["o", "O"],
    "KEY_P": ["p", "P"],
    "KEY_LEFTBRACE": ["[", "{"],
    "KEY_RIGHTBRACE": ["]", "}"],
    "KEY_BACKSLASH": ["\\", "|"],
    "KEY_A": ["a", "A"],
    "KEY_S": ["s", "S"],
    "KEY_D": ["d", "D"],
    "KEY_F": ["f", "F"],
    "KEY_G": ["g", "G"],
    "KEY_H": ["h", "H"],
    "KEY_J": ["j", "J"],
    "KEY_K": ["k", "K"],
    "KEY_L": ["l", "L"],
    "KEY_SEMICOLON": [";", ":"],
    "KEY_APOSTROPHE": ["'", '"'],
    "KEY_Z": ["z", "Z"],
    "KEY_X": ["x", "X"],
    "KEY_C": ["c", "C"],
    "KEY_V": ["v", "V"],
    "KEY_B": ["b", "B"],
    "KEY_N": ["n", "N"],
    "KEY_M": ["m", "M"],
    "KEY_COMMA": [",", "<"],
    "KEY_DOT": [".", ">"],
    "KEY_SLASH": ["/", "?"],
    "KEY_SPACE": [" ", " "],
}

COMPOSE_KEY = "KEY_RIGHTMETA"
HINT_TRIGGER = ["Control+Alt+H"]
CHOOSE_MODIFIER = "alt"
PAGE_SIZE = 5
MAX_BUFFER = 20
DEFAULT_LANGUAGE = "en"

SETTINGS_ENV_VAR = "KEYHINT_SETTINGS"


settings_converter = cattrs.Converter()


def unstructure_trie(t: pygtrie.Trie):
    return {" ".join(k): v for k, v in t.items()}


def structure_trie(d: dict, typ: type[pygtrie.Trie]):
    return pygtrie.Trie({tuple(k.split()): v for k, v in d.items()})


settings_converter.register_unstructure_hook(pygtrie.Trie, unstructure_trie)
settings_converter.register_structure_hook(pygtrie.Trie, structure_trie)
settings_converter.register_unstructure_hook(KeyCode, operator.attrgetter("name"))
settings_converter.register_structure_hook(KeyCode, lambda v, _: KeyCode[v])
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))
settings_converter.register_unstructure_hook(KeyBinding, str)
settings_converter.register_structure_hook(KeyBinding, lambda v, _: KeyBinding.parse(v))


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: typing.Optional[pathlib.Path]
    compose_key: KeyCode
    compose_sequences: pygtrie.Trie
    keymaps: dict[KeyCode, list[str]]
    hint_trigger: list[KeyBinding]
    choose_modifier: ChooseModifier
    page_size: int
    max_buffer: int
    default_language: str
    enable_word_hint: bool
    dictionary_path: typing.Optional[pathlib.Path] = None

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w", encoding="utf-8") as out:
            json.dump(raw, out, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open(encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise SettingsError(f"Expected a JSON object in {src}, got {type(raw).__name__}")
        raw["_path"] = src
        for key, value in cls.defaults().items():
            raw.setdefault(key, value)
        return settings_converter.structure(raw, cls)

    @staticmethod
    def defaults():
        return {
            "compose_key": COMPOSE_KEY,
            "compose_sequences": COMPOSE_SEQUENCES,
            "keymaps": KEYMAPS,
            "hint_trigger": HINT_TRIGGER,
            "choose_modifier": CHOOSE_MODIFIER,
            "page_size": PAGE_SIZE,
            "max_buffer": MAX_BUFFER,
            "default_language": DEFAULT_LANGUAGE,
            "enable_word_hint": False,
        }

    @classmethod
    def builtin(cls):
        return settings_converter.structure({"_path": None, **cls.defaults()}, cls)

    @classmethod
    def for_test(cls, **overrides):
        raw = {"_path": "test.settings.json", **cls.defaults()}
        raw.update(overrides)
        return settings_converter.structure(raw, cls)


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))

SettingsSource = collections.abc.Callable[[], typing.Optional[Settings]]


def file_source(path: typing.Optional[pathlib.Path]) -> SettingsSource:
    def load() -> typing.Optional[Settings]:
        if path is None or not path.is_file():
            return None
        try:
            return Settings.load(path)
        except (OSError, ValueError, KeyHintError, cattrs.BaseValidationError) as exc:
            logger.warning("Could not load settings from %s: %s", path, exc)
            return None

    return load


def user_config_path() -> pathlib.Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or pathlib.Path.home() / ".config"
    return pathlib.Path(config_home) / "keyhint" / "settings.json"


def settings_sources(explicit: typing.Optional[pathlib.Path] = None) -> list[SettingsSource]:
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    return [
        file_source(explicit),
        file_source(pathlib.Path(env_path) if env_path else None),
        file_source(user_config_path()),
        Settings.builtin,
    ]


def load_settings(explicit: typing.Optional[pathlib.Path] = None) -> Settings:
    for source in settings_sources(explicit):
        settings = source()
        if settings is not None:
            logger.info("Using settings from %s", settings._path or "built-in defaults")
            return settings
    raise KeyHintError("No settings source succeeded")
