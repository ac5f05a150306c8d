# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import enum
import typing

import msgspec

from ..commontypes import SettingsError
from ..device.hwtypes import KeyState
from ..device.keyboard_consts import DIGIT_KEYS, KeyCode

if typing.TYPE_CHECKING:
    from ..device.hwtypes import AnnotatedKeyEvent

MODIFIER_NAMES = {
    "shift": KeyState.SHIFT,
    "control": KeyState.CTRL,
    "ctrl": KeyState.CTRL,
    "alt": KeyState.ALT,
    "super": KeyState.SUPER,
    "meta": KeyState.SUPER,
}

# Keysym-style names people write in config files, for keys whose KeyCode name differs.
KEY_NAMES = {
    "minus": KeyCode.KEY_MINUS,
    "apostrophe": KeyCode.KEY_APOSTROPHE,
    "equal": KeyCode.KEY_EQUAL,
    "grave": KeyCode.KEY_GRAVE,
    "comma": KeyCode.KEY_COMMA,
    "period": KeyCode.KEY_DOT,
    "slash": KeyCode.KEY_SLASH,
    "semicolon": KeyCode.KEY_SEMICOLON,
    "backslash": KeyCode.KEY_BACKSLASH,
    "bracketleft": KeyCode.KEY_LEFTBRACE,
    "bracketright": KeyCode.KEY_RIGHTBRACE,
    "space": KeyCode.KEY_SPACE,
    "backspace": KeyCode.KEY_BACKSPACE,
    "return": KeyCode.KEY_ENTER,
    "tab": KeyCode.KEY_TAB,
    "escape": KeyCode.KEY_ESC,
    "delete": KeyCode.KEY_DELETE,
    "multi_key": KeyCode.KEY_COMPOSE,
}

STATE_DISPLAY_ORDER = (
    ("Control", KeyState.CTRL),
    ("Alt", KeyState.ALT),
    ("Shift", KeyState.SHIFT),
    ("Super", KeyState.SUPER),
)


def parse_key_name(name: str) -> KeyCode:
    lowered = name.lower()
    if lowered in KEY_NAMES:
        return KEY_NAMES[lowered]
    candidate = name.upper()
    if not candidate.startswith("KEY_"):
        candidate = "KEY_" + candidate
    try:
        return KeyCode[candidate]
    except KeyError:
        raise SettingsError(f"Unknown key name {name!r}") from None


class KeyBinding(msgspec.Struct, frozen=True):
    key: KeyCode
    states: KeyState = KeyState.NONE

    @classmethod
    def parse(cls, text: str):
        "Parse a binding such as 'Control+Alt+H'; everything before the last '+' is a modifier."
        parts = text.strip().split("+")
        *modifiers, key_name = parts
        if not key_name:
            raise SettingsError(f"Missing key in binding {text!r}")
        states = KeyState.NONE
        for modifier in modifiers:
            try:
                states |= MODIFIER_NAMES[modifier.strip().lower()]
            except KeyError:
                raise SettingsError(f"Unknown modifier {modifier!r} in binding {text!r}") from None
        return cls(key=parse_key_name(key_name.strip()), states=states)

    def __str__(self):
        names = [name for name, state in STATE_DISPLAY_ORDER if state in self.states]
        names.append(self.key.name.removeprefix("KEY_"))
        return "+".join(names)

    def matches(self, event: AnnotatedKeyEvent) -> bool:
        return event.key is self.key and event.states == self.states


def parse_key_list(text: str) -> tuple[KeyBinding, ...]:
    "Whitespace-separated bindings, e.g. 'minus apostrophe'."
    return tuple(KeyBinding.parse(part) for part in text.split())


def key_list_index(bindings: collections.abc.Sequence[KeyBinding], event: AnnotatedKeyEvent) -> int:
    for index, binding in enumerate(bindings):
        if binding.matches(event):
            return index
    return -1


def check_key_list(bindings: collections.abc.Sequence[KeyBinding], event: AnnotatedKeyEvent) -> bool:
    return key_list_index(bindings, event) >= 0


HYPHEN_APOSTROPHE = parse_key_list("minus apostrophe")


@enum.unique
class ChooseModifier(enum.Enum):
    NONE = "none"
    ALT = "alt"
    CONTROL = "control"
    SUPER = "super"

    @property
    def states(self) -> KeyState:
        match self:
            case ChooseModifier.ALT:
                return KeyState.ALT
            case ChooseModifier.CONTROL:
                return KeyState.CTRL
            case ChooseModifier.SUPER:
                return KeyState.SUPER
            case _:
                return KeyState.NONE


class SelectionKeys(msgspec.Struct, frozen=True):
    bindings: tuple[KeyBinding, ...]

    @classmethod
    def for_modifier(cls, modifier: ChooseModifier):
        return cls(bindings=tuple(KeyBinding(key=key, states=modifier.states) for key in DIGIT_KEYS))

    def __len__(self):
        return len(self.bindings)

    def index(self, event: AnnotatedKeyEvent) -> int:
        return key_list_index(self.bindings, event)
