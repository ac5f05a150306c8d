from __future__ import annotations

import enum
import typing

import msgspec

from .keyboard_consts import KeyCode, KeyPress


class KeyState(enum.Flag):
    NONE = 0
    SHIFT = enum.auto()
    CTRL = enum.auto()
    ALT = enum.auto()
    SUPER = enum.auto()


# Modifiers that change what a key does rather than which character it produces.
COMMAND_STATES = KeyState.CTRL | KeyState.ALT | KeyState.SUPER


class KeyEvent(msgspec.Struct, frozen=True):
    key: KeyCode
    press: KeyPress

    @classmethod
    def pressed(cls, key: KeyCode):
        return cls(key=key, press=KeyPress.PRESSED)

    @classmethod
    def released(cls, key: KeyCode):
        return cls(key=key, press=KeyPress.RELEASED)


class ModifierAnnotation(msgspec.Struct, frozen=True):
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    capslock: bool = False
    compose: bool = False

    @property
    def states(self) -> KeyState:
        states = KeyState.NONE
        if self.shift:
            states |= KeyState.SHIFT
        if self.ctrl:
            states |= KeyState.CTRL
        if self.alt:
            states |= KeyState.ALT
        if self.meta:
            states |= KeyState.SUPER
        return states


class AnnotatedKeyEvent(msgspec.Struct, frozen=True):
    key: KeyCode
    press: KeyPress
    annotation: ModifierAnnotation = msgspec.field(default_factory=ModifierAnnotation)
    character: typing.Optional[str] = None
    is_modifier: bool = False

    @property
    def is_release(self):
        return self.press is KeyPress.RELEASED

    @property
    def states(self) -> KeyState:
        return self.annotation.states

    @property
    def has_command_modifier(self):
        return bool(self.states & COMMAND_STATES)
