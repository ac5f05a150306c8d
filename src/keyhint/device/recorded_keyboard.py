# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import pathlib

import msgspec
import trio

from .hwtypes import KeyEvent
from .keyboard_consts import KeyCode, KeyPress


class RecordedKeyEvent(msgspec.Struct, frozen=True):
    key: str
    press: KeyPress
    delay: float = 0.0

    def to_key_event(self):
        return KeyEvent(key=KeyCode[self.key], press=self.press)

    @classmethod
    def from_key_event(cls, event: KeyEvent, delay: float = 0.0):
        return cls(key=event.key.name, press=event.press, delay=delay)


recording_decoder = msgspec.json.Decoder(list[RecordedKeyEvent])


def load_recording(path: pathlib.Path) -> list[RecordedKeyEvent]:
    return recording_decoder.decode(path.read_bytes())


def save_recording(events: collections.abc.Iterable[RecordedKeyEvent], path: pathlib.Path):
    path.write_bytes(msgspec.json.encode(list(events)))


def keystrokes(text: str) -> list[RecordedKeyEvent]:
    "Press and release for each key named in a whitespace-separated string such as 'KEY_C KEY_A'."
    events = []
    for name in text.split():
        events.append(RecordedKeyEvent(key=name, press=KeyPress.PRESSED))
        events.append(RecordedKeyEvent(key=name, press=KeyPress.RELEASED))
    return events


class Replayer:
    def __init__(self, events: collections.abc.Sequence[RecordedKeyEvent], *, realtime: bool = False):
        self.events = events
        self.realtime = realtime

    @classmethod
    def from_path(cls, path: pathlib.Path, *, realtime: bool = False):
        return cls(load_recording(path), realtime=realtime)

    async def keystream(self) -> collections.abc.AsyncIterator[KeyEvent]:
        for recorded in self.events:
            if self.realtime and recorded.delay > 0:
                await trio.sleep(recorded.delay)
            else:
                await trio.lowlevel.checkpoint()
            yield recorded.to_key_event()
