# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import typing
from contextlib import aclosing

import pytest
import trio
from keyhint.commontypes import KeyOutcome
from keyhint.device.hwtypes import AnnotatedKeyEvent, KeyEvent, ModifierAnnotation
from keyhint.device.keyboard_consts import KeyCode, KeyPress
from keyhint.device.keystreams import ComposeKey, MakeCharacter, ModifierTracking, make_keystream, pump_all
from keyhint.device.recorded_keyboard import Replayer, keystrokes, load_recording, save_recording
from keyhint.editor.engine import HintEngine
from keyhint.hints import WordListHints
from keyhint.settings import Settings
from trio.lowlevel import checkpoint

T = typing.TypeVar("T")


async def make_async_source(
    items: collections.abc.Sequence[T],
):
    for item in items:
        await checkpoint()
        yield item


class CollectingFrontend:
    def __init__(self):
        self.commits = []
        self.preedits = []

    def commit_string(self, session_id, text):
        self.commits.append(text)

    def update_panel(self, session_id, panel):
        self.preedits.append(panel.client_preedit.text)

    def reset_panel(self, session_id):
        pass

    def supports_preedit(self, session_id):
        return True


@pytest.mark.trio
async def test_modifier_tracking_basics():
    async with (
        aclosing(
            make_async_source(
                [
                    KeyEvent(key=KeyCode.KEY_LEFTSHIFT, press=KeyPress.PRESSED),
                    KeyEvent(key=KeyCode.KEY_H, press=KeyPress.PRESSED),
                    KeyEvent(key=KeyCode.KEY_H, press=KeyPress.RELEASED),
                    KeyEvent(key=KeyCode.KEY_LEFTSHIFT, press=KeyPress.RELEASED),
                    KeyEvent(key=KeyCode.KEY_CAPSLOCK, press=KeyPress.PRESSED),
                    KeyEvent(key=KeyCode.KEY_CAPSLOCK, press=KeyPress.RELEASED),
                    KeyEvent(key=KeyCode.KEY_LEFTCTRL, press=KeyPress.PRESSED),
                    KeyEvent(key=KeyCode.KEY_W, press=KeyPress.PRESSED),
                ]
            )
        ) as keysource,
        pump_all(keysource, ModifierTracking()) as resultsource,
    ):
        results = [event async for event in resultsource]
        expected = [
            AnnotatedKeyEvent(
                key=KeyCode.KEY_LEFTSHIFT,
                press=KeyPress.PRESSED,
                annotation=ModifierAnnotation(shift=True),
                is_modifier=True,
            ),
            AnnotatedKeyEvent(key=KeyCode.KEY_H, press=KeyPress.PRESSED, annotation=ModifierAnnotation(shift=True)),
            AnnotatedKeyEvent(key=KeyCode.KEY_H, press=KeyPress.RELEASED, annotation=ModifierAnnotation(shift=True)),
            AnnotatedKeyEvent(
                key=KeyCode.KEY_LEFTSHIFT,
                press=KeyPress.RELEASED,
                annotation=ModifierAnnotation(),
                is_modifier=True,
            ),
            AnnotatedKeyEvent(
                key=KeyCode.KEY_CAPSLOCK,
                press=KeyPress.PRESSED,
                annotation=ModifierAnnotation(capslock=True),
                is_modifier=True,
            ),
            AnnotatedKeyEvent(
                key=KeyCode.KEY_CAPSLOCK,
                press=KeyPress.RELEASED,
                annotation=ModifierAnnotation(capslock=True),
                is_modifier=True,
            ),
            AnnotatedKeyEvent(
                key=KeyCode.KEY_LEFTCTRL,
                press=KeyPress.PRESSED,
                annotation=ModifierAnnotation(capslock=True, ctrl=True),
                is_modifier=True,
            ),
            AnnotatedKeyEvent(key=KeyCode.KEY_W, press=KeyPress.PRESSED, annotation=ModifierAnnotation(capslock=True, ctrl=True)),
        ]
        assert results == expected


@pytest.mark.trio
async def test_make_character_and_compose_key():
    settings = Settings.for_test()
    async with (
        aclosing(
            make_async_source(
                [
                    AnnotatedKeyEvent(key=KeyCode.KEY_A, press=KeyPress.PRESSED, annotation=ModifierAnnotation(shift=True)),
                    AnnotatedKeyEvent(key=KeyCode.KEY_A, press=KeyPress.PRESSED, annotation=ModifierAnnotation(capslock=True)),
                    AnnotatedKeyEvent(key=KeyCode.KEY_1, press=KeyPress.PRESSED, annotation=ModifierAnnotation(capslock=True)),
                    AnnotatedKeyEvent(key=KeyCode.KEY_RIGHTMETA, press=KeyPress.PRESSED, annotation=ModifierAnnotation(meta=True), is_modifier=True),
                    AnnotatedKeyEvent(key=KeyCode.KEY_LEFT, press=KeyPress.PRESSED),
                ]
            )
        ) as keysource,
        pump_all(keysource, MakeCharacter(settings.keymaps), ComposeKey(settings.compose_key)) as resultsource,
    ):
        results = [event async for event in resultsource]
        assert [event.character for event in results] == ["A", "A", "1", None, None]
        assert results[3] == AnnotatedKeyEvent(
            key=KeyCode.KEY_COMPOSE,
            press=KeyPress.PRESSED,
            annotation=ModifierAnnotation(compose=True),
        )
        assert not results[3].is_modifier
        assert results[4].key is KeyCode.KEY_LEFT


@pytest.mark.trio
async def test_make_character_single_level_keymap():
    keymaps = {KeyCode.KEY_A: ["a"], KeyCode.KEY_1: ["1"], KeyCode.KEY_B: []}
    async with (
        aclosing(
            make_async_source(
                [
                    AnnotatedKeyEvent(key=KeyCode.KEY_A, press=KeyPress.PRESSED, annotation=ModifierAnnotation(shift=True)),
                    AnnotatedKeyEvent(key=KeyCode.KEY_1, press=KeyPress.PRESSED, annotation=ModifierAnnotation(shift=True)),
                    AnnotatedKeyEvent(key=KeyCode.KEY_B, press=KeyPress.PRESSED, annotation=ModifierAnnotation(shift=True)),
                ]
            )
        ) as keysource,
        pump_all(keysource, MakeCharacter(keymaps)) as resultsource,
    ):
        results = [event async for event in resultsource]
        assert [event.character for event in results] == ["a", "1", None]


@pytest.mark.trio
async def test_dispatch_through_engine():
    settings = Settings.for_test(enable_word_hint=True)
    frontend = CollectingFrontend()
    engine = HintEngine(settings=settings, frontend=frontend, hints=WordListHints({"en": ["cat", "catalog"]}))
    events = [recorded.to_key_event() for recorded in keystrokes("KEY_C KEY_A KEY_T KEY_SPACE")]

    send_channel, receive_channel = trio.open_memory_channel(0)
    async with trio.open_nursery() as nursery:

        async def feed():
            async with send_channel:
                for event in events:
                    await send_channel.send(event)

        nursery.start_soon(feed)
        async with make_keystream(receive_channel, settings, engine, "session") as keystream:
            dispatched = [item async for item in keystream]

    presses = [item for item in dispatched if not item.event.is_release]
    assert [item.event.character for item in presses] == ["c", "a", "t", " "]
    assert [item.outcome for item in presses] == [KeyOutcome.CONSUMED] * 3 + [KeyOutcome.FORWARDED]
    assert all(item.outcome is KeyOutcome.FORWARDED for item in dispatched if item.event.is_release)
    assert frontend.preedits == ["c", "ca", "cat"]
    assert frontend.commits == ["cat"]


@pytest.mark.trio
async def test_replayer(tmp_path):
    path = tmp_path / "recording.json"
    save_recording(keystrokes("KEY_LEFTSHIFT KEY_H"), path)
    recording = load_recording(path)
    assert [(r.key, r.press) for r in recording] == [
        ("KEY_LEFTSHIFT", KeyPress.PRESSED),
        ("KEY_LEFTSHIFT", KeyPress.RELEASED),
        ("KEY_H", KeyPress.PRESSED),
        ("KEY_H", KeyPress.RELEASED),
    ]
    events = [event async for event in Replayer(recording).keystream()]
    assert events[0] == KeyEvent.pressed(KeyCode.KEY_LEFTSHIFT)
    assert events[-1] == KeyEvent.released(KeyCode.KEY_H)
