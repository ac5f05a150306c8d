# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import logging
import unicodedata
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterable, cast

import msgspec
import trio

from ..commontypes import KeyOutcome
from .hwtypes import AnnotatedKeyEvent, KeyEvent, ModifierAnnotation
from .keyboard_consts import LOCK_MODIFIERS, MOMENTARY_MODIFIERS, KeyCode, KeyPress

if TYPE_CHECKING:
    from ..editor.engine import HintEngine
    from ..editor.types import SessionId
    from ..settings import Settings

logger = logging.getLogger(__name__)


class DispatchedKeyEvent(msgspec.Struct, frozen=True):
    event: AnnotatedKeyEvent
    outcome: KeyOutcome


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: track modifier keydown/up and annotate keystream with current modifiers
class ModifierTracking(Section):
    def __init__(self):
        self.momentary_state = {key: False for key in MOMENTARY_MODIFIERS}
        self.lock_state = {key: False for key in LOCK_MODIFIERS}

    def _make_annotation(self):
        return ModifierAnnotation(
            alt=self.momentary_state[KeyCode.KEY_LEFTALT] or self.momentary_state[KeyCode.KEY_RIGHTALT],
            ctrl=self.momentary_state[KeyCode.KEY_LEFTCTRL] or self.momentary_state[KeyCode.KEY_RIGHTCTRL],
            meta=self.momentary_state[KeyCode.KEY_LEFTMETA] or self.momentary_state[KeyCode.KEY_RIGHTMETA],
            shift=self.momentary_state[KeyCode.KEY_LEFTSHIFT] or self.momentary_state[KeyCode.KEY_RIGHTSHIFT],
            capslock=self.lock_state[KeyCode.KEY_CAPSLOCK],
        )

    async def pump(self, source: trio.MemoryReceiveChannel[KeyEvent], sink: trio.MemorySendChannel[AnnotatedKeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                is_modifier = False
                if event.key in self.momentary_state:
                    is_modifier = True
                    self.momentary_state[event.key] = event.press is not KeyPress.RELEASED
                if event.key in self.lock_state:
                    is_modifier = True
                    if event.press is KeyPress.PRESSED:
                        self.lock_state[event.key] = not self.lock_state[event.key]
                await sink.send(
                    AnnotatedKeyEvent(
                        key=event.key,
                        press=event.press,
                        annotation=self._make_annotation(),
                        is_modifier=is_modifier,
                    )
                )


# stage 2: convert key event + modifier into character
class MakeCharacter(Section):
    def __init__(self, keymaps: dict[KeyCode, list[str]]):
        self.keymaps = keymaps

    async def pump(self, source: trio.MemoryReceiveChannel[AnnotatedKeyEvent], sink: trio.MemorySendChannel[AnnotatedKeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if self.keymaps.get(event.key):
                    keymap = self.keymaps[event.key]
                    is_shifted = event.annotation.shift
                    is_letter = unicodedata.category(keymap[0]).startswith("L")
                    if is_letter:
                        is_shifted ^= event.annotation.capslock
                    # a key with no shifted level types its base character
                    level = 1 if is_shifted and len(keymap) > 1 else 0
                    await sink.send(msgspec.structs.replace(event, character=keymap[level]))
                else:
                    await sink.send(event)


# stage 3: convert compose key to KEY_COMPOSE. Unlike the modifiers it stands in for,
# the compose key is something the engine has to see, so it is not marked as a modifier.
class ComposeKey(Section):
    def __init__(self, compose_key: KeyCode):
        self.compose_key = compose_key

    async def pump(self, source: trio.MemoryReceiveChannel[AnnotatedKeyEvent], sink: trio.MemorySendChannel[AnnotatedKeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if event.key == self.compose_key:
                    await sink.send(
                        AnnotatedKeyEvent(
                            key=KeyCode.KEY_COMPOSE,
                            press=event.press,
                            annotation=ModifierAnnotation(compose=True, capslock=event.annotation.capslock),
                        )
                    )
                else:
                    await sink.send(event)


# stage 4: hand each event to the engine. The channels have no buffer, so the next event
# is not received until the engine has finished with this one.
class HintDispatch(Section):
    def __init__(self, engine: HintEngine, session_id: SessionId):
        self.engine = engine
        self.session_id = session_id

    async def pump(self, source: trio.MemoryReceiveChannel[AnnotatedKeyEvent], sink: trio.MemorySendChannel[DispatchedKeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                outcome = self.engine.handle_key_event(self.session_id, event)
                await sink.send(DispatchedKeyEvent(event=event, outcome=outcome))


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_keystream(
    key_event_channel: trio.MemoryReceiveChannel[KeyEvent],
    settings: Settings,
    engine: HintEngine,
    session_id: SessionId,
):
    sections = [
        ModifierTracking(),
        MakeCharacter(settings.keymaps),
        ComposeKey(settings.compose_key),
        HintDispatch(engine, session_id),
    ]

    async with pump_all(key_event_channel, *sections) as keystream:
        yield cast(trio.MemoryReceiveChannel[DispatchedKeyEvent], keystream)
