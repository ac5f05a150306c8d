from __future__ import annotations

import dataclasses
import logging
import re
import typing

from ..device.keyboard_consts import KeyCode

if typing.TYPE_CHECKING:
    import pygtrie

    from ..device.hwtypes import AnnotatedKeyEvent

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ComposeNothing:
    "The key is not part of a compose sequence; handle it normally."


@dataclasses.dataclass(frozen=True)
class ComposeInvalid:
    "The key was eaten by a compose sequence, either still collecting or just abandoned."

    aborted: bool = False


@dataclasses.dataclass(frozen=True)
class ComposeSucceeded:
    result: str


ComposeResult = ComposeNothing | ComposeInvalid | ComposeSucceeded

CODEPOINT_MATCHER = re.compile(r"^\+((?:[0-9A-Fa-f]){4})$")
PAD_FORMATTER = "{:0<5}".format


class ComposeState:
    active: bool
    devoured_characters: list[str]

    def __init__(self, sequences: pygtrie.Trie):
        self.sequences = sequences
        self.reset()

    def reset(self):
        self.active = False
        self.devoured_characters = []

    def _start(self):
        self.reset()
        self.active = True

    def _abort(self):
        logger.debug("Abandoning compose sequence %r", self.devoured_characters)
        self.reset()
        return ComposeInvalid(aborted=True)

    def actively_resolve(self, event: AnnotatedKeyEvent) -> ComposeResult:
        # compose again restarts the collecting
        if event.key is KeyCode.KEY_COMPOSE:
            logger.debug("Restarting compose collecting")
            self._start()
            return ComposeInvalid()
        if event.key is KeyCode.KEY_BACKSPACE or event.character is None:
            return self._abort()

        self.devoured_characters.append(event.character)
        can_be_compose_sequence = bool(self.sequences.has_node(self.devoured_characters))
        can_be_codepoint = bool(CODEPOINT_MATCHER.match(PAD_FORMATTER("".join(self.devoured_characters))))
        if not (can_be_compose_sequence or can_be_codepoint):
            return self._abort()
        if self.sequences.has_key(self.devoured_characters):
            # end of sequence
            result = self.sequences[self.devoured_characters]
            self.reset()
            return ComposeSucceeded(result=result)
        if codepoint_match := CODEPOINT_MATCHER.match("".join(self.devoured_characters)):
            self.reset()
            return ComposeSucceeded(result=chr(int(codepoint_match.group(1), base=16)))
        return ComposeInvalid()

    def resolve(self, event: AnnotatedKeyEvent) -> ComposeResult:
        if self.active:
            return self.actively_resolve(event)
        if event.key is KeyCode.KEY_COMPOSE:
            self._start()
            return ComposeInvalid()
        return ComposeNothing()
