# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

import attr

from ..commontypes import KeyOutcome
from ..device.keyboard_consts import KeyCode
from . import chardata
from .buffer import InputBuffer
from .candidates import CandidateList, HintCandidateWord, InputPanel, Preedit
from .composes import ComposeInvalid, ComposeState, ComposeSucceeded
from .keybindings import HYPHEN_APOSTROPHE, KeyBinding, SelectionKeys, check_key_list

if typing.TYPE_CHECKING:
    import pygtrie

    from ..device.hwtypes import AnnotatedKeyEvent
    from ..settings import Settings
    from .types import Frontend, HintProvider, Notifier, SessionId


logger = logging.getLogger(__name__)

NOTIFICATION_CATEGORY = "keyhint-hint"
NOTIFICATION_TITLE = "Spell hint"


@attr.frozen(kw_only=True)
class EngineConfig:
    hint_trigger: tuple[KeyBinding, ...]
    selection_keys: SelectionKeys
    page_size: int
    max_buffer: int
    compose_sequences: pygtrie.Trie = attr.field(eq=False, repr=False)
    default_language: str
    enable_word_hint: bool

    @classmethod
    def from_settings(cls, settings: Settings):
        return cls(
            hint_trigger=tuple(settings.hint_trigger),
            selection_keys=SelectionKeys.for_modifier(settings.choose_modifier),
            page_size=settings.page_size,
            max_buffer=settings.max_buffer,
            compose_sequences=settings.compose_sequences,
            default_language=settings.default_language,
            enable_word_hint=settings.enable_word_hint,
        )


@attr.define(kw_only=True)
class SessionState:
    language: str
    compose: ComposeState
    enable_word_hint: bool = False
    buffer: InputBuffer = attr.field(factory=InputBuffer)
    candidates: typing.Optional[CandidateList] = None

    def reset(self):
        self.buffer.clear()
        self.candidates = None


# Sessions move between two states across events. Idle: hinting is off or the buffer is
# empty and no candidates are shown. Accumulating: hinting is on, the buffer holds text
# and its candidates are on screen. Commits happen inside a single call to
# handle_key_event and are never visible between events.
class HintEngine:
    config: EngineConfig

    def __init__(
        self,
        *,
        settings: Settings,
        frontend: Frontend,
        hints: typing.Optional[HintProvider] = None,
        notifier: typing.Optional[Notifier] = None,
    ):
        self.frontend = frontend
        self.hints = hints
        self.notifier = notifier
        self._sessions: dict[SessionId, SessionState] = {}
        self.reload_settings(settings)

    def reload_settings(self, settings: Settings):
        # Swapped in one assignment; sessions pick it up on their next event.
        self.config = EngineConfig.from_settings(settings)
        for state in self._sessions.values():
            state.compose.sequences = self.config.compose_sequences
        logger.debug("Loaded engine config %r", self.config)

    def state_for(self, session_id: SessionId) -> SessionState:
        state = self._sessions.get(session_id)
        if state is None:
            state = SessionState(
                language=self.config.default_language,
                compose=ComposeState(self.config.compose_sequences),
                enable_word_hint=self.config.enable_word_hint,
            )
            self._sessions[session_id] = state
        return state

    def set_language(self, session_id: SessionId, language: str):
        state = self.state_for(session_id)
        if state.language != language:
            self.commit_buffer(session_id)
            state.language = language

    def end_session(self, session_id: SessionId):
        self._sessions.pop(session_id, None)

    def has_dictionary(self, language: str) -> bool:
        return self.hints is not None and self.hints.has_dictionary(language)

    def handle_key_event(self, session_id: SessionId, event: AnnotatedKeyEvent) -> KeyOutcome:
        # by pass all key release, and all modifiers
        if event.is_release or event.is_modifier:
            return KeyOutcome.FORWARDED

        state = self.state_for(session_id)
        compose = state.compose.resolve(event)
        if isinstance(compose, ComposeInvalid):
            return KeyOutcome.CONSUMED
        composed = compose.result if isinstance(compose, ComposeSucceeded) else None

        if check_key_list(self.config.hint_trigger, event) and self.has_dictionary(state.language):
            self.toggle_word_hint(session_id)
            return KeyOutcome.CONSUMED

        if state.enable_word_hint and self.has_dictionary(state.language):
            if self._handle_hint_key(session_id, state, event, composed):
                return KeyOutcome.CONSUMED
            # if we reach here, just commit and discard buffer.
            self.commit_buffer(session_id)

        # and now we want to forward the key, as committed text if compose made something
        if composed is not None:
            self.frontend.commit_string(session_id, composed)
            return KeyOutcome.CONSUMED
        return KeyOutcome.FORWARDED

    def _handle_hint_key(self, session_id: SessionId, state: SessionState, event: AnnotatedKeyEvent, composed: typing.Optional[str]) -> bool:
        config = self.config
        if state.candidates is not None:
            index = config.selection_keys.index(event)
            if 0 <= index < len(state.candidates):
                self.select_candidate(session_id, index)
                return True

        buffer = state.buffer
        valid_character = chardata.is_valid_character(composed)
        valid_symbol = chardata.is_valid_symbol(event)

        if valid_character or valid_symbol or chardata.is_simple(event):
            if (
                valid_character
                or valid_symbol
                or chardata.is_letter(event)
                or (not buffer.empty and check_key_list(HYPHEN_APOSTROPHE, event))
            ):
                buffer.type(composed if composed is not None else event.character)
                if len(buffer) >= config.max_buffer:
                    logger.debug("Buffer reached %d characters, committing", config.max_buffer)
                    self.frontend.commit_string(session_id, buffer.user_input)
                    self.reset_state(session_id)
                    self.frontend.reset_panel(session_id)
                    return True
                self.update_candidates(session_id)
                return True
        elif event.key is KeyCode.KEY_BACKSPACE and not event.states:
            if buffer.backspace():
                self.update_candidates(session_id)
                return True
        return False

    def toggle_word_hint(self, session_id: SessionId):
        state = self.state_for(session_id)
        state.enable_word_hint = not state.enable_word_hint
        logger.debug("Word hint for %r is now %s", session_id, state.enable_word_hint)
        self.commit_buffer(session_id)
        if self.notifier is not None:
            self.notifier.notify(
                NOTIFICATION_CATEGORY,
                NOTIFICATION_TITLE,
                "Spell hint is enabled." if state.enable_word_hint else "Spell hint is disabled.",
            )

    def commit_buffer(self, session_id: SessionId):
        state = self.state_for(session_id)
        if not state.buffer.empty:
            self.frontend.commit_string(session_id, state.buffer.user_input)
            self.reset_state(session_id)
            self.frontend.reset_panel(session_id)

    def update_candidates(self, session_id: SessionId):
        state = self.state_for(session_id)
        buffer = state.buffer
        if buffer.empty:
            state.candidates = None
            self.frontend.reset_panel(session_id)
            return
        results = self.hints.suggest(state.language, buffer.user_input, self.config.page_size)
        state.candidates = CandidateList(
            words=[HintCandidateWord(text=result, engine=self) for result in results],
            selection_keys=self.config.selection_keys,
        )
        preedit = Preedit(text=buffer.user_input, cursor=buffer.cursor_by_char)
        self.frontend.update_panel(
            session_id,
            InputPanel(
                client_preedit=preedit,
                preedit=None if self.frontend.supports_preedit(session_id) else preedit,
                candidates=state.candidates,
            ),
        )

    def select_candidate(self, session_id: SessionId, index: int) -> bool:
        state = self.state_for(session_id)
        if state.candidates is None or not 0 <= index < len(state.candidates):
            logger.debug("Ignoring selection of candidate %d for %r", index, session_id)
            return False
        state.candidates[index].select(session_id)
        return True

    def reset_state(self, session_id: SessionId):
        state = self.state_for(session_id)
        state.reset()
        state.compose.reset()

    def reset_session(self, session_id: SessionId):
        self.reset_state(session_id)
        self.frontend.reset_panel(session_id)
