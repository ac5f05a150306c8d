# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

import attr

from .keybindings import SelectionKeys

if typing.TYPE_CHECKING:
    from .engine import HintEngine
    from .types import SessionId


@attr.frozen(kw_only=True)
class Preedit:
    text: str = attr.field(default="")
    cursor: typing.Optional[int] = attr.field(default=None)


class CandidateWord(typing.Protocol):
    @property
    def text(self) -> str:
        ...

    def select(self, session_id: SessionId) -> None:
        ...


@attr.frozen(kw_only=True)
class HintCandidateWord:
    text: str
    engine: HintEngine = attr.field(eq=False, repr=False)

    def select(self, session_id: SessionId):
        self.engine.frontend.reset_panel(session_id)
        self.engine.frontend.commit_string(session_id, self.text)
        self.engine.reset_state(session_id)


@attr.frozen(kw_only=True)
class CandidateList:
    words: tuple[CandidateWord, ...] = attr.field(default=(), converter=tuple)
    selection_keys: SelectionKeys = attr.field(factory=lambda: SelectionKeys(bindings=()))

    def __len__(self):
        return len(self.words)

    def __getitem__(self, index: int) -> CandidateWord:
        return self.words[index]

    def __iter__(self):
        return iter(self.words)

    @property
    def texts(self) -> list[str]:
        return [word.text for word in self.words]

    def labels(self) -> list[str]:
        "The hotkey label shown next to each candidate, e.g. 'Alt+1'."
        return [str(binding) for binding, _ in zip(self.selection_keys.bindings, self.words)]


@attr.frozen(kw_only=True)
class InputPanel:
    client_preedit: Preedit
    preedit: typing.Optional[Preedit] = attr.field(default=None)
    candidates: CandidateList = attr.field(factory=CandidateList)
